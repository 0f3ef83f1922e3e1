import json

import streamlit as st

from content_committer.panel import PanelError, fetch_current_content, parse_editor_text, save_content

# -----------------------------
# Streamlit config
# -----------------------------
st.set_page_config(page_title="Content Admin", page_icon="📝", layout="wide")
st.title("📝 Content Admin")

# -----------------------------
# Read config from secrets
# -----------------------------
CONTENT_URL = st.secrets.get("CONTENT_URL", "").strip()    # e.g. https://<site>/content.json
FUNCTION_URL = st.secrets.get("FUNCTION_URL", "").strip()  # e.g. https://<app>.azurewebsites.net/api/save-content
FUNCTION_KEY = st.secrets.get("FUNCTION_KEY", "").strip()  # optional with anonymous auth

if not CONTENT_URL or not FUNCTION_URL:
    st.error("Please set CONTENT_URL and FUNCTION_URL in .streamlit/secrets.toml")
    st.stop()

st.caption("Source: published **content.json** → save-content function → GitHub commit")

# -----------------------------
# Load current content
# -----------------------------
@st.cache_data(ttl=60, show_spinner=True)
def load_content(url: str) -> dict:
    return fetch_current_content(url)

with st.sidebar:
    st.header("Source")
    st.write(f"**Content:** `{CONTENT_URL}`")
    st.write(f"**Function:** `{FUNCTION_URL}`")
    if st.button("Reload"):
        load_content.clear()

try:
    current = load_content(CONTENT_URL)
except PanelError as e:
    st.error(str(e))
    st.stop()

if not current:
    st.info("No content published yet. Saving will create content.json.")

# -----------------------------
# Edit & save
# -----------------------------
text = st.text_area(
    "content.json",
    value=json.dumps(current, indent=2, ensure_ascii=False),
    height=500,
    help="Must be a JSON object. It is committed as-is, pretty-printed.",
)

if st.button("Save", type="primary"):
    try:
        content = parse_editor_text(text)
        with st.spinner("Committing..."):
            result = save_content(FUNCTION_URL, content, function_key=FUNCTION_KEY)
    except PanelError as e:
        st.error(str(e))
    else:
        load_content.clear()
        st.success(f"Saved in commit `{result.get('commit', '?')}`")
