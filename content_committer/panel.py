"""Helpers for the Streamlit admin panel (app.py)."""
import requests

from .codec import loads
from .contents import DEFAULT_TIMEOUT


class PanelError(Exception):
    pass


def fetch_current_content(content_url: str, session=None, timeout: float = DEFAULT_TIMEOUT) -> dict:
    """Load the published content.json; a missing file is an empty document."""
    http = session or requests
    try:
        resp = http.get(content_url, timeout=timeout)
    except requests.RequestException as e:
        raise PanelError(f"Could not load current content: {e}") from e
    if resp.status_code == 404:
        return {}
    if not resp.ok:
        raise PanelError(f"Could not load current content: HTTP {resp.status_code}")
    try:
        data = resp.json()
    except ValueError as e:
        raise PanelError(f"Current content is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PanelError("Current content is not a JSON object")
    return data


def parse_editor_text(text: str) -> dict:
    try:
        data = loads(text)
    except (ValueError, RecursionError) as e:
        raise PanelError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PanelError("Content must be a JSON object")
    return data


def save_content(
    function_url: str,
    content: dict,
    function_key: str = "",
    session=None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict:
    """POST ``content`` to the save-content function and return its JSON reply."""
    http = session or requests
    headers = {"x-functions-key": function_key} if function_key else {}
    try:
        resp = http.post(function_url, json={"content": content}, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        raise PanelError(f"Save failed: {e}") from e

    try:
        data = resp.json()
    except ValueError:
        data = {}
    if not resp.ok:
        message = data.get("error") if isinstance(data, dict) else None
        raise PanelError(f"Save failed: {message or f'HTTP {resp.status_code}'}")
    return data
