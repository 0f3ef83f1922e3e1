import base64
import json
from typing import Any


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def loads(text: str) -> Any:
    """``json.loads`` without the NaN/Infinity extensions."""
    return json.loads(text, parse_constant=_reject_constant)


def encode_content(content: Any) -> str:
    """Pretty-print as JSON (2-space indent), then base64 the UTF-8 bytes."""
    text = json.dumps(content, indent=2, ensure_ascii=False, allow_nan=False)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(encoded: str) -> Any:
    # The contents API wraps base64 at 60 columns
    raw = base64.b64decode("".join(encoded.split()))
    return loads(raw.decode("utf-8"))
