"""Input sanitizers applied to free-text and URL fields at the schema layer."""

import re
from typing import Annotated
from urllib.parse import urlparse

from pydantic import AfterValidator

_TAG_RE = re.compile(r"<[^>]*>")
_EVENT_HANDLER_RE = re.compile(r"\bon\w+\s*=", re.IGNORECASE)
_PROTOCOL_RE = re.compile(
    r"\b(?:javascript|vbscript)\s*:|\bdata\s*:\s*text/html",
    re.IGNORECASE,
)


def strip_html(value: str) -> str:
    """Remove markup and script vectors from a plain-text field."""
    cleaned = value.replace("\x00", "")
    cleaned = _TAG_RE.sub("", cleaned)
    cleaned = _EVENT_HANDLER_RE.sub("", cleaned)
    cleaned = _PROTOCOL_RE.sub("", cleaned)
    cleaned = cleaned.replace("<", "").replace(">", "")
    return cleaned.strip()


def is_safe_url(value: str) -> bool:
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _require_safe_url(value: str) -> str:
    if not is_safe_url(value):
        raise ValueError("URL must be an absolute http(s) URL")
    return value.strip()


SanitizedStr = Annotated[str, AfterValidator(strip_html)]
SafeUrl = Annotated[str, AfterValidator(_require_safe_url)]
