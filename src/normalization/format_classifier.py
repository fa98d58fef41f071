"""
Format Classifier — HTML-vs-plain detection and "was transformed" check.

Both checks are presence tests on the raw string, not parses: a plain-text
body that happens to contain "<p>" is classified as HTML.
"""
import re

from src.config.constants import HEADER_FIELD_NAMES, HTML_TAG_ALLOWLIST

_HTML_TAG_RE = re.compile(
    r"<(?:" + "|".join(HTML_TAG_ALLOWLIST) + r")\b[^>]*>",
    re.IGNORECASE,
)

_HEADER_LINE_RE = re.compile(
    r"^[ \t]*(?:" + "|".join(re.escape(h) for h in HEADER_FIELD_NAMES) + r"):",
    re.IGNORECASE | re.MULTILINE,
)


def is_html_flavored(body: str | None) -> bool:
    """True if the body contains an opening tag from the allow-list."""
    if not body:
        return False
    return _HTML_TAG_RE.search(body) is not None


def has_header_lines(body: str | None) -> bool:
    """True if any line starts with a mail header field name."""
    if not body:
        return False
    return _HEADER_LINE_RE.search(body) is not None


def was_transformed(body: str | None) -> bool:
    """Decide whether a "view original" control is worth offering."""
    return is_html_flavored(body) or has_header_lines(body)
