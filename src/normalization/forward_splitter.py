"""
Forward Splitter — detects vendor forwarding markers.

Markers are tried in a fixed priority order (Gmail, Apple Mail, Outlook,
generic) and the first match wins; there is no scoring. The marker line
splits the body into the user-authored preface and the quoted block, from
which From / Subject / Date (or Sent) headers are extracted independently.
"""
import logging
import re
from typing import List, Optional, Tuple

from src.config.constants import FORWARD_MARKERS
from src.models.message_parts import ForwardInfo

logger = logging.getLogger(__name__)

_MARKERS: List[Tuple[str, re.Pattern]] = [
    (style, re.compile(pattern, re.IGNORECASE | re.MULTILINE))
    for style, pattern in FORWARD_MARKERS
]

_FROM_RE = re.compile(r"^[ \t>*]*From:[ \t]*(.+?)[ \t]*$", re.IGNORECASE | re.MULTILINE)
_SUBJECT_RE = re.compile(r"^[ \t>*]*Subject:[ \t]*(.+?)[ \t]*$", re.IGNORECASE | re.MULTILINE)
_DATE_RE = re.compile(r"^[ \t>*]*(?:Date|Sent):[ \t]*(.+?)[ \t]*$", re.IGNORECASE | re.MULTILINE)


def find_forward_marker(body: str) -> Optional[Tuple[str, re.Match]]:
    """Return (style, match) for the highest-priority marker present."""
    for style, pattern in _MARKERS:
        match = pattern.search(body)
        if match is not None:
            return style, match
    return None


def _first_value(pattern: re.Pattern, block: str) -> Optional[str]:
    match = pattern.search(block)
    return match.group(1) if match else None


def extract_quoted_headers(quoted: str) -> dict:
    """Pull From / Subject / Date out of a quoted block, each optional."""
    return {
        "quoted_from": _first_value(_FROM_RE, quoted),
        "quoted_subject": _first_value(_SUBJECT_RE, quoted),
        "quoted_date": _first_value(_DATE_RE, quoted),
    }


def split_forward(body: str | None) -> Optional[ForwardInfo]:
    """
    Split a forwarded body at its marker line.

    Args:
        body: Plain-text body (already HTML-normalized where needed).

    Returns:
        ForwardInfo, or None when no marker is present.
    """
    if not body:
        return None

    found = find_forward_marker(body)
    if found is None:
        return None

    style, match = found
    user_message = body[: match.start()].strip()
    quoted_message = body[match.end():].strip()

    logger.debug(
        "Forward marker found: style=%s, preface=%d chars, quoted=%d chars",
        style,
        len(user_message),
        len(quoted_message),
    )

    return ForwardInfo(
        user_message=user_message,
        quoted_message=quoted_message,
        style=style,
        **extract_quoted_headers(quoted_message),
    )
