"""
Signature Segmenter — finds where a trailing signature / footer begins.

Lines are scanned from the end. The first "signature line" found (delimiter,
phone number, bare domain, social platform, image-only line, footer phrase)
triggers a bounded lookback that extends the block upward:

    - window: SIGNATURE_LOOKBACK lines, or MARKETING_LOOKBACK when the
      trigger is a marketing footer ("View in X", app stores, notifications)
    - a line extends the block if it is itself a signature line, or
        marketing case: a standalone image or a short unpunctuated line
        general case:   a name-shaped line (1-4 words, no closing punctuation,
                        not a greeting / closing word)
    - the first line failing every rule ends the lookback

Fail-open: a boundary at line 0, or a signature shorter than
MIN_SIGNATURE_CHARS, yields the whole body with no signature.
"""
import logging
import re
from typing import List, Optional

from src.config.constants import (
    CLOSING_PHRASES,
    DOMAIN_TLDS,
    FOOTER_PATTERNS,
    GREETING_WORDS,
    MARKETING_FOOTER_PATTERNS,
    MARKETING_LOOKBACK,
    MIN_SIGNATURE_CHARS,
    NAME_MAX_CHARS,
    NAME_MAX_WORDS,
    NAME_TERMINAL_PUNCTUATION,
    SENTENCE_PUNCTUATION,
    SHORT_FOOTER_LINE_CHARS,
    SIGNATURE_DELIMITERS,
    SIGNATURE_LOOKBACK,
    SOCIAL_PLATFORMS,
)
from src.models.message_parts import SeparatedContent

logger = logging.getLogger(__name__)

_DELIMITER_RE = re.compile(
    r"^(?:" + "|".join(re.escape(d) for d in SIGNATURE_DELIMITERS) + r")$"
)
_PHONE_RE = re.compile(
    r"(?<![\w/])(?:\+?\d{1,3}[\s.-]?)?(?:\(\d{2,4}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}(?![\w/])"
)
_DOMAIN_RE = re.compile(
    r"^(?:https?://)?(?:www\.)?[a-z0-9-]+(?:\.[a-z0-9-]+)*\.(?:"
    + "|".join(DOMAIN_TLDS)
    + r")/?$",
    re.IGNORECASE,
)
_SOCIAL_RE = re.compile(
    r"(?<![\w.])(?:" + "|".join(re.escape(p) for p in SOCIAL_PLATFORMS) + r")(?![\w])",
    re.IGNORECASE,
)
_IMAGE_ONLY_RE = re.compile(r"^!\[[^\]]*\]\([^)]+\)$")
_FOOTER_RES: List[re.Pattern] = [re.compile(p, re.IGNORECASE) for p in FOOTER_PATTERNS]
_MARKETING_RES: List[re.Pattern] = [re.compile(p, re.IGNORECASE) for p in MARKETING_FOOTER_PATTERNS]


# ======================================================================
# Line classification
# ======================================================================

def is_image_only(line: str) -> bool:
    return _IMAGE_ONLY_RE.match(line.strip()) is not None


def is_signature_line(line: str) -> bool:
    """True if the line looks like part of a signature or footer block."""
    stripped = line.strip()
    if not stripped:
        return False
    return (
        _DELIMITER_RE.match(stripped) is not None
        or _PHONE_RE.search(stripped) is not None
        or _DOMAIN_RE.match(stripped) is not None
        or _SOCIAL_RE.search(stripped) is not None
        or is_image_only(stripped)
        or any(p.search(stripped) for p in _FOOTER_RES)
    )


def is_marketing_footer_line(line: str) -> bool:
    """Narrower subset: app-style footers that justify the wide lookback."""
    stripped = line.strip()
    return bool(stripped) and any(p.search(stripped) for p in _MARKETING_RES)


def looks_like_name(line: str) -> bool:
    """1-4 words, short, no closing punctuation, not a greeting or closing."""
    stripped = line.strip()
    if not stripped or len(stripped) >= NAME_MAX_CHARS:
        return False
    if stripped[-1] in NAME_TERMINAL_PUNCTUATION:
        return False

    words = stripped.split()
    if not 1 <= len(words) <= NAME_MAX_WORDS:
        return False

    normalized = stripped.lower().rstrip(",.!")
    if normalized in CLOSING_PHRASES:
        return False
    return words[0].lower().rstrip(",") not in GREETING_WORDS


def _is_short_footer_line(line: str) -> bool:
    stripped = line.strip()
    return (
        bool(stripped)
        and len(stripped) < SHORT_FOOTER_LINE_CHARS
        and stripped[-1] not in SENTENCE_PUNCTUATION
    )


# ======================================================================
# Boundary search
# ======================================================================

def _find_trigger(lines: List[str]) -> Optional[int]:
    for idx in range(len(lines) - 1, -1, -1):
        if is_signature_line(lines[idx]):
            return idx
    return None


def find_signature_start(lines: List[str]) -> Optional[int]:
    """
    Index of the first signature line, or None when there is no signature.

    A blank line ends the lookback in both windows, so the block never
    reaches back past a paragraph break.
    """
    trigger = _find_trigger(lines)
    if trigger is None:
        return None

    marketing = is_marketing_footer_line(lines[trigger])
    window = MARKETING_LOOKBACK if marketing else SIGNATURE_LOOKBACK
    start = trigger

    for idx in range(trigger - 1, max(-1, trigger - window - 1), -1):
        line = lines[idx]
        if not line.strip():
            break
        if is_signature_line(line):
            start = idx
        elif marketing and (is_image_only(line) or _is_short_footer_line(line)):
            start = idx
        elif not marketing and looks_like_name(line):
            start = idx
        else:
            break

    logger.debug(
        "Signature trigger at line %d (marketing=%s), block starts at line %d",
        trigger,
        marketing,
        start,
    )
    return start


def separate_signature(body: str | None) -> SeparatedContent:
    """
    Split a non-forwarded body into main body and optional signature.

    Args:
        body: Plain-text body.

    Returns:
        SeparatedContent. When no usable signature is found main_body is the
        input unchanged and signature is None.
    """
    if not body or not body.strip():
        return SeparatedContent(main_body="")

    lines = body.split("\n")
    start = find_signature_start(lines)
    if start is None or start == 0:
        return SeparatedContent(main_body=body)

    signature = "\n".join(lines[start:]).strip()
    if len(signature) < MIN_SIGNATURE_CHARS:
        return SeparatedContent(main_body=body)

    main_body = "\n".join(lines[:start]).strip()
    return SeparatedContent(main_body=main_body, signature=signature)
