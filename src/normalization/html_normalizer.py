"""
HTML Normalizer — HTML-flavored body → plain text with inline tokens.

Applied as an ordered sequence of rewrites (later rules see the output of
earlier ones):
    1. Drop <style> / <script> elements with their content
    2. Block closings, <br>, <hr> → newlines (<hr> → "\\n---\\n")
    3. <a href> → [text](href), <img> → ![alt](src)
    4. Strip every remaining tag
    5. Decode the fixed entity table + numeric character references
    6. Whitespace cleanup (runs of spaces, per-line strip, max one blank line)

Fail-open: nothing here raises on malformed markup, unmatched fragments
pass through as literal text.
"""
import logging
import re

from src.config.constants import BLOCK_CLOSING_TAGS, HR_SEPARATOR, NAMED_ENTITIES

logger = logging.getLogger(__name__)

_STYLE_SCRIPT_RE = re.compile(r"<(style|script)\b[^>]*>[\s\S]*?</\1\s*>", re.IGNORECASE)
_HR_RE = re.compile(r"<hr\b[^>]*>", re.IGNORECASE)
_BR_RE = re.compile(r"<br\b[^>]*>", re.IGNORECASE)
_BLOCK_CLOSE_RE = re.compile(
    r"</(?:" + "|".join(BLOCK_CLOSING_TAGS) + r")\s*>",
    re.IGNORECASE,
)
_ANCHOR_RE = re.compile(r"<a\b([^>]*)>([\s\S]*?)</a\s*>", re.IGNORECASE)
_IMG_RE = re.compile(r"<img\b([^>]*)>", re.IGNORECASE)
_ANY_TAG_RE = re.compile(r"<[^>]+>")
_ENTITY_RE = re.compile(
    r"&(" + "|".join(re.escape(name) for name in NAMED_ENTITIES) + r");|&#(\d+);",
    re.IGNORECASE,
)


def _attr(attrs: str, name: str) -> str | None:
    """Read one attribute value (double, single or unquoted)."""
    match = re.search(
        r"""(?:^|\s)""" + re.escape(name) + r"""\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""",
        attrs,
        re.IGNORECASE,
    )
    if match is None:
        return None
    return next(g for g in match.groups() if g is not None)


def _image_token(attrs: str) -> str:
    src = _attr(attrs, "src")
    if not src:
        return ""
    alt = _attr(attrs, "alt") or ""
    return f"![{alt}]({src})"


def _rewrite_anchor(match: re.Match) -> str:
    href = _attr(match.group(1), "href")
    inner = match.group(2)
    if not href:
        return inner

    text = " ".join(_ANY_TAG_RE.sub(" ", inner).split())
    if not text:
        # Linked logo / banner: use the image's alt text as the label
        img = _IMG_RE.search(inner)
        text = (_attr(img.group(1), "alt") or "") if img else ""
    return f"[{text or href}]({href})"


def _decode_entity(match: re.Match) -> str:
    name, number = match.group(1), match.group(2)
    if name is not None:
        return NAMED_ENTITIES[name.lower()]
    try:
        return chr(int(number))
    except (ValueError, OverflowError):
        logger.warning("Invalid numeric character reference left as text: &#%s;", number)
        return match.group(0)


def decode_entities(text: str) -> str:
    """Decode the fixed named entities and &#NNN; references in one pass."""
    return _ENTITY_RE.sub(_decode_entity, text)


def collapse_whitespace(text: str) -> str:
    """Collapse horizontal runs, strip lines, cap blank lines at one."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t\f\v]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def normalize_html(content: str) -> str:
    """
    Convert HTML-flavored text to normalized plain text.

    Links and images survive as markdown-style tokens so the Inline Renderer
    can turn them back into clickable nodes.

    Args:
        content: Raw message body (HTML-flavored).

    Returns:
        Plain text; never raises.
    """
    if not content:
        return ""

    # 1. Non-content elements
    text = _STYLE_SCRIPT_RE.sub("", content)

    # 2. Block structure
    text = _HR_RE.sub(HR_SEPARATOR, text)
    text = _BR_RE.sub("\n", text)
    text = _BLOCK_CLOSE_RE.sub("\n", text)

    # 3. Links and images as inline tokens
    text = _ANCHOR_RE.sub(_rewrite_anchor, text)
    text = _IMG_RE.sub(lambda m: _image_token(m.group(1)), text)

    # 4. Everything else
    text = _ANY_TAG_RE.sub("", text)

    # 5. Entities
    text = decode_entities(text)

    # 6. Whitespace
    return collapse_whitespace(text)
