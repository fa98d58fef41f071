"""
Inline Renderer — text block → lines of RenderNode.

Each line is handled independently, in three nested passes:
    1. markdown images  ![alt](url)
    2. markdown links   [text](url)       (in the text around images)
    3. bare http(s) URLs                  (in the text around links)
Bare URLs ending in an image extension become images, the rest become
links with truncated display text. A line producing no nodes renders as a
single non-breaking space so blank lines keep their height.
"""
import logging
import re
from typing import List, Tuple

from src.config.constants import DEFAULT_IMAGE_ALT, IMAGE_EXTENSIONS, NBSP
from src.config.settings import MAX_URL_DISPLAY_LENGTH
from src.models.render_nodes import ImageNode, LinkNode, RenderLine, TextNode
from src.rendering.attachments import attachment_id_of
from src.rendering.url_truncation import truncate_url

logger = logging.getLogger(__name__)

_MD_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_MD_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_BARE_URL_RE = re.compile(r"https?://[^\s<>\"'()\[\]]+", re.IGNORECASE)
_IMAGE_URL_RE = re.compile(
    r"\.(?:" + "|".join(IMAGE_EXTENSIONS) + r")(?:\?\S*)?$",
    re.IGNORECASE,
)
_TRAILING_PUNCTUATION = ".,;:!?"


def _image(src: str, alt: str) -> ImageNode:
    src = src.strip()
    return ImageNode(src=src, alt=alt or DEFAULT_IMAGE_ALT, attachment_id=attachment_id_of(src))


def _link(href: str, display_text: str) -> LinkNode:
    href = href.strip()
    return LinkNode(
        href=href,
        display_text=display_text,
        title=href,
        attachment_id=attachment_id_of(href),
    )


def _text(nodes: list, text: str) -> None:
    if text:
        nodes.append(TextNode(text=text))


def is_image_url(url: str) -> bool:
    return _IMAGE_URL_RE.search(url) is not None


def _split_bare_urls(text: str, max_url_length: int) -> list:
    nodes: list = []
    cursor = 0
    for match in _BARE_URL_RE.finditer(text):
        url = match.group(0).rstrip(_TRAILING_PUNCTUATION)
        _text(nodes, text[cursor:match.start()])
        if is_image_url(url):
            nodes.append(_image(url, ""))
        else:
            nodes.append(_link(url, truncate_url(url, max_url_length)))
        cursor = match.start() + len(url)
    _text(nodes, text[cursor:])
    return nodes


def _split_links(text: str, max_url_length: int) -> list:
    nodes: list = []
    cursor = 0
    for match in _MD_LINK_RE.finditer(text):
        nodes.extend(_split_bare_urls(text[cursor:match.start()], max_url_length))
        nodes.append(_link(match.group(2), match.group(1)))
        cursor = match.end()
    nodes.extend(_split_bare_urls(text[cursor:], max_url_length))
    return nodes


def render_line(line: str, max_url_length: int = MAX_URL_DISPLAY_LENGTH) -> RenderLine:
    """Render one line of text into an ordered tuple of nodes."""
    nodes: list = []
    cursor = 0
    for match in _MD_IMAGE_RE.finditer(line):
        nodes.extend(_split_links(line[cursor:match.start()], max_url_length))
        nodes.append(_image(match.group(2), match.group(1)))
        cursor = match.end()
    nodes.extend(_split_links(line[cursor:], max_url_length))

    if not nodes:
        return (TextNode(text=NBSP),)
    return tuple(nodes)


def render_block(text: str | None, max_url_length: int = MAX_URL_DISPLAY_LENGTH) -> Tuple[RenderLine, ...]:
    """
    Render a text block line by line.

    Args:
        text: Plain text (may contain markdown image/link tokens).
        max_url_length: Display budget for bare URLs.

    Returns:
        One RenderLine per input line; empty input gives no lines.
    """
    if not text:
        return ()
    lines: List[RenderLine] = [render_line(line, max_url_length) for line in text.split("\n")]
    logger.debug("Rendered %d lines", len(lines))
    return tuple(lines)


def plain_text_of(line: RenderLine) -> str:
    """Flatten a rendered line back to the visible text (for logs and tests)."""
    parts = []
    for node in line:
        if isinstance(node, TextNode):
            parts.append(node.text)
        elif isinstance(node, LinkNode):
            parts.append(node.display_text)
        elif isinstance(node, ImageNode):
            parts.append(f"[{node.alt}]")
    return "".join(parts)
