"""
Attachment tokens — `attachment:<id>` references inside rendered bodies.

The Inline Renderer only tags nodes whose href/src uses the attachment
scheme. Turning an id into a download URL is done afterwards by
resolve_attachments() with a caller-supplied resolver, so the memoized
pipeline output never embeds short-lived presigned URLs.
"""
import logging
from typing import Callable, List, Optional, Sequence

from src.config.constants import ATTACHMENT_SCHEME
from src.models.render_nodes import ImageNode, LinkNode, RenderTree

logger = logging.getLogger(__name__)

AttachmentResolver = Callable[[str], Optional[str]]


def attachment_id_of(url: str) -> Optional[str]:
    """Return <id> for an attachment:<id> URL, else None."""
    if not url.lower().startswith(ATTACHMENT_SCHEME):
        return None
    attachment_id = url[len(ATTACHMENT_SCHEME):].strip()
    return attachment_id or None


def _resolve_node(node, resolver: AttachmentResolver):
    if getattr(node, "attachment_id", None) is None:
        return node

    url = resolver(node.attachment_id)
    if not url:
        logger.debug("Attachment %s unresolved, keeping token", node.attachment_id)
        return node

    if isinstance(node, LinkNode):
        return node.model_copy(update={"href": url, "title": url})
    if isinstance(node, ImageNode):
        return node.model_copy(update={"src": url})
    return node


def resolve_lines(lines: Sequence[Sequence], resolver: AttachmentResolver) -> List[list]:
    """Return new lines with every resolvable attachment node rewritten."""
    return [[_resolve_node(node, resolver) for node in line] for line in lines]


def resolve_attachments(tree: RenderTree, resolver: AttachmentResolver) -> RenderTree:
    """
    Substitute resolved URLs into a render tree.

    Unresolved tokens are left as they are; the input tree is not modified.
    """
    update: dict = {"main": resolve_lines(tree.main, resolver)}
    if tree.quoted is not None:
        update["quoted"] = tree.quoted.model_copy(
            update={"lines": resolve_lines(tree.quoted.lines, resolver)}
        )
    if tree.signature is not None:
        update["signature"] = tree.signature.model_copy(
            update={"lines": resolve_lines(tree.signature.lines, resolver)}
        )
    return tree.model_copy(update=update)
