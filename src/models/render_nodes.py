"""
Typed Pydantic models for the render tree handed to the host UI.

A message renders as ordered lines; each line is an ordered sequence of
RenderNode (text span, link, or image). Sections group lines for the two
collapsible regions (quoted forward, signature) and the raw-source view.

All node models are frozen so memoized lines can be shared between
independent render instances.
"""
from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Render nodes
# =============================================================================


class TextNode(BaseModel):
    """A run of plain text, painted literally."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class LinkNode(BaseModel):
    """
    A hyperlink.

    display_text may be a truncated form of href for bare URLs; title always
    carries the full, untruncated URL for the hover tooltip.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["link"] = "link"
    href: str
    display_text: str
    title: str = Field(..., description="Untruncated URL shown on hover.")
    attachment_id: Optional[str] = Field(None, description="Set when href is an attachment:<id> token.")


class ImageNode(BaseModel):
    """An inline image."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    src: str
    alt: str = ""
    attachment_id: Optional[str] = Field(None, description="Set when src is an attachment:<id> token.")


RenderNode = Annotated[Union[TextNode, LinkNode, ImageNode], Field(discriminator="kind")]

RenderLine = Tuple[RenderNode, ...]


# =============================================================================
# Sections and tree
# =============================================================================


class QuotedSection(BaseModel):
    """Collapsible quoted block of a forwarded message."""

    expanded: bool = False
    headers: Dict[str, str] = Field(default_factory=dict, description="'from' | 'subject' | 'date' when found.")
    lines: List[List[RenderNode]] = Field(default_factory=list, description="Empty while collapsed.")


class SignatureSection(BaseModel):
    """Collapsible trailing signature or marketing footer."""

    expanded: bool = False
    lines: List[List[RenderNode]] = Field(default_factory=list, description="Empty while collapsed.")


class SourceSection(BaseModel):
    """Raw-source escape hatch; text is the original body, byte for byte."""

    expanded: bool = False
    text: Optional[str] = Field(None, description="Only present while expanded.")


class RenderTree(BaseModel):
    """Everything the host needs to paint one message body."""

    main: List[List[RenderNode]]
    quoted: Optional[QuotedSection] = None
    signature: Optional[SignatureSection] = None
    source: Optional[SourceSection] = None
    was_transformed: bool = False
    pipeline_version: str
