"""
ProcessedMessage — memoizable result of the pipeline for one body.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from src.models.message_parts import ForwardInfo, SeparatedContent
from src.models.raw_body import RawBody
from src.models.render_nodes import RenderLine


@dataclass(frozen=True)
class ProcessedMessage:
    """Classification results and rendered lines, shared across renders."""

    raw: RawBody
    normalized: str                                     # Text after HTML normalization
    forward: Optional[ForwardInfo] = None
    separated: Optional[SeparatedContent] = None
    main_lines: Tuple[RenderLine, ...] = ()
    quoted_lines: Tuple[RenderLine, ...] = ()
    signature_lines: Tuple[RenderLine, ...] = ()
    max_url_length: int = 50

    @property
    def classification(self) -> str:
        """'forward' | 'signature' | 'plain' | 'empty'"""
        if self.forward is not None:
            return "forward"
        if self.separated is not None and self.separated.has_signature:
            return "signature"
        if not self.normalized.strip():
            return "empty"
        return "plain"

    @property
    def was_transformed(self) -> bool:
        return self.raw.was_transformed
