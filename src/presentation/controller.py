"""
Presentation Controller — per-instance toggles and render tree composition.

One controller per rendered message instance. It owns its own
PresentationState (three booleans, all False on creation) and reads the
shared, immutable ProcessedMessage. Toggles never affect other instances.
"""
import logging
from typing import List, Optional

from src.config import settings
from src.config.constants import PIPELINE_VERSION
from src.models.presentation_state import PresentationState
from src.models.processed_message import ProcessedMessage
from src.models.render_nodes import QuotedSection, RenderTree, SignatureSection, SourceSection
from src.processing.metrics import record_render_tree_violation, record_toggle
from src.processing.output_builder import build_render_tree_dict, lines_to_lists
from src.processing.validation import validate_render_tree

logger = logging.getLogger(__name__)


class PresentationController:
    """
    Collapsible-section state machine for one message body.

    Visibility rules:
        quoted toggle     → only when the body is a forward
        signature toggle  → only when a signature was separated
        source toggle     → only when the body was transformed AND the host
                            opted in with show_source_toggle
    """

    def __init__(self, message: ProcessedMessage, show_source_toggle: bool = False):
        self.message = message
        self.show_source_toggle = show_source_toggle
        self.state = PresentationState()

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------
    @property
    def has_quoted_toggle(self) -> bool:
        return self.message.forward is not None

    @property
    def has_signature_toggle(self) -> bool:
        separated = self.message.separated
        return separated is not None and separated.signature is not None

    @property
    def has_source_toggle(self) -> bool:
        return self.show_source_toggle and self.message.was_transformed

    @property
    def visible_toggles(self) -> List[str]:
        toggles = []
        if self.has_quoted_toggle:
            toggles.append("quoted")
        if self.has_signature_toggle:
            toggles.append("signature")
        if self.has_source_toggle:
            toggles.append("source")
        return toggles

    # ------------------------------------------------------------------
    # Toggles
    # ------------------------------------------------------------------
    def _flip(self, section: str, visible: bool, attr: str) -> bool:
        if not visible:
            logger.debug("Ignoring %s toggle: section not available", section)
            return False
        value = not getattr(self.state, attr)
        setattr(self.state, attr, value)
        record_toggle(section)
        return value

    def toggle_quoted(self) -> bool:
        return self._flip("quoted", self.has_quoted_toggle, "quoted_expanded")

    def toggle_signature(self) -> bool:
        return self._flip("signature", self.has_signature_toggle, "signature_expanded")

    def toggle_source(self) -> bool:
        return self._flip("source", self.has_source_toggle, "source_expanded")

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------
    def _quoted_section(self) -> Optional[QuotedSection]:
        if not self.has_quoted_toggle:
            return None
        expanded = self.state.quoted_expanded
        return QuotedSection(
            expanded=expanded,
            headers=self.message.forward.headers,
            lines=lines_to_lists(self.message.quoted_lines) if expanded else [],
        )

    def _signature_section(self) -> Optional[SignatureSection]:
        if not self.has_signature_toggle:
            return None
        expanded = self.state.signature_expanded
        return SignatureSection(
            expanded=expanded,
            lines=lines_to_lists(self.message.signature_lines) if expanded else [],
        )

    def _source_section(self) -> Optional[SourceSection]:
        if not self.has_source_toggle:
            return None
        expanded = self.state.source_expanded
        return SourceSection(
            expanded=expanded,
            text=self.message.raw.content if expanded else None,
        )

    def render(self) -> RenderTree:
        """Compose the render tree for the current toggle state."""
        return RenderTree(
            main=lines_to_lists(self.message.main_lines),
            quoted=self._quoted_section(),
            signature=self._signature_section(),
            source=self._source_section(),
            was_transformed=self.message.was_transformed,
            pipeline_version=PIPELINE_VERSION,
        )

    def to_dict(self) -> dict:
        data = build_render_tree_dict(self.render())
        if settings.VALIDATE_RENDER_TREE:
            result = validate_render_tree(data)
            if not result.valid:
                logger.warning("Render tree failed validation: %s", result.summary)
                record_render_tree_violation()
        return data
