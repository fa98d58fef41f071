"""
PresentationState — per-instance UI toggles, never shared or persisted.
"""
from dataclasses import dataclass


@dataclass
class PresentationState:
    """Expanded flags for the three collapsible sections."""

    quoted_expanded: bool = False
    signature_expanded: bool = False
    source_expanded: bool = False

    def to_dict(self) -> dict:
        return {
            "quoted_expanded": self.quoted_expanded,
            "signature_expanded": self.signature_expanded,
            "source_expanded": self.source_expanded,
        }
