"""
RawBody — the untransformed message body kept for the "view original" toggle.
"""
from dataclasses import dataclass

from src.normalization.format_classifier import is_html_flavored, was_transformed


@dataclass(frozen=True)
class RawBody:
    """Original stored message body. Never mutated, never re-rendered."""

    content: str

    @property
    def is_html(self) -> bool:
        return is_html_flavored(self.content)

    @property
    def was_transformed(self) -> bool:
        """True when the rendered view differs from the stored text."""
        return was_transformed(self.content)

    def __len__(self) -> int:
        return len(self.content)
