"""
ValidationResult for a serialized render tree.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ValidationResult:
    """Schema and section-rule findings for one render tree dict."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    data: Optional[dict] = None

    @property
    def summary(self) -> str:
        if self.valid and not self.warnings:
            return "ok"
        return "; ".join(self.errors + self.warnings)
