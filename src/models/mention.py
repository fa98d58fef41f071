"""
Team member and mention-trigger models for the comment composer.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TeamMember:
    """A mentionable agent."""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.first_name or self.last_name:
            return " ".join(p for p in (self.first_name, self.last_name) if p)
        return self.email.split("@")[0]

    @property
    def initials(self) -> str:
        if self.first_name and self.last_name:
            return f"{self.first_name[0]}{self.last_name[0]}".upper()
        if self.first_name:
            return self.first_name[:2].upper()
        return self.email[:2].upper()

    @property
    def search_text(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''} {self.email}".lower()


@dataclass(frozen=True)
class MentionTrigger:
    """An '@' being typed: its index in the text and the query after it."""

    start_index: int
    query: str


@dataclass(frozen=True)
class CaretPoint:
    """Caret position relative to the input box, as reported by a measurer."""

    x: float
    y: float
