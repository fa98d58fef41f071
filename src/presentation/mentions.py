"""
Mention autocomplete — trigger detection, filtering, insertion, positioning.

Text layout is abstracted behind TextMeasurer so the popover position can be
computed (and tested) without a real layout engine: the host supplies an
object whose measure(text_before_cursor) returns the caret's CaretPoint.
"""
import logging
from typing import List, Optional, Protocol, Sequence, Tuple

from src.config.constants import (
    MAX_MENTION_QUERY,
    MENTION_POPOVER_GAP,
    MENTION_POPOVER_WIDTH,
    MENTION_TRIGGER,
)
from src.models.mention import CaretPoint, MentionTrigger, TeamMember

logger = logging.getLogger(__name__)


class TextMeasurer(Protocol):
    def measure(self, text_before_cursor: str) -> CaretPoint: ...


def find_mention_trigger(text: str, cursor: int) -> Optional[MentionTrigger]:
    """
    Find the '@' the user is currently typing a mention after.

    The '@' must be at the start of the text or follow whitespace, and no
    whitespace may sit between it and the cursor.
    """
    before = text[:cursor]
    for idx in range(len(before) - 1, -1, -1):
        char = before[idx]
        if char == MENTION_TRIGGER and (idx == 0 or before[idx - 1].isspace()):
            query = before[idx + 1:]
            if len(query) > MAX_MENTION_QUERY:
                return None
            return MentionTrigger(start_index=idx, query=query)
        if char.isspace():
            return None
    return None


def filter_members(members: Sequence[TeamMember], query: str) -> List[TeamMember]:
    """Case-insensitive substring match on names and email."""
    if not query:
        return list(members)
    needle = query.lower()
    return [m for m in members if needle in m.search_text]


def mention_token(member: TeamMember) -> str:
    return f"@[{member.display_name}]({member.id})"


def insert_mention(
    text: str,
    trigger: MentionTrigger,
    cursor: int,
    member: TeamMember,
) -> Tuple[str, int]:
    """
    Replace the typed '@query' with a mention token followed by a space.

    Returns:
        (new_text, new_cursor) with the cursor right after the space.
    """
    before = text[: trigger.start_index]
    after = text[cursor:]
    inserted = mention_token(member) + " "
    return before + inserted + after, len(before) + len(inserted)


def popover_position(
    text: str,
    trigger: MentionTrigger,
    measurer: TextMeasurer,
    container_width: float,
    popover_width: float = MENTION_POPOVER_WIDTH,
    gap: float = MENTION_POPOVER_GAP,
) -> Tuple[float, float]:
    """
    (top, left) for the suggestion popover, anchored under the '@'.

    Clamped so it never starts above/left of the box and never overflows the
    container's right edge.
    """
    caret: CaretPoint = measurer.measure(text[: trigger.start_index + 1])
    top = caret.y + gap
    left = min(caret.x, container_width - popover_width)
    return max(0.0, top), max(0.0, left)


class MentionMenu:
    """Keyboard selection over the filtered member list, one per composer."""

    def __init__(self, members: Sequence[TeamMember]):
        self.members = list(members)
        self.trigger: Optional[MentionTrigger] = None
        self.selected_index = 0

    @property
    def is_open(self) -> bool:
        return self.trigger is not None

    @property
    def options(self) -> List[TeamMember]:
        if self.trigger is None:
            return []
        return filter_members(self.members, self.trigger.query)

    def update(self, text: str, cursor: int) -> None:
        """Re-evaluate the trigger after the text or cursor changed."""
        previous = len(self.options)
        self.trigger = find_mention_trigger(text, cursor)
        if len(self.options) != previous:
            self.selected_index = 0

    def move(self, delta: int) -> int:
        """Move the selection with wrap-around; returns the new index."""
        count = len(self.options)
        if count == 0:
            return 0
        self.selected_index = (self.selected_index + delta) % count
        return self.selected_index

    def close(self) -> None:
        self.trigger = None
        self.selected_index = 0

    def choose(self, text: str, cursor: int) -> Optional[Tuple[str, int]]:
        """Insert the selected member; returns None when nothing is selectable."""
        options = self.options
        if self.trigger is None or not options:
            return None
        member = options[self.selected_index]
        result = insert_mention(text, self.trigger, cursor, member)
        logger.debug("Inserted mention for member %s", member.id)
        self.close()
        return result
