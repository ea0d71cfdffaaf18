"""Line token definitions for the notemark line classifier.

The classifier turns every source line into exactly one Line, tagged with a
LineKind. The block assembler consumes these tokens in a single dispatch
loop.

Thread Safety:
Line is frozen (immutable) and safe to share across threads.
LineKind is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class LineKind(Enum):
    """Line kinds, listed in classification priority order."""

    BLANK = auto()
    FENCE = auto()  # ```lang
    HEADING = auto()  # # Heading
    THEMATIC_BREAK = auto()  # ---, ***, ___
    QUOTE = auto()  # > quoted
    TASK_ITEM = auto()  # - [ ] task
    BULLET_ITEM = auto()  # - item
    ORDERED_ITEM = auto()  # 1. item
    TABLE_ROW = auto()  # | cell | cell |
    PARAGRAPH = auto()

    @property
    def is_list_item(self) -> bool:
        return self in _LIST_KINDS


_LIST_KINDS = frozenset((LineKind.TASK_ITEM, LineKind.BULLET_ITEM, LineKind.ORDERED_ITEM))


@dataclass(frozen=True, slots=True)
class Line:
    """A classified source line.

    Attributes:
        kind: What the line is
        raw: The line exactly as it appeared (without newline)
        content: Payload after the block marker (heading text, item text,
            quote text, fence language)
        lineno: 1-based line number
        level: Heading level (HEADING only)
        checked: Checkbox state (TASK_ITEM only)
        number: Item number (ORDERED_ITEM only)

    """

    kind: LineKind
    raw: str
    content: str = ""
    lineno: int = 0
    level: int = 0
    checked: bool = False
    number: int = 0

    def __repr__(self) -> str:
        return f"Line({self.kind.name}, {self.content!r}, {self.lineno})"
