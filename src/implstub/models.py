from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, order=True)
class Position:
    """Represents a location in a text buffer (0-indexed line and character)."""
    line: int
    character: int

    def __post_init__(self):
        if self.line < 0:
            raise ValueError(f"line must be non-negative, got {self.line}")
        if self.character < 0:
            raise ValueError(f"character must be non-negative, got {self.character}")

    def translate(self, character_delta: int) -> "Position":
        """Return a new Position moved by character_delta on the same line."""
        return Position(self.line, self.character + character_delta)


@dataclass(frozen=True)
class Range:
    """Represents a span between two positions, start <= end in document order."""
    start: Position
    end: Position

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    @classmethod
    def from_coords(
        cls,
        start_line: int,
        start_character: int,
        end_line: int,
        end_character: int,
    ) -> "Range":
        """Build a Range from four plain integers."""
        return cls(
            Position(start_line, start_character),
            Position(end_line, end_character),
        )

    @property
    def is_empty(self) -> bool:
        """True for a zero-width range (a caret)."""
        return self.start == self.end


class Source(Protocol):
    """Anything that can return the text spanned by a Range."""

    def get_text(self, range: Range) -> str:
        ...


@dataclass
class ParsedInput:
    """Validated user input for a stub request."""
    interface_type: str
    recv_spec: str | None = None  # None when the receiver should be inferred


@dataclass
class ImplResult:
    """Outcome of a successful stub generation."""
    args: list[str]
    insert_position: Position
    text: str
