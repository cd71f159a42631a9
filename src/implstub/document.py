"""In-memory text document implementing the Source protocol.

Stands in for an editor buffer: positions are addressed by (line, character),
text is retrieved per Range, and generated code is inserted at a Position.
"""

from pathlib import Path

from implstub.models import Position, Range


class TextDocument:
    """A text buffer addressed by zero-based lines and characters.

    Lines are separated by "\\n"; a trailing "\\r" belongs to the line ending and
    is not addressable as a character.
    """

    def __init__(self, text: str, path: Path | None = None):
        self.path = path
        self._set_text(text)

    @classmethod
    def from_file(cls, path: Path) -> "TextDocument":
        """Load a document from disk.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        # newline="" keeps \r\n intact so save() round-trips the file
        with open(path, "r", encoding="utf-8", newline="") as f:
            return cls(f.read(), path=path)

    def _set_text(self, text: str) -> None:
        self.text = text
        self._lines = text.split("\n")
        self._line_offsets = []
        offset = 0
        for line in self._lines:
            self._line_offsets.append(offset)
            offset += len(line) + 1

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_text(self, line: int) -> str:
        """Return the content of a line without its line ending."""
        if line >= self.line_count:
            return ""
        return self._lines[line].removesuffix("\r")

    def line_range(self, line: int) -> Range:
        """Return the Range spanning a whole line, excluding its line ending."""
        return Range.from_coords(line, 0, line, len(self.line_text(line)))

    def offset_at(self, position: Position) -> int:
        """Convert a Position into an offset into self.text.

        Positions past the end of a line are clamped to the line end; lines past
        the end of the document are clamped to the end of the text.
        """
        if position.line >= self.line_count:
            return len(self.text)
        character = min(position.character, len(self.line_text(position.line)))
        return self._line_offsets[position.line] + character

    def get_text(self, range: Range) -> str:
        """Return exactly the characters spanned by range."""
        return self.text[self.offset_at(range.start):self.offset_at(range.end)]

    def insert(self, position: Position, text: str) -> None:
        """Insert text verbatim at position."""
        offset = self.offset_at(position)
        self._set_text(self.text[:offset] + text + self.text[offset:])

    def save(self) -> None:
        """Write the document back to the file it was loaded from."""
        if self.path is None:
            raise ValueError("Document has no path to save to")
        with open(self.path, "w", encoding="utf-8", newline="") as f:
            f.write(self.text)
