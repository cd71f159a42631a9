"""Tests for word boundary scanning."""

import pytest

from implstub.document import TextDocument
from implstub.models import Position, Range
from implstub.scanner import find_word_range, is_word_boundary


class LineSource:
    """Minimal single-line Source that records every range read."""

    def __init__(self, text: str):
        self.text = text
        self.reads = []

    def get_text(self, range: Range) -> str:
        self.reads.append(range)
        return self.text[range.start.character:range.end.character]


def scan_line(text: str, start: int, end: int | None = None, boundaries: str = "\t "):
    """Scan a one-line source with the whole line as bounds."""
    source = LineSource(text)
    cursor = Range.from_coords(0, start, 0, start if end is None else end)
    return find_word_range(
        source, Position(0, 0), Position(0, len(text)), cursor, boundaries
    )


class TestIsWordBoundary:
    """Tests for is_word_boundary."""

    @pytest.mark.parametrize("char", [" ", "\t"])
    def test_default_boundaries(self, char):
        assert is_word_boundary(char)

    @pytest.mark.parametrize("char", ["a", "\n", "*", "."])
    def test_non_boundaries(self, char):
        assert not is_word_boundary(char)

    def test_empty_string_is_not_a_boundary(self):
        assert not is_word_boundary("")

    def test_multiple_characters_are_not_a_boundary(self):
        assert not is_word_boundary("  ")

    def test_custom_boundaries(self):
        assert is_word_boundary("(", boundaries=" ()")
        assert not is_word_boundary("\t", boundaries=" ()")


class TestFindWordRange:
    """Tests for find_word_range on words delimited by boundaries."""

    def test_caret_before_word(self):
        """Test a caret right before the word, padded by two spaces."""
        assert scan_line("  File  ", 2) == Range.from_coords(0, 2, 0, 6)

    def test_caret_inside_word(self):
        assert scan_line("  File  ", 4) == Range.from_coords(0, 2, 0, 6)

    def test_caret_at_word_end(self):
        assert scan_line("  File  ", 6) == Range.from_coords(0, 2, 0, 6)

    def test_word_in_declaration(self):
        assert scan_line("type File struct{}", 6) == Range.from_coords(0, 5, 0, 9)

    def test_tab_boundaries(self):
        assert scan_line("\tFile\t", 2) == Range.from_coords(0, 1, 0, 5)

    def test_boundaries_at_line_edges(self):
        """Test a word whose boundaries are the first and last characters of the line."""
        assert scan_line(" File ", 3) == Range.from_coords(0, 1, 0, 5)

    def test_selection_touching_left_boundary(self):
        """Test an asymmetric selection that already starts on a boundary."""
        assert scan_line("  File  ", 1, 4) == Range.from_coords(0, 2, 0, 6)

    def test_selection_covering_word(self):
        assert scan_line("type File struct{}", 5, 9) == Range.from_coords(0, 5, 0, 9)

    def test_custom_boundaries(self):
        assert scan_line("call(File) x", 6, boundaries=" ()") == Range.from_coords(0, 5, 0, 9)

    def test_source_is_only_read(self):
        source = LineSource("  File  ")
        cursor = Range.from_coords(0, 2, 0, 2)

        find_word_range(source, Position(0, 0), Position(0, 8), cursor)

        assert source.text == "  File  "
        assert source.reads[0] == cursor

    def test_idempotent(self):
        first = scan_line("type File struct{}", 7)
        second = scan_line("type File struct{}", 7)
        assert first == second

    def test_multi_line_document(self):
        doc = TextDocument("package main\n\ntype File struct{}\n")
        line = doc.line_range(2)

        word_range = find_word_range(doc, line.start, line.end, Range.from_coords(2, 7, 2, 7))

        assert word_range == Range.from_coords(2, 5, 2, 9)
        assert doc.get_text(word_range) == "File"


class TestFindWordRangeNotFound:
    """Tests for scans that exhaust their bounds, including bounds spanning lines."""

    def test_word_spans_whole_line(self):
        assert scan_line("File", 2) is None

    def test_word_at_line_start(self):
        assert scan_line("File struct", 1) is None

    def test_word_at_line_end(self):
        assert scan_line("type File", 7) is None

    def test_caret_in_whitespace(self):
        assert scan_line("a    b", 2) is None

    def test_empty_line(self):
        assert scan_line("", 0) is None

    def test_never_reads_outside_bounds(self):
        source = LineSource("xx File struct")
        doc_start = Position(0, 3)
        doc_end = Position(0, 9)

        result = find_word_range(source, doc_start, doc_end, Range.from_coords(0, 5, 0, 5))

        assert result is None
        for r in source.reads:
            assert r.start >= doc_start
            assert r.end <= doc_end

    def test_bounds_spanning_later_lines(self):
        """Test that bounds past the cursor's line stop at the line end."""
        doc = TextDocument("File\nx y")

        result = find_word_range(
            doc, Position(0, 0), Position(1, 3), Range.from_coords(0, 2, 0, 2)
        )

        assert result is None

    def test_bounds_spanning_earlier_lines(self):
        """Test that a caret at column 0 below doc_start never moves before the line."""
        doc = TextDocument("a b\nFile c")

        result = find_word_range(
            doc, Position(0, 0), Position(1, 6), Range.from_coords(1, 0, 1, 0)
        )

        assert result is None

    def test_multi_line_bounds_still_find_word(self):
        doc = TextDocument("package main\ntype File struct{}\n")

        result = find_word_range(
            doc, Position(0, 0), Position(2, 0), Range.from_coords(1, 6, 1, 6)
        )

        assert result == Range.from_coords(1, 5, 1, 9)
