"""Word boundary scanning over a Source.

A "word" is a run of characters delimited on both sides by boundary characters
(tab and space by default). Scanning starts from a cursor range and grows it
one character at a time on each side that does not yet rest on a boundary.
"""

import logging

from implstub.models import Position, Range, Source

logger = logging.getLogger(__name__)

DEFAULT_BOUNDARIES = "\t "


def is_word_boundary(char: str, boundaries: str = DEFAULT_BOUNDARIES) -> bool:
    """Check whether char is a single word boundary character.

    Args:
        char: The character to test. Empty strings are never boundaries.
        boundaries: A string where each character is a possible word boundary.

    Returns:
        True if char is exactly one of the boundary characters.
    """
    return len(char) == 1 and char in boundaries


def _can_move_back(start: Position, doc_start: Position) -> bool:
    return start.character > 0 and start > doc_start


def _can_move_forward(source: Source, end: Position, doc_end: Position) -> bool:
    # An empty read means end already sits at the end of its line
    return end < doc_end and source.get_text(Range(end, end.translate(1))) != ""


def find_word_range(
    source: Source,
    doc_start: Position,
    doc_end: Position,
    cursor: Range,
    boundaries: str = DEFAULT_BOUNDARIES,
) -> Range | None:
    """Find the range of the word surrounding cursor.

    The scan range is expanded outward until its first and last characters are
    both boundaries, then shrunk by one character on each side so that the
    boundaries themselves are excluded. Expansion never crosses doc_start or
    doc_end, and neither end leaves the line it starts on. The caller is
    expected to pass the extent of the current line; wider bounds are accepted
    and behave as if clamped to the cursor's line.

    Args:
        source: Text to scan
        doc_start: Position the scan may not move before
        doc_end: Position the scan may not move past
        cursor: Starting range, typically a caret or the current selection
        boundaries: Characters that delimit a word

    Returns:
        The tight word Range, or None if the bounds were reached without both
        ends resting on a boundary or if no word lies between the boundaries
    """
    scan_range = cursor
    word = source.get_text(scan_range)

    while True:
        first = word[:1]
        last = word[-1:]

        if is_word_boundary(first, boundaries) and is_word_boundary(last, boundaries):
            break

        if scan_range.start == doc_start and scan_range.end == doc_end:
            logger.debug(f"Word scan from {cursor} exhausted bounds {doc_start}-{doc_end}")
            return None

        start = scan_range.start
        end = scan_range.end
        if not is_word_boundary(first, boundaries) and _can_move_back(start, doc_start):
            start = start.translate(-1)
        if not is_word_boundary(last, boundaries) and _can_move_forward(source, end, doc_end):
            end = end.translate(1)

        if start == scan_range.start and end == scan_range.end:
            # Pinned against the bounds on the side that still needs to grow
            logger.debug(f"Word scan from {cursor} stopped at {scan_range}")
            return None

        scan_range = Range(start, end)
        word = source.get_text(scan_range)

    if len(word) <= 2:
        # Nothing but boundaries: the caret sits in whitespace
        return None

    return Range(
        scan_range.start.translate(1),
        scan_range.end.translate(-1),
    )
