"""Parse stub requests and infer receiver specs from the word under the cursor."""

import logging
import re

from implstub.errors import NoIdentifierError
from implstub.models import ParsedInput, Position, Range, Source
from implstub.scanner import DEFAULT_BOUNDARIES, find_word_range

logger = logging.getLogger(__name__)

# '<recvName> <recvType> <interfaceType>' or just '<interfaceType>'
INPUT_PATTERN = re.compile(r"^([\w_]+ \*?[\w_]+ )?(\w[\w.-]*)$", re.ASCII)

INPUT_PLACEHOLDER = "f *File io.Closer"


def validate_user_input(impl_input: str) -> ParsedInput | None:
    """Validate a stub request typed by the user.

    Args:
        impl_input: Raw input, e.g. "f *File io.Closer" or "io.Closer"

    Returns:
        ParsedInput, or None if the input doesn't match. The receiver spec
        keeps the trailing space captured with it ("f *File ") and is None when
        the user only named the interface.
    """
    match = INPUT_PATTERN.match(impl_input.strip())
    if not match:
        return None

    return ParsedInput(
        recv_spec=match.group(1),
        interface_type=match.group(2),
    )


def infer_recv_spec(
    source: Source,
    doc_start: Position,
    doc_end: Position,
    cursor: Range,
    boundaries: str = DEFAULT_BOUNDARIES,
) -> str:
    """Build a receiver spec from the word under cursor.

    The receiver name is the lower-cased first letter of the word and the
    receiver type is a pointer to the word itself: "File" -> "f *File".

    Raises:
        NoIdentifierError: If there is no word under the cursor
    """
    word_range = find_word_range(source, doc_start, doc_end, cursor, boundaries)
    if word_range is None:
        raise NoIdentifierError(cursor.start.line, cursor.start.character)

    word = source.get_text(word_range)
    if not word:
        raise NoIdentifierError(cursor.start.line, cursor.start.character)

    recv_spec = f"{word[0].lower()} *{word}"
    logger.debug(f"Inferred receiver spec '{recv_spec}' from {word_range}")
    return recv_spec
