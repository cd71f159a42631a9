"""Generate interface stubs at the cursor and insert them into a document."""

import logging
from collections.abc import Callable
from pathlib import Path

from implstub.config import ImplConfig
from implstub.document import TextDocument
from implstub.errors import UnparsableInputError
from implstub.models import ImplResult, Position, Range
from implstub.resolver import infer_recv_spec, validate_user_input
from implstub.tools import run_impl

logger = logging.getLogger(__name__)

Runner = Callable[[list[str], Path | None, ImplConfig], str]


def build_impl_args(
    document: TextDocument,
    cursor: Range,
    impl_input: str,
    config: ImplConfig | None = None,
) -> list[str]:
    """Turn user input into the [recvSpec, interfaceType] tool arguments.

    When the input names only the interface, the receiver is inferred from the
    word under the cursor, scanning within the cursor's line.

    Raises:
        UnparsableInputError: If the input doesn't match the expected format
        NoIdentifierError: If a receiver must be inferred but no word is found
    """
    config = config or ImplConfig()

    parsed = validate_user_input(impl_input)
    if parsed is None:
        raise UnparsableInputError(impl_input)

    recv_spec = parsed.recv_spec
    if recv_spec is None:
        line = cursor.start.line
        recv_spec = infer_recv_spec(
            document,
            Position(line, 0),
            document.line_range(line).end,
            cursor,
            config.boundaries,
        )

    return [recv_spec.strip(), parsed.interface_type]


def impl_cursor(
    document: TextDocument,
    cursor: Range,
    impl_input: str | None,
    config: ImplConfig | None = None,
    runner: Runner | None = None,
) -> ImplResult | None:
    """Stub an interface implementation at the cursor.

    Args:
        document: Document being edited; receives the generated code
        cursor: Current selection; stubs are inserted at its start
        impl_input: What the user typed, or None if the prompt was dismissed
        config: Tool and scanning configuration
        runner: Callable running the stub generator, (args, cwd, config) -> text.
            Defaults to run_impl.

    Returns:
        ImplResult describing the insertion, or None if the user cancelled

    Raises:
        UnparsableInputError: If the input doesn't match the expected format
        NoIdentifierError: If a receiver must be inferred but no word is found
        ToolNotFoundError: If the stub generator is not installed
        ToolExecutionError: If the stub generator fails
    """
    if impl_input is None:
        logger.debug("No input given, nothing to do")
        return None

    config = config or ImplConfig()
    runner = runner or run_impl
    args = build_impl_args(document, cursor, impl_input, config)

    cwd = document.path.parent if document.path is not None else None
    text = runner(args, cwd, config)

    insert_position = cursor.start
    document.insert(insert_position, text)
    logger.debug(f"Inserted {len(text)} characters at {insert_position}")

    return ImplResult(args=args, insert_position=insert_position, text=text)
