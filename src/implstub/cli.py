import asyncio
import json
import logging

from dataclasses import asdict
from pathlib import Path
from rich.console import Console
from rich.table import Table
from typing import Optional

import typer

from implstub import __version__
from implstub.config import load_impl_config
from implstub.document import TextDocument
from implstub.errors import ImplStubError, ToolNotFoundError
from implstub.impl import impl_cursor
from implstub.models import Position, Range
from implstub.resolver import INPUT_PLACEHOLDER, validate_user_input
from implstub.scanner import find_word_range
from implstub.tools import missing_tool_message

app = typer.Typer(
    help="implstub - stub Go interface implementations at the cursor",
    no_args_is_help=True,
)

console = Console()


def _cursor_range(
    line: int,
    character: int,
    end_line: int | None,
    end_character: int | None,
) -> Range:
    """Build the selection range; without an end it is a zero-width caret."""
    return Range(
        Position(line, character),
        Position(
            line if end_line is None else end_line,
            character if end_character is None else end_character,
        ),
    )


@app.command()
def impl(
    file: Path,
    line: int,
    character: int,
    end_line: Optional[int] = typer.Option(None, "--end-line", help="Selection end line"),
    end_character: Optional[int] = typer.Option(
        None, "--end-character", help="Selection end character"
    ),
    impl_input: Optional[str] = typer.Option(
        None,
        "--input",
        "-i",
        help=f"Receiver and interface, e.g. '{INPUT_PLACEHOLDER}' or just 'io.Closer'",
    ),
    write: bool = typer.Option(False, "--write", "-w", help="Write the result back to FILE"),
    json_output: bool = typer.Option(False, "--json", help="Output the result as JSON"),
):
    """Stub an interface implementation at a cursor position.

    Args:
        file: Go source file being edited
        line: Zero-based cursor line
        character: Zero-based cursor character

    Examples:
        implstub impl main.go 12 6 --input io.Closer
        implstub impl main.go 12 0 --input "f *File io.Closer" --write
    """
    if impl_input is None:
        try:
            impl_input = typer.prompt(
                f"Enter receiver and interface to implement ({INPUT_PLACEHOLDER})"
            )
        except typer.Abort:
            # Dismissed prompt: nothing to do
            return

    try:
        cursor = _cursor_range(line, character, end_line, end_character)
        document = TextDocument.from_file(file)
        result = impl_cursor(document, cursor, impl_input, config=load_impl_config())
        if result is not None and write:
            document.save()
    except ToolNotFoundError as e:
        typer.echo(missing_tool_message(e.tool), err=True)
        raise typer.Exit(code=1)
    except (ImplStubError, OSError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    if result is None:
        return

    if json_output:
        output = asdict(result)
        output["written"] = write
        typer.echo(json.dumps(output, indent=2))
    elif write:
        pos = result.insert_position
        typer.echo(f"Inserted stubs at {file}:{pos.line}:{pos.character}")
    else:
        typer.echo(result.text, nl=False)


@app.command()
def word(
    file: Path,
    line: int,
    character: int,
    json_output: bool = typer.Option(False, "--json", help="Output the range as JSON"),
):
    """Show the word under a cursor position.

    Args:
        file: Source file to scan
        line: Zero-based cursor line
        character: Zero-based cursor character
    """
    try:
        document = TextDocument.from_file(file)
        cursor = _cursor_range(line, character, None, None)
        line_range = document.line_range(line)
        word_range = find_word_range(
            document,
            line_range.start,
            line_range.end,
            cursor,
            load_impl_config().boundaries,
        )
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if word_range is None:
        typer.echo(f"Error: No word found at {file}:{line}:{character}", err=True)
        raise typer.Exit(code=1)

    text = document.get_text(word_range)

    if json_output:
        output = {"word": text, "range": asdict(word_range)}
        typer.echo(json.dumps(output, indent=2))
        return

    table = Table()
    table.add_column("Word")
    table.add_column("Start")
    table.add_column("End")
    table.add_row(
        text,
        f"{word_range.start.line}:{word_range.start.character}",
        f"{word_range.end.line}:{word_range.end.character}",
    )
    console.print(table)


@app.command()
def parse(impl_input: str):
    """Validate a stub request and show how it is understood.

    Args:
        impl_input: Receiver and interface, e.g. "f *File io.Closer"
    """
    parsed = validate_user_input(impl_input)
    if parsed is None:
        typer.echo(f"Error: Not parsable input: {impl_input}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(asdict(parsed), indent=2))


@app.command()
def mcp_server():
    """Start the MCP server.

    Exposes the impl and word commands to editors and agents speaking the
    Model Context Protocol over stdio.
    """
    from implstub.mcp_server import main

    asyncio.run(main())


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"implstub version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
