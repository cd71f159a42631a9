"""MCP server that exposes implstub to editors and coding agents.

This server wraps the `implstub` CLI, providing structured access to stub
generation through the Model Context Protocol.
"""

import json
import subprocess
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent


# Initialize MCP server
app = Server("implstub")

_CURSOR_PROPERTIES = {
    "file": {
        "type": "string",
        "description": "Path to the Go source file",
    },
    "line": {
        "type": "integer",
        "description": "Zero-based cursor line",
    },
    "character": {
        "type": "integer",
        "description": "Zero-based cursor character",
    },
}


@app.list_tools()
async def list_tools() -> list[Tool]:
    """Declare available tools."""
    return [
        Tool(
            name="implstub_impl",
            description=(
                "Generate method stubs implementing a Go interface and insert them "
                "into a file at the given cursor position. The input names the "
                "receiver and interface ('f *File io.Closer'), or only the interface "
                "('io.Closer') to infer the receiver from the type name under the cursor."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    **_CURSOR_PROPERTIES,
                    "input": {
                        "type": "string",
                        "description": (
                            "'<recvName> <recvType> <interfaceType>' or '<interfaceType>'. "
                            "Examples: 'f *File io.Closer', 'io.Closer'"
                        ),
                    },
                },
                "required": ["file", "line", "character", "input"],
            },
        ),
        Tool(
            name="implstub_word",
            description=(
                "Find the word (identifier delimited by spaces or tabs) under a "
                "cursor position. Returns the word and its range."
            ),
            inputSchema={
                "type": "object",
                "properties": _CURSOR_PROPERTIES,
                "required": ["file", "line", "character"],
            },
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Handle tool calls by routing to appropriate CLI commands."""
    if name == "implstub_impl":
        return await _handle_impl(arguments)
    elif name == "implstub_word":
        return await _handle_word(arguments)

    raise ValueError(f"Unknown tool: {name}")


def _run_cli(args: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "implstub", *args],
        capture_output=True,
        text=True,
        check=True,
    )


async def _handle_impl(arguments: dict[str, Any]) -> list[TextContent]:
    """Handle implstub_impl tool calls.

    Args:
        arguments: Tool arguments with file, line, character and input

    Returns:
        List containing a single TextContent describing the insertion
    """
    try:
        result = _run_cli([
            "impl",
            str(arguments["file"]),
            str(arguments["line"]),
            str(arguments["character"]),
            "--input",
            arguments["input"],
            "--write",
            "--json",
        ])

        output = json.loads(result.stdout)
        pos = output["insert_position"]
        recv_spec, interface_type = output["args"]

        return [
            TextContent(
                type="text",
                text=(
                    f"Inserted stubs for '{recv_spec}' implementing {interface_type} "
                    f"in {arguments['file']} at {pos['line']}:{pos['character']}\n\n"
                    f"{output['text']}"
                ),
            )
        ]

    except subprocess.CalledProcessError as e:
        error_msg = e.stderr.strip() if e.stderr else str(e)
        return [
            TextContent(
                type="text",
                text=f"Error running implstub impl: {error_msg}",
            )
        ]
    except json.JSONDecodeError as e:
        return [
            TextContent(
                type="text",
                text=f"Error parsing implstub output: {e}",
            )
        ]
    except Exception as e:
        return [
            TextContent(
                type="text",
                text=f"Unexpected error: {e}",
            )
        ]


async def _handle_word(arguments: dict[str, Any]) -> list[TextContent]:
    """Handle implstub_word tool calls."""
    try:
        result = _run_cli([
            "word",
            str(arguments["file"]),
            str(arguments["line"]),
            str(arguments["character"]),
            "--json",
        ])

        # Parse JSON output from CLI
        word_info = json.loads(result.stdout)

        return [
            TextContent(
                type="text",
                text=json.dumps(word_info, indent=2),
            )
        ]

    except subprocess.CalledProcessError as e:
        error_msg = e.stderr.strip() if e.stderr else str(e)
        return [
            TextContent(
                type="text",
                text=f"Error running implstub word: {error_msg}",
            )
        ]
    except json.JSONDecodeError as e:
        return [
            TextContent(
                type="text",
                text=f"Error parsing implstub output: {e}",
            )
        ]
    except Exception as e:
        return [
            TextContent(
                type="text",
                text=f"Unexpected error: {e}",
            )
        ]


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
