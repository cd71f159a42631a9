"""Tests for MCP server functionality."""

import json
import subprocess
from unittest.mock import Mock, patch

import pytest

from implstub import mcp_server


@pytest.mark.asyncio
async def test_list_tools():
    """Test that list_tools returns the implstub_impl and implstub_word tools."""
    # Call the handler function directly
    tools = await mcp_server.list_tools()

    assert len(tools) == 2

    impl_tool = tools[0]
    assert impl_tool.name == "implstub_impl"
    assert "interface" in impl_tool.description
    assert impl_tool.inputSchema["required"] == ["file", "line", "character", "input"]

    word_tool = tools[1]
    assert word_tool.name == "implstub_word"
    assert "input" not in word_tool.inputSchema["properties"]


@pytest.mark.asyncio
async def test_call_tool_unknown():
    """Test that calling an unknown tool raises ValueError."""
    with pytest.raises(ValueError, match="Unknown tool"):
        await mcp_server.call_tool("nonexistent_tool", {})


@pytest.mark.asyncio
async def test_call_impl_tool():
    """Test that implstub_impl runs the CLI with --write and summarizes the result."""
    cli_output = json.dumps({
        "args": ["f *File", "io.Closer"],
        "insert_position": {"line": 3, "character": 0},
        "text": "func (f *File) Close() error {}\n",
        "written": True,
    })
    arguments = {"file": "main.go", "line": 2, "character": 7, "input": "io.Closer"}

    with patch("subprocess.run", return_value=Mock(stdout=cli_output)) as mock_run:
        result = await mcp_server.call_tool("implstub_impl", arguments)

    command = mock_run.call_args.args[0]
    assert command[-8:] == [
        "impl", "main.go", "2", "7", "--input", "io.Closer", "--write", "--json"
    ]
    assert len(result) == 1
    assert "Inserted stubs for 'f *File' implementing io.Closer in main.go at 3:0" in result[0].text
    assert "func (f *File) Close() error {}" in result[0].text


@pytest.mark.asyncio
async def test_call_impl_tool_reports_cli_error():
    error = subprocess.CalledProcessError(
        1, ["implstub"], stderr="Error: Not parsable input: 1bad\n"
    )
    arguments = {"file": "main.go", "line": 0, "character": 0, "input": "1bad"}

    with patch("subprocess.run", side_effect=error):
        result = await mcp_server.call_tool("implstub_impl", arguments)

    assert result[0].text == "Error running implstub impl: Error: Not parsable input: 1bad"


@pytest.mark.asyncio
async def test_call_word_tool():
    cli_output = json.dumps({
        "word": "File",
        "range": {"start": {"line": 2, "character": 5}, "end": {"line": 2, "character": 9}},
    })

    with patch("subprocess.run", return_value=Mock(stdout=cli_output)):
        result = await mcp_server.call_tool(
            "implstub_word", {"file": "main.go", "line": 2, "character": 7}
        )

    assert json.loads(result[0].text)["word"] == "File"


@pytest.mark.asyncio
async def test_call_word_tool_bad_output():
    with patch("subprocess.run", return_value=Mock(stdout="not json")):
        result = await mcp_server.call_tool(
            "implstub_word", {"file": "main.go", "line": 2, "character": 7}
        )

    assert result[0].text.startswith("Error parsing implstub output")
