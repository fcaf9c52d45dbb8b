"""Tests for the help tool and the bundled docs pages."""

from unittest.mock import MagicMock, patch

import pytest

from phpext_mcp.server import help


@pytest.mark.asyncio
@pytest.mark.parametrize("tool_name", ["extensions", "presets", "config", "help"])
async def test_every_tool_has_a_page(tool_name):
    result = await help(tool_name=tool_name)
    assert result.startswith(f"# {tool_name}")


@pytest.mark.asyncio
async def test_default_page_is_extensions():
    assert (await help()).startswith("# extensions")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("tool_name", "actions"),
    [
        (
            "extensions",
            ["info", "search", "category", "popular", "framework", "categories",
             "conflicts"],
        ),
        ("presets", ["list", "show", "extensions", "detect"]),
        ("config", ["status", "set"]),
    ],
)
async def test_pages_document_every_action(tool_name, actions):
    page = await help(tool_name=tool_name)
    for action in actions:
        assert f"| `{action}` |" in page


@pytest.mark.asyncio
async def test_config_page_lists_env_vars():
    page = await help(tool_name="config")
    for var in ("PHPEXT_LOG_LEVEL", "PHPEXT_MAX_RESULTS", "PHPEXT_POPULAR_LIMIT"):
        assert var in page


@pytest.mark.asyncio
async def test_unknown_tool():
    result = await help(tool_name="composer")
    assert result == "Error: No documentation found for tool 'composer'"


@pytest.mark.asyncio
async def test_read_error_is_reported():
    page = MagicMock()
    page.read_text.side_effect = OSError("Disk error")
    docs = MagicMock()
    docs.joinpath.return_value = page

    with patch("phpext_mcp.server.files", return_value=docs):
        result = await help(tool_name="presets")

    docs.joinpath.assert_called_once_with("presets.md")
    assert result == "Error loading documentation: Disk error"


@pytest.mark.asyncio
@pytest.mark.parametrize("tool_name", ["../catalog", "docs/help", "HELP", ""])
async def test_only_known_pages_are_read(tool_name):
    with patch("phpext_mcp.server.files") as patched_files:
        result = await help(tool_name=tool_name)

    patched_files.assert_not_called()
    assert result == f"Error: No documentation found for tool '{tool_name}'"
