"""phpext MCP Server - Main server definition."""

import json
import sys
from importlib.resources import files
from typing import Any

from loguru import logger
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from phpext_mcp.catalog import (
    EXTENSION_CATEGORIES,
    EXTENSION_DATABASE,
    catalog_issues,
    find_conflicts,
    get_extension,
    get_extensions_by_category,
    get_framework_extensions,
    get_popular_extensions,
    list_categories,
    search_extensions,
)
from phpext_mcp.config import settings
from phpext_mcp.models import ExtensionInfo
from phpext_mcp.presets import (
    FRAMEWORK_PRESETS,
    detect_frameworks,
    get_preset,
    list_presets,
    resolve_preset_extensions,
)

# Configure logging (stdout carries the MCP stdio transport)
logger.remove()
logger.add(sys.stderr, level=settings.log_level)


mcp = FastMCP(
    name="phpext",
    instructions=(
        "PHP extension reference catalog. "
        "Use `extensions` to look up, search, rank and filter PHP extensions. "
        "Use `presets` for recommended extension sets per framework. "
        "All data is static; nothing is read from a PHP installation."
    ),
)


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=settings.indent or None, ensure_ascii=False)


def _records(items: list[ExtensionInfo]) -> str:
    return _dumps([ext.to_dict() for ext in settings.cap(items)])


def _split_names(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


# ---------------------------------------------------------------------------
# extensions tool: info, search, category, popular, framework, categories,
# conflicts
# ---------------------------------------------------------------------------


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def extensions(
    action: str,
    name: str | None = None,
    query: str | None = None,
    category: str | None = None,
    framework: str | None = None,
    limit: int | None = None,
) -> str:
    """Look up PHP extension metadata.
    - info: Full record for one extension (requires name)
    - search: Case-insensitive text search (requires query)
    - category: Extensions in a category, exact label (requires category)
    - popular: Most popular extensions (optional limit)
    - framework: Extensions for a framework, exact label (requires framework)
    - categories: Category labels with their resolved record counts
    - conflicts: Conflicting pairs among comma-separated names (requires name)
    Use `help` tool for full documentation.
    """
    match action:
        case "info":
            if not name:
                return "Error: name is required for info action"
            ext = get_extension(name)
            if ext is None:
                logger.debug(f"Extension not found: {name}")
                return _dumps({"error": f"Extension '{name}' not found"})
            return _dumps(ext.to_dict())

        case "search":
            if query is None:
                return "Error: query is required for search action"
            results = search_extensions(query)
            logger.debug(f"search '{query}': {len(results)} match(es)")
            return _records(results)

        case "category":
            if not category:
                return "Error: category is required for category action"
            results = get_extensions_by_category(category)
            logger.debug(f"category '{category}': {len(results)} record(s)")
            return _records(results)

        case "popular":
            results = get_popular_extensions(
                limit if limit is not None else settings.popular_limit
            )
            return _records(results)

        case "framework":
            if not framework:
                return "Error: framework is required for framework action"
            results = get_framework_extensions(framework)
            logger.debug(f"framework '{framework}': {len(results)} record(s)")
            return _records(results)

        case "categories":
            return _dumps(
                {
                    label: len(get_extensions_by_category(label))
                    for label in list_categories()
                }
            )

        case "conflicts":
            if not name:
                return "Error: name is required for conflicts action"
            pairs = find_conflicts(_split_names(name))
            return _dumps([{"extension": a, "conflicts_with": b} for a, b in pairs])

        case _:
            return (
                f"Error: Unknown action '{action}'. "
                "Valid actions: info, search, category, popular, framework, "
                "categories, conflicts"
            )


# ---------------------------------------------------------------------------
# presets tool: list, show, extensions
# ---------------------------------------------------------------------------


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def presets(
    action: str,
    name: str | None = None,
    path: str | None = None,
) -> str:
    """Framework presets: recommended extensions and php.ini settings.
    - list: Preset keys with display names
    - show: Full preset (requires name)
    - extensions: Catalog records for a preset plus unknown names (requires name)
    - detect: Presets matching the project directory at path (requires path)
    Use `help` tool for full documentation.
    """
    match action:
        case "list":
            return _dumps(
                {key: FRAMEWORK_PRESETS[key].name for key in list_presets()}
            )

        case "show":
            if not name:
                return "Error: name is required for show action"
            preset = get_preset(name)
            if preset is None:
                return _dumps(
                    {
                        "error": f"Preset '{name}' not found",
                        "valid_presets": list_presets(),
                    }
                )
            return _dumps(preset.to_dict())

        case "extensions":
            if not name:
                return "Error: name is required for extensions action"
            if get_preset(name) is None:
                return _dumps(
                    {
                        "error": f"Preset '{name}' not found",
                        "valid_presets": list_presets(),
                    }
                )
            found, missing = resolve_preset_extensions(name)
            return _dumps(
                {
                    "extensions": [ext.to_dict() for ext in found],
                    "not_in_catalog": missing,
                }
            )

        case "detect":
            if not path:
                return "Error: path is required for detect action"
            detected = detect_frameworks(path)
            return _dumps(
                {key: FRAMEWORK_PRESETS[key].name for key in detected}
            )

        case _:
            return (
                f"Error: Unknown action '{action}'. "
                "Valid actions: list, show, extensions, detect"
            )


_DOC_PAGES = ("extensions", "presets", "config", "help")


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def help(tool_name: str = "extensions") -> str:
    """Get full documentation for a tool.
    Use when compressed descriptions are insufficient.
    Valid tool names: extensions, presets, config, help.
    """
    if tool_name not in _DOC_PAGES:
        return f"Error: No documentation found for tool '{tool_name}'"
    try:
        doc_file = files("phpext_mcp.docs").joinpath(f"{tool_name}.md")
        return doc_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        return f"Error: No documentation found for tool '{tool_name}'"
    except Exception as e:
        return f"Error loading documentation: {e}"


_INT_KEYS = {"max_results", "popular_limit", "indent"}


@mcp.tool(
    description=(
        "Server config and catalog status. Actions: status|set. "
        "Use help tool with tool_name='config' for full docs."
    ),
    annotations=ToolAnnotations(
        title="Config",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def config(
    action: str,
    key: str | None = None,
    value: str | None = None,
) -> str:
    """Server configuration and catalog status.

    Actions:
    - status: Show current settings, catalog sizes and consistency report
    - set: Update runtime setting (key + value required)
    """
    match action:
        case "status":
            status = {
                "catalog": {
                    "extensions": len(EXTENSION_DATABASE),
                    "categories": len(EXTENSION_CATEGORIES),
                    "presets": len(FRAMEWORK_PRESETS),
                    "issues": catalog_issues(),
                },
                "settings": {
                    "log_level": settings.log_level,
                    "max_results": settings.max_results,
                    "popular_limit": settings.popular_limit,
                    "indent": settings.indent,
                },
            }
            return json.dumps(status, indent=2, default=str)

        case "set":
            if not key or value is None:
                return json.dumps({"error": "key and value are required for set"})
            valid_keys = {"log_level"} | _INT_KEYS
            if key not in valid_keys:
                return json.dumps(
                    {
                        "error": f"Invalid key: {key}",
                        "valid_keys": sorted(valid_keys),
                    }
                )
            if key == "log_level":
                try:
                    logger.level(value.upper())
                except ValueError:
                    return json.dumps(
                        {"error": f"Invalid value for log_level: {value!r}"}
                    )
                settings.log_level = value.upper()
                logger.remove()
                logger.add(sys.stderr, level=settings.log_level)
            else:
                try:
                    setattr(settings, key, int(value))
                except ValueError:
                    return json.dumps(
                        {"error": f"Invalid value for {key}: {value!r} (integer)"}
                    )
            return json.dumps(
                {
                    "status": "updated",
                    "key": key,
                    "value": getattr(settings, key),
                },
                default=str,
            )

        case _:
            return json.dumps(
                {
                    "error": f"Unknown action: {action}",
                    "valid_actions": ["status", "set"],
                }
            )


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


@mcp.prompt()
def recommend_extensions(framework: str) -> str:
    """Generate a prompt to plan the PHP extensions for a framework."""
    return (
        f"Recommend the PHP extensions for a {framework} project.\n\n"
        f"1. Use the presets tool with action='extensions', name='{framework}' "
        "if a preset exists.\n"
        f"2. Use the extensions tool with action='framework', "
        f"framework='{framework}' for catalog matches.\n"
        "3. Check the final list with action='conflicts' and explain any "
        "dependencies or security cautions."
    )


def main() -> None:
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
