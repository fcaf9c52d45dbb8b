"""phpext MCP Server - PHP extension reference catalog."""

from importlib.metadata import version

from phpext_mcp.__main__ import _cli as main
from phpext_mcp.catalog import (
    EXTENSION_CATEGORIES,
    EXTENSION_DATABASE,
    get_extensions_by_category,
    get_framework_extensions,
    get_popular_extensions,
    search_extensions,
)

__version__ = version("phpext-mcp")
__all__ = [
    "EXTENSION_CATEGORIES",
    "EXTENSION_DATABASE",
    "get_extensions_by_category",
    "get_framework_extensions",
    "get_popular_extensions",
    "search_extensions",
    "main",
    "__version__",
]
