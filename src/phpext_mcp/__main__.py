"""phpext MCP Server entry point."""

import json
import sys


def _check() -> None:
    """Print the catalog consistency report.

    Mismatches between the category index and the catalog are expected
    curation gaps, so this always exits 0.
    """
    from phpext_mcp.catalog import catalog_issues

    print(json.dumps(catalog_issues(), indent=2, ensure_ascii=False))


def _show(name: str) -> int:
    """Print one extension record as JSON."""
    from phpext_mcp.catalog import get_extension

    ext = get_extension(name)
    if ext is None:
        print(f"Extension '{name}' not found", file=sys.stderr)
        return 1
    print(json.dumps(ext.to_dict(), indent=2, ensure_ascii=False))
    return 0


def _cli() -> None:
    """CLI dispatcher: server (default), check, or show subcommand."""
    if len(sys.argv) >= 2 and sys.argv[1] == "check":
        _check()
    elif len(sys.argv) >= 2 and sys.argv[1] == "show":
        if len(sys.argv) < 3:
            print("usage: phpext-mcp show <name>", file=sys.stderr)
            sys.exit(2)
        code = _show(sys.argv[2])
        if code:
            sys.exit(code)
    else:
        from phpext_mcp.server import main

        main()


if __name__ == "__main__":
    _cli()
