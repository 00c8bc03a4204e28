"""CLI entry point: python -m idleclicker.mcp [economy_module]"""

from __future__ import annotations

import sys


def main() -> None:
    from idleclicker.mcp.server import serve
    from idleclicker.settings import configure_logging, get_settings

    settings = get_settings()
    if len(sys.argv) > 1:
        settings = settings.model_copy(update={"economy_module": sys.argv[1]})

    # Logging goes to stderr; stdout carries the MCP protocol
    configure_logging(settings.log_level)
    serve(settings)


if __name__ == "__main__":
    main()
