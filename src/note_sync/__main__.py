"""Entry point for the note-sync MCP server.

Run with: python -m note_sync
Or via fastmcp: fastmcp run note_sync.server:mcp

HTTP transport for remote access:
    python -m note_sync --http --port 9000
"""

from __future__ import annotations

import argparse

from pydantic import ValidationError

from note_sync.config import format_config_error, load_config
from note_sync.utils.logging import setup_logging


def main() -> None:
    """Run the MCP server."""
    parser = argparse.ArgumentParser(description="note-sync MCP server")
    parser.add_argument(
        "--http",
        action="store_true",
        help="Use HTTP transport instead of stdio (for remote access)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind HTTP server (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=9000,
        help="Port for HTTP transport (default: 9000)",
    )
    args = parser.parse_args()

    try:
        config = load_config()
    except ValidationError as e:
        parser.error(format_config_error(e))
    setup_logging(config.log_level)

    from note_sync.server import mcp

    if args.http:
        mcp.run(transport="http", host=args.host, port=args.port)
    else:
        mcp.run()


if __name__ == "__main__":
    main()
