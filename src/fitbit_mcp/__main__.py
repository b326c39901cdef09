"""
Entry point for running fitbit_mcp as a module.

Usage:
    python -m fitbit_mcp                    # Run with stdio transport
    python -m fitbit_mcp --http             # Run with HTTP transport
    python -m fitbit_mcp --http --port 9000 # Run HTTP on custom port
"""

import argparse
import os

from fitbit_mcp import create_app


def main():
    parser = argparse.ArgumentParser(
        description="Fitbit MCP Server - Multi-user session-based Fitbit API"
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Use http transport instead of stdio"
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("MCP_HOST", "0.0.0.0"),
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MCP_PORT", "8081")),
        help="Port for HTTP transport (default: 8081)"
    )

    args = parser.parse_args()

    app = create_app()

    if args.http or os.environ.get("MCP_TRANSPORT") == "http":
        print(f"Starting Fitbit MCP server on http://{args.host}:{args.port}/mcp")
        app.run(transport="http", host=args.host, port=args.port)
    else:
        app.run()


if __name__ == "__main__":
    main()
