"""
Modular MCP Server for Fitbit Data

Provides tools to authorize with Fitbit (OAuth 1.0a) and read or log
activities, food, water, sleep, body measurements and time series via the
Model Context Protocol (MCP).

Supports two transport modes:
- stdio: For single-user local usage (default)
- http: For multi-user HTTP server deployment
"""

import os

from fastmcp import FastMCP

from fitbit_mcp import auth_tool
from fitbit_mcp import activities
from fitbit_mcp import nutrition
from fitbit_mcp import health
from fitbit_mcp import time_series


def create_app() -> FastMCP:
    """Create and configure the MCP app with all tools registered."""
    app = FastMCP("Fitbit v1.0")

    # Register auth tools (authorization, session management, identity)
    app = auth_tool.register_tools(app)

    app = activities.register_tools(app)
    app = nutrition.register_tools(app)
    app = health.register_tools(app)
    app = time_series.register_tools(app)

    return app


def main():
    """Initialize the MCP server and run with configured transport.

    Environment variables:
    - MCP_TRANSPORT: 'stdio' (default) or 'http'
    - MCP_HOST: Host to bind to (default: '0.0.0.0')
    - MCP_PORT: Port for HTTP transport (default: 8081)
    """
    app = create_app()

    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "http":
        host = os.environ.get("MCP_HOST", "0.0.0.0")
        port = int(os.environ.get("MCP_PORT", "8081"))
        app.run(transport="http", host=host, port=port)
    else:
        app.run()


if __name__ == "__main__":
    main()
