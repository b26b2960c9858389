"""Unified entry point for the Student Management API.

Two services can be started from here:

* ``api``: the HTTP API, served by Uvicorn.
* ``mcp``: the agent tools, served over stdio by FastMCP.

Configuration (database path, log level, host and port) comes from
environment variables, see ``student_management_api.app.core.config``.

Usage:
    python run.py api [--host 0.0.0.0] [--port 8000]
    python run.py mcp
"""
import argparse
import asyncio

from uvicorn import Config, Server

from student_management_api.app.core.config import settings


async def run_api(host: str, port: int) -> None:
    """Start the HTTP API using Uvicorn."""
    config = Config(
        app="student_management_api.app.main:app",
        host=host,
        port=port,
        reload=False,
        log_level=settings.log_level.lower(),
        # Keep the handlers installed by setup_logging.
        log_config=None,
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    ap = argparse.ArgumentParser(description="Run the Student Management API or its agent tools.")
    sub = ap.add_subparsers(dest="command", required=True)
    api = sub.add_parser("api", help="Serve the HTTP API")
    api.add_argument("--host", default=settings.api_host)
    api.add_argument("--port", type=int, default=settings.api_port)
    sub.add_parser("mcp", help="Serve the agent tools over stdio")
    args = ap.parse_args()

    if args.command == "api":
        asyncio.run(run_api(args.host, args.port))
    else:
        from student_management_api.app.tools.server import main as run_tools

        run_tools()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
