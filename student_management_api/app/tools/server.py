"""
FastMCP server exposing the student tools.

``create_mcp_server`` builds a server around an existing service so
the tools share the HTTP API's business logic; ``main`` wires the
service from settings and serves the tools over stdio.
"""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from student_management_api.app.core.config import Settings, settings as default_settings
from student_management_api.app.core.logging_config import setup_logging
from student_management_api.app.services.student_service import StudentService
from student_management_api.app.tools.student_tools import StudentTools

logger = logging.getLogger(__name__)


def create_mcp_server(service: StudentService, name: str = "student-management") -> FastMCP:
    server = FastMCP(name)
    StudentTools(service).register(server)
    logger.info("Tool server %s ready", name)
    return server


def main(config: Optional[Settings] = None) -> None:
    """Serve the student tools over stdio."""
    from student_management_api.app.main import build_student_service

    config = config or default_settings
    setup_logging(config.log_level, config.log_file or None)
    server = create_mcp_server(build_student_service(config), name=config.mcp_server_name)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
