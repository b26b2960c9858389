"""
Logging setup shared by the HTTP API and the tool server.

Both entry points call ``setup_logging`` before building anything, so
service lines such as ``Created student with id: 3`` and Uvicorn's
own messages end up in the same handlers with the same format.  The
tool server speaks MCP over stdout, which is why console output goes
to stderr.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Server loggers that otherwise install their own handlers.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once per process.

    ``level`` is a level name such as ``"DEBUG"``; unknown names fall
    back to ``INFO`` and are reported once configured.  When
    ``logfile`` is given, records are also appended to that file.
    Uvicorn's loggers are routed through the root handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = logging.getLevelName(level.upper())
    unknown_level = not isinstance(numeric_level, int)
    root.setLevel(logging.INFO if unknown_level else numeric_level)
    for handler in _handlers(logfile):
        root.addHandler(handler)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    if unknown_level:
        logging.getLogger(__name__).warning("Unknown log level %r, using INFO", level)
