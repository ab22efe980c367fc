# lexia/logging_config.py
"""
JSON-lines logging on stderr.

stdout belongs to the MCP stdio transport and to CLI output, so nothing is
ever logged there. The HTTP server, the MCP server and the CLI all call
configure_logging() with config.logging.level.
"""

import json
import logging
import sys
from datetime import datetime, timezone

# Servers whose own handlers are replaced by ours
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "fastmcp")

# Provider SDK transports log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "anthropic", "openai")


class JsonFormatter(logging.Formatter):
    """One JSON object per record: ts, level, logger, msg (+ where, exc)."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.levelno >= logging.WARNING:
            entry["where"] = f"{record.module}:{record.lineno}"
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        # Spanish case data stays readable
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(level: str = "INFO") -> None:
    """
    Route all logging to a single stderr JSON handler at the given level.

    Safe to call again; the previous handlers are replaced.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.addHandler(handler)
        server_logger.setLevel(level)
        server_logger.propagate = False

    quiet = max(root.level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
