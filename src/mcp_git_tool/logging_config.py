"""Logging setup for the git tool server.

stdout carries MCP frames, so every record goes to stderr as one JSON object
per line.
"""

import json
import logging
import sys


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that drops records once the client has closed stderr."""

    def emit(self, record):
        try:
            super().emit(record)
        except (ValueError, OSError) as e:
            reason = str(e).lower()
            if "closed file" in reason or "bad file descriptor" in reason:
                return
            raise


class StructuredLogFormatter(logging.Formatter):
    """Render a record as JSON, adding per-call fields passed via ``extra``."""

    CONTEXT_FIELDS = ("request_id", "operation", "duration_ms")

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (name, getattr(record, name))
            for name in self.CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            payload["exception"] = record.exc_text
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(log_level: str = "INFO") -> None:
    """Route all logging to stderr as JSON lines at ``log_level``."""
    handler = SafeStreamHandler(sys.stderr)
    handler.setFormatter(StructuredLogFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    # GitPython and the MCP SDK are chatty at INFO
    for name in ("asyncio", "git", "mcp"):
        logging.getLogger(name).setLevel(logging.WARNING)
