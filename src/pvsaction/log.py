"""Logging configuration.

Inside a GitHub Actions runner records are rendered as workflow commands so
that debug lines are hidden unless step debugging is enabled and warnings or
errors are annotated. Local runs go through rich; ``json`` emits one object
per line.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from pvsaction.config.settings import LogFormat, Settings


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as GitHub workflow commands."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"::error::{escape_data(message)}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{escape_data(message)}"
        if record.levelno <= logging.DEBUG:
            return "\n".join(f"::debug::{line}" for line in message.splitlines() or [""])
        return message


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def escape_data(value: str) -> str:
    """Escape a workflow command payload."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure the ``pvsaction`` logger hierarchy."""
    settings = settings or Settings()
    log_format = settings.resolve_log_format()
    level = getattr(logging, settings.resolve_log_level(), logging.INFO)

    if log_format == LogFormat.GITHUB:
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(WorkflowCommandFormatter("%(message)s"))
    elif log_format == LogFormat.JSON:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
        )

    logger = logging.getLogger("pvsaction")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    # Quiet noisy third-party loggers
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
