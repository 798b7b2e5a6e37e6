"""
Structured Logging Configuration.

Supports two modes:
- text: Human-readable format for development
- json: One JSON object per line for log shippers

Set LOG_FORMAT to "json" for production.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

from app.config import Settings

DIAGNOSTICS_LOGGER = "app.diagnostics"


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings with tracing context.

    Automatically includes correlation_id, owner and repo from TracingContext.
    """

    def format(self, record: logging.LogRecord) -> str:
        from app.core.tracing import TracingContext

        ctx = TracingContext.get()

        log_record: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
            "correlation_id": ctx.get("correlation_id", ""),
            "owner": ctx.get("owner", ""),
            "repo": ctx.get("repo", ""),
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def setup_logging(config: Optional[Settings] = None) -> None:
    """
    Setup logging for the application.

    Uses LOG_FORMAT to determine format:
    - "json": Structured JSON
    - "text" (default): Human-readable for development
    """
    if config is None:
        from app.config import settings as config

    setup_diagnostics_logging()

    root_logger = logging.getLogger()

    # Avoid adding multiple handlers
    if root_logger.handlers:
        return

    root_logger.setLevel(config.LOG_LEVEL.upper())

    handler = logging.StreamHandler(sys.stdout)

    if config.LOG_FORMAT.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)

    root_logger.addHandler(handler)

    # Set lower level for noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def setup_diagnostics_logging() -> None:
    """
    Send diagnostic records to stdout as bare message text.

    Records are already pretty-printed JSON, so they bypass the root
    formatter instead of being prefixed or escaped by it.
    """
    diagnostics_logger = logging.getLogger(DIAGNOSTICS_LOGGER)

    if diagnostics_logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    diagnostics_logger.addHandler(handler)
    diagnostics_logger.setLevel(logging.INFO)
    diagnostics_logger.propagate = False
