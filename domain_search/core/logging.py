import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Union

# Passed through ``extra=`` by the search pipeline and the stats rebuild
STRUCTURED_FIELDS = (
    "request_id",
    "phase",
    "step",
    "total_count",
    "page_size",
    "domains_processed",
)

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per line; structured fields are copied only when set."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": getattr(record, "service", "domain_search"),
        }
        payload.update(
            {
                field: getattr(record, field)
                for field in STRUCTURED_FIELDS
                if hasattr(record, field)
            }
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Route the root logger to stdout as JSON.

    Only the first call has any effect.
    """
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    # Statement echo belongs to create_engine(echo=True), not the app log
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True
