"""Logging setup"""

import logging
from typing import Optional

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once; safe to call on every startup."""
    root = logging.getLogger()
    if not any(getattr(h, "_knotty", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._knotty = True
        root.addHandler(handler)
    root.setLevel(level.upper())


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the id of the request it belongs to."""

    def process(self, msg, kwargs):
        request_id = self.extra.get("request_id")
        if request_id:
            msg = f"[{request_id}] {msg}"
        return msg, kwargs


def get_logger(name: str, request_id: Optional[str] = None) -> logging.LoggerAdapter:
    return RequestLoggerAdapter(logging.getLogger(name), {"request_id": request_id})


def log_domain_events(logger, events) -> None:
    """Record events raised by an aggregate once its transaction has committed."""
    for event in events:
        fields = ", ".join(f"{key}={value}" for key, value in vars(event).items())
        logger.info("%s(%s)", type(event).__name__, fields)
