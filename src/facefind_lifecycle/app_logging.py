"""Logging configuration helpers."""

import logging

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"

# Fields the lifecycle services attach through ``extra``.
CONTEXT_FIELDS = ("job", "event_id", "status", "prefix", "collection_id")


class ContextFormatter(logging.Formatter):
    """Append lifecycle context fields to the message as ``key=value`` pairs."""

    def __init__(self, fmt: str = LOG_FORMAT) -> None:
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        ]
        if not context:
            return message
        # Keep any traceback below the first line.
        first, newline, rest = message.partition("\n")
        return f"{first} [{' '.join(context)}]{newline}{rest}"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger("facefind_lifecycle")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter())
    logger.addHandler(handler)
    logger.propagate = False
