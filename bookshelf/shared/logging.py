"""
Logging configuration for the application.

One stdout handler with a fixed format. Records pass through a filter
that masks credentials in MongoDB connection strings, since pymongo
errors and startup messages can carry the configured MONGO_URL.
"""

import logging
import re
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_MONGO_CREDENTIALS = re.compile(r"(mongodb(?:\+srv)?://)[^@/\s]+@")

QUIET_LOGGERS = ("uvicorn.access", "pymongo", "pymongo.serverSelection")


def redact_connection_string(text: str) -> str:
    """Replace ``user:password@`` in MongoDB URIs with ``***@``."""
    return _MONGO_CREDENTIALS.sub(r"\1***@", text)


class ConnectionStringRedactor(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_connection_string(message)
        if redacted != message:
            record.msg, record.args = redacted, None
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.addFilter(ConnectionStringRedactor())
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
