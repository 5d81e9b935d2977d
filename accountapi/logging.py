"""Structured logging configuration for accountapi.

Handlers installed by :func:`setup_logging` mask long digit runs (account
numbers, bank ids) so banking identifiers do not end up in log files.
"""

import logging
import re
import sys
from typing import Any

# Six or more digits not embedded in a larger token such as a UUID
_NUMBER_PATTERN = re.compile(r"(?<![\w-])\d{6,}(?![\w-])")


def mask_numbers(text: str) -> str:
    """Keep the last 4 digits of every long digit run."""

    def _replace(match: re.Match) -> str:  # type: ignore[type-arg]
        digits = match.group(0)
        return "*" * (len(digits) - 4) + digits[-4:]

    return _NUMBER_PATTERN.sub(_replace, text)


class MaskingFilter(logging.Filter):
    """Mask banking identifiers in the message and its arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = mask_numbers(str(record.msg))
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: (mask_numbers(v) if isinstance(v, str) else v)
                    for k, v in record.args.items()
                }
            else:
                record.args = tuple(
                    (mask_numbers(a) if isinstance(a, str) else a) for a in record.args
                )
        return True


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    mask: bool = True,
) -> None:
    """Configure logging for accountapi.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    mask : bool
        Mask account numbers and bank ids in emitted records.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    if mask:
        console_handler.addFilter(MaskingFilter())
    root_logger.addHandler(console_handler)

    logging.getLogger("accountapi").setLevel(log_level)

    # Reduce noise from external libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("faker").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        import json
        from datetime import datetime, timezone

        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data.update(record.extra)

        return json.dumps(log_data)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name (usually ``__name__``)."""
    return logging.getLogger(name)
