# Trident Shared Helpers
# Utility functions used across all Trident services

import logging
import math
import sys
from datetime import datetime, timezone

from .config import LOG_LEVEL


def strip_markdown_json(content):
    """Strip markdown code blocks from Claude's JSON response"""
    content = content.strip()
    if content.startswith('```'):
        # Remove first line (```json or ```)
        content = content.split('\n', 1)[1] if '\n' in content else content[3:]
    if content.endswith('```'):
        # Remove trailing ```
        content = content.rsplit('```', 1)[0]
    return content.strip()


def utc_now():
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def to_iso_utc(value):
    """Format a datetime as ISO-8601 UTC with milliseconds (e.g. '2025-01-05T09:30:00.000Z')"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def round_half_up(value):
    """Round to the nearest integer, halves away from zero for positives (4.5 -> 5)"""
    return int(math.floor(value + 0.5))


def parse_positive_int(raw, default):
    """Parse a query-string integer.

    Returns default when the value is missing, not a number, or not positive.
    """
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value <= 0:
        return default
    return value


class _LineFormatter(logging.Formatter):
    """Single-line '<timestamp> <LEVEL> <logger> - <message>' output"""

    def format(self, record):
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime('%Y-%m-%d %H:%M:%S')
        line = f"{timestamp} {record.levelname:<8} {record.name} - {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line += '\n' + self.formatException(record.exc_info)
        return line


def configure_logging(level=None):
    """Configure root logging for a Trident service.

    Idempotent: replaces any handlers already on the root logger.
    """
    level_name = (level or LOG_LEVEL).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_LineFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
