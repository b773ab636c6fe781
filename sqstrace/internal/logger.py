"""
Logging utilities for internal use.
Usage:
    import sqstrace.internal.logger as logger
    log = logger.get_logger(__name__)

    log.debug("received invalid %s header: %r", name, value)

Records are rate limited per call site: by default a given ``log.<level>(...)``
line is emitted at most once every 60 seconds, configurable with
``SQSTRACE_LOGGING_RATE``. The number of records skipped in between is appended
to the next emitted record, for example::

    DEBUG received invalid X-Amzn-Trace-Id header: 'garbage' [3 skipped]

Rate limiting is disabled when ``SQSTRACE_LOGGING_RATE=0`` or when the logger is
set to DEBUG.
"""

import collections
import logging
import time
from typing import DefaultDict
from typing import Tuple

from sqstrace.settings._config import config


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve or create a ``Logger`` instance with consistent behavior for internal use.

    Configure all loggers with a rate limiter filter to prevent excessive logging.
    """
    logger = logging.getLogger(name)
    # addFilter will only add the filter if it is not already present
    logger.addFilter(log_filter)
    logger.propagate = True
    return logger


# Class used for keeping track of a log lines current time bucket and the number of log lines skipped
class LoggingBucket:
    def __init__(self, bucket: float, skipped: int):
        self.bucket = bucket
        self.skipped = skipped

    def __repr__(self):
        return f"LoggingBucket({self.bucket}, {self.skipped})"

    def is_sampled(self, record: logging.LogRecord, rate: float) -> bool:
        """
        Determine if the log line should be sampled based on the rate limit.
        """
        current = time.monotonic()
        if current - self.bucket >= rate:
            self.bucket = current
            record.skipped = self.skipped
            self.skipped = 0
            return True
        self.skipped += 1
        return False


_MINF = float("-inf")

key_type = Tuple[str, int]
# Dict to keep track of the current time bucket per pathname/lineno
_buckets: DefaultDict[key_type, LoggingBucket] = collections.defaultdict(lambda: LoggingBucket(_MINF, 0))

_rate_limit = config.logging_rate


def log_filter(record: logging.LogRecord) -> bool:
    """
    Function used to determine if a log record should be outputted or not (True = output, False = skip).

    This function will:
      - Rate limit log records based on the record filename and line number
    """
    logger = logging.getLogger(record.name)
    # If the logger is set to debug, then do not apply any limits to any log
    if not _rate_limit or logger.getEffectiveLevel() == logging.DEBUG:
        return True
    key = (record.pathname, record.lineno)
    # Only log this message if the time bucket allows it
    return _buckets[key].is_sampled(record, _rate_limit)


class SQSTraceFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        skipped = getattr(record, "skipped", 0)
        if skipped:
            skip_str = f" [{skipped} skipped]"
        else:
            skip_str = ""
        return f"{record.levelname} {super().format(record)}{skip_str}"
