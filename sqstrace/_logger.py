import logging
from logging.handlers import RotatingFileHandler
from os import path
from typing import Optional

from sqstrace.internal.logger import SQSTraceFormatter
from sqstrace.settings._config import DEFAULT_FILE_SIZE_BYTES
from sqstrace.settings._config import config


LOG_FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [%(filename)s:%(lineno)d] - %(message)s"


def configure_sqstrace_logger():
    # type: () -> None
    """Configures sqstrace log levels and file paths.

    Customization is possible with the environment variables:
        ``SQSTRACE_DEBUG``, ``SQSTRACE_LOG_FILE_LEVEL``, ``SQSTRACE_LOG_FILE`` and
        ``SQSTRACE_LOG_STREAM_HANDLER``

    By default sqstrace loggers write to a stream handler, inherit their level from
    the root logger and no logs are written to a file.

    When SQSTRACE_DEBUG has been enabled:
        - The sqstrace logger is set to DEBUG, which also disables log rate limiting
        - Logs are routed to a file when SQSTRACE_LOG_FILE is specified, using the log level
          in SQSTRACE_LOG_FILE_LEVEL.
    """
    sqstrace_logger = logging.getLogger("sqstrace")
    if config.log_stream_handler and not _has_stream_handler(sqstrace_logger):
        handler = logging.StreamHandler()
        handler.setFormatter(SQSTraceFormatter())
        sqstrace_logger.addHandler(handler)

    _configure_sqstrace_debug_logger(sqstrace_logger)
    _configure_sqstrace_file_logger(sqstrace_logger)


def _has_stream_handler(logger):
    # type: (logging.Logger) -> bool
    return any(type(h) is logging.StreamHandler for h in logger.handlers)


def _configure_sqstrace_debug_logger(logger):
    if config.debug:
        logger.setLevel(logging.DEBUG)


def _configure_sqstrace_file_logger(logger):
    _add_file_handler(
        logger=logger,
        log_path=config.log_file,
        log_level=getattr(logging, config.log_file_level),
        max_file_bytes=config.log_file_size_bytes,
    )


def _add_file_handler(
    logger: logging.Logger,
    log_path: Optional[str],
    log_level: int,
    handler_name: Optional[str] = None,
    max_file_bytes: int = DEFAULT_FILE_SIZE_BYTES,
):
    sqstrace_file_handler = None
    if log_path is not None:
        log_path = path.abspath(log_path)
        num_backup = 1

        sqstrace_file_handler = RotatingFileHandler(
            filename=log_path, mode="a", maxBytes=max_file_bytes, backupCount=num_backup
        )
        sqstrace_file_handler.setLevel(log_level)
        sqstrace_file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
        if handler_name:
            sqstrace_file_handler.set_name(handler_name)
        logger.addHandler(sqstrace_file_handler)
        logger.debug("sqstrace logs will be routed to %s", log_path)
    return sqstrace_file_handler
