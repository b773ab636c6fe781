import logging

import mock
import pytest

import sqstrace._logger
import sqstrace.internal.logger
from sqstrace._logger import _add_file_handler
from sqstrace._logger import configure_sqstrace_logger
from sqstrace.internal.logger import LoggingBucket
from sqstrace.internal.logger import SQSTraceFormatter
from sqstrace.internal.logger import get_logger

from .utils import override_config


ALL_LEVEL_NAMES = ("debug", "info", "warning", "error", "exception", "critical")


@pytest.fixture
def rate_limit():
    original = sqstrace.internal.logger._rate_limit
    sqstrace.internal.logger._rate_limit = 60
    yield
    sqstrace.internal.logger._rate_limit = original


@pytest.fixture
def sqstrace_logger():
    logger = logging.getLogger("sqstrace")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_get_logger():
    log = get_logger("sqstrace.test.logger")
    assert sqstrace.internal.logger.log_filter in log.filters
    assert log.name == "sqstrace.test.logger"
    assert isinstance(log, logging.Logger)

    # Fetching the same logger does not register the filter twice
    assert get_logger("sqstrace.test.logger") is log
    assert log.filters.count(sqstrace.internal.logger.log_filter) == 1


@mock.patch("logging.Logger.callHandlers")
def test_logger_handle_no_limit(call_handlers, rate_limit):
    log = get_logger("sqstrace.test.logger")
    log.setLevel(logging.INFO)
    sqstrace.internal.logger._rate_limit = 0

    for _ in range(1000):
        log.info("test")

    assert call_handlers.call_count == 1000
    assert sqstrace.internal.logger._buckets == dict()


@mock.patch("logging.Logger.callHandlers")
def test_logger_handle_debug(call_handlers, rate_limit):
    log = get_logger("sqstrace.test.logger")
    log.setLevel(logging.DEBUG)

    for level in ALL_LEVEL_NAMES:
        log_fn = getattr(log, level)
        for _ in range(100):
            log_fn("test")

    assert call_handlers.call_count == 100 * len(ALL_LEVEL_NAMES)


@mock.patch("logging.Logger.callHandlers")
def test_logger_handle_bucket(call_handlers, rate_limit):
    log = get_logger("sqstrace.test.logger")
    log.setLevel(logging.INFO)

    for _ in range(1000):
        log.info("test")

    # Only the first record of the call site is emitted
    assert call_handlers.call_count == 1
    assert len(sqstrace.internal.logger._buckets) == 1
    (bucket,) = sqstrace.internal.logger._buckets.values()
    assert bucket.skipped == 999


def test_logging_bucket_reports_skipped():
    record = logging.LogRecord("sqstrace", logging.INFO, "module.py", 5, "test", (), None)
    bucket = LoggingBucket(float("-inf"), 4)

    assert bucket.is_sampled(record, 60) is True
    assert record.skipped == 4
    assert bucket.skipped == 0

    assert bucket.is_sampled(record, 60) is False
    assert bucket.skipped == 1


@pytest.mark.parametrize("skipped,expected", [(0, "INFO hello"), (3, "INFO hello [3 skipped]")])
def test_formatter(skipped, expected):
    record = logging.LogRecord("sqstrace", logging.INFO, "module.py", 5, "hello", (), None)
    record.skipped = skipped
    assert SQSTraceFormatter().format(record) == expected


def test_add_file_handler(tmp_path, sqstrace_logger):
    log_path = tmp_path / "sqstrace.log"
    handler = _add_file_handler(sqstrace_logger, str(log_path), logging.WARNING, handler_name="sqstrace-file")

    assert handler in sqstrace_logger.handlers
    assert handler.level == logging.WARNING
    assert handler.get_name() == "sqstrace-file"
    assert handler.baseFilename == str(log_path)
    assert log_path.exists()


def test_add_file_handler_no_path(sqstrace_logger):
    handlers = list(sqstrace_logger.handlers)
    assert _add_file_handler(sqstrace_logger, None, logging.DEBUG) is None
    assert sqstrace_logger.handlers == handlers


def test_configure_logger_debug(sqstrace_logger):
    with override_config({"SQSTRACE_DEBUG": "true"}, [sqstrace._logger]):
        configure_sqstrace_logger()

    assert sqstrace_logger.level == logging.DEBUG


def test_configure_logger_stream_handler_added_once(sqstrace_logger):
    sqstrace_logger.handlers[:] = []
    with override_config({"SQSTRACE_LOG_STREAM_HANDLER": "true"}, [sqstrace._logger]):
        configure_sqstrace_logger()
        configure_sqstrace_logger()

    stream_handlers = [h for h in sqstrace_logger.handlers if type(h) is logging.StreamHandler]
    assert len(stream_handlers) == 1
    assert isinstance(stream_handlers[0].formatter, SQSTraceFormatter)


def test_configure_logger_no_stream_handler(sqstrace_logger):
    sqstrace_logger.handlers[:] = []
    with override_config({"SQSTRACE_LOG_STREAM_HANDLER": "false"}, [sqstrace._logger]):
        configure_sqstrace_logger()

    assert sqstrace_logger.handlers == []


def test_configure_logger_file(tmp_path, sqstrace_logger):
    log_path = tmp_path / "sqstrace.log"
    env = {"SQSTRACE_LOG_FILE": str(log_path), "SQSTRACE_LOG_FILE_LEVEL": "error"}
    with override_config(env, [sqstrace._logger]):
        configure_sqstrace_logger()

    file_handlers = [h for h in sqstrace_logger.handlers if getattr(h, "baseFilename", None) == str(log_path)]
    assert len(file_handlers) == 1
    assert file_handlers[0].level == logging.ERROR
