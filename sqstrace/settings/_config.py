from typing import Optional

from envier import En
from envier import validators


DEFAULT_FILE_SIZE_BYTES = 15 << 20  # 15 MB

_LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def _validate_non_negative_int(r: int) -> None:
    if r < 0:
        raise ValueError("value must be non negative")


class SQSTraceConfig(En):
    __prefix__ = "sqstrace"

    debug = En.v(
        bool,
        "debug",
        default=False,
        help_type="Boolean",
        help="Set the level of the sqstrace logger to DEBUG",
    )

    logging_rate = En.v(
        int,
        "logging_rate",
        default=60,
        help_type="Integer",
        help="Minimum number of seconds between two identical log records. 0 disables rate limiting",
        validator=_validate_non_negative_int,
    )

    log_stream_handler = En.v(
        bool,
        "log_stream_handler",
        default=True,
        help_type="Boolean",
        help="Attach a stream handler to the sqstrace logger",
    )

    log_file = En.v(
        Optional[str],
        "log_file",
        default=None,
        help_type="String",
        help="Path of a file the sqstrace logs are routed to",
    )

    log_file_level = En.v(
        str,
        "log_file_level",
        default="DEBUG",
        parser=str.upper,
        validator=validators.choice(_LOG_LEVELS),
        help_type="String",
        help="Level of the records written to the log file",
    )

    log_file_size_bytes = En.v(
        int,
        "log_file_size_bytes",
        default=DEFAULT_FILE_SIZE_BYTES,
        help_type="Integer",
        help="Maximum size of the log file before it is rotated",
        validator=_validate_non_negative_int,
    )

    class SQSConfig(En):
        __item__ = __prefix__ = "sqs"

        distributed_tracing = En.v(
            bool,
            "distributed_tracing",
            default=True,
            help_type="Boolean",
            help="Extract the parent context from the AWSTraceHeader system attribute of received messages",
        )

    class XrayConfig(En):
        __item__ = __prefix__ = "xray"

        lambda_fallback = En.v(
            bool,
            "lambda_fallback",
            default=True,
            help_type="Boolean",
            help="Fall back to the _X_AMZN_TRACE_ID environment variable set by the AWS Lambda runtime",
        )


config = SQSTraceConfig()
