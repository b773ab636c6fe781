from typing import Mapping
from typing import Optional

from sqstrace.context import Context
from sqstrace.internal.logger import get_logger
from sqstrace.propagation.vendor_specific.aws_xray import TRACE_HEADER_KEY
from sqstrace.propagation.vendor_specific.aws_xray import AwsXrayPropagator
from sqstrace.settings._config import config


log = get_logger(__name__)

# System attribute SQS stores the X-Ray trace header of a message under.
AWS_TRACE_SYSTEM_ATTRIBUTE = "AWSTraceHeader"


def of_system_attributes(system_attributes):
    # type: (Optional[Mapping[str, str]]) -> Context
    """Return the parent context of a received SQS message.

    Only the ``AWSTraceHeader`` system attribute is read. A root ``Context`` is
    returned when the attribute is missing or does not hold a valid trace header.
    """
    if not config.sqs.distributed_tracing:
        log.debug("SQS distributed tracing is disabled, using a root context")
        return Context()

    trace_header = system_attributes.get(AWS_TRACE_SYSTEM_ATTRIBUTE) if system_attributes else None
    return AwsXrayPropagator.extract({TRACE_HEADER_KEY: trace_header})
