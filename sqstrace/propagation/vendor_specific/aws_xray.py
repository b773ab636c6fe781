"""
AWS X-Ray Propagator
--------------------

The **AWS X-Ray Propagator** reads the `trace header`_ AWS services use to
carry trace context, so that spans created by a consumer get the correct
parent context.

A trace header looks like::

    Root=1-5759e988-bd862e3fe1be46a994272793;Parent=53995c3f42cd8ad8;Sampled=1

Fields are ``;`` separated ``key=value`` pairs and may come in any order.
``Root`` is the trace id, ``Parent`` the id of the span that sent the request
and ``Sampled`` the upstream sampling decision. Unknown fields are ignored.

Extraction never fails: a missing, empty or malformed header results in a root
:class:`~sqstrace.context.Context`, which starts a new trace.

**NOTE**: When the ``Sampled`` field is absent the sampling decision is left
to the local sampler. Producers should send ``Sampled=1`` so that child spans
are sampled.

Usage
-----

::

    from sqstrace.propagation.vendor_specific.aws_xray import AwsXrayPropagator

    context = AwsXrayPropagator.extract(request.headers)


API
---
.. _trace header: https://docs.aws.amazon.com/xray/latest/devguide/xray-concepts.html#xray-concepts-tracingheader
"""

import os
import re
from typing import NamedTuple
from typing import Optional

from sqstrace.constants import AUTO_KEEP
from sqstrace.constants import AUTO_REJECT
from sqstrace.context import Context
from sqstrace.internal.logger import get_logger
from sqstrace.settings._config import config

from .._carrier import default_getter
from .._carrier import find_header_value
from .._utils import possible_header_names
from ..base_propagator import BasePropagator


TRACE_HEADER_KEY = "X-Amzn-Trace-Id"
AWS_TRACE_HEADER_ENV_KEY = "_X_AMZN_TRACE_ID"
KV_PAIR_DELIMITER = ";"
KEY_AND_VALUE_DELIMITER = "="

TRACE_ID_KEY = "Root"

PARENT_ID_KEY = "Parent"
PARENT_ID_LENGTH = 16

SAMPLED_FLAG_KEY = "Sampled"
IS_SAMPLED = "1"
NOT_SAMPLED = "0"

_SAMPLED_FLAG_TO_PRIORITY = {
    IS_SAMPLED: AUTO_KEEP,
    NOT_SAMPLED: AUTO_REJECT,
}

# 1-<8 hex epoch seconds>-<24 hex unique id>
_XRAY_TRACE_ID_REGEX = re.compile(r"^1-([0-9a-fA-F]{8})-([0-9a-fA-F]{24})$")
_HEX_TRACE_ID_REGEX = re.compile(r"^[0-9a-fA-F]{32}$")
_PARENT_ID_REGEX = re.compile(r"^[0-9a-fA-F]{%d}$" % PARENT_ID_LENGTH)

# Note that due to WSGI spec we have to also check for uppercased and prefixed
# versions of this header
_POSSIBLE_TRACE_HEADER_KEYS = possible_header_names(TRACE_HEADER_KEY)


log = get_logger(__name__)


class AwsParseTraceHeaderError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class _XrayHeader(NamedTuple):
    trace_id: int
    span_id: int
    sampling_priority: Optional[int]


class AwsXrayPropagator(BasePropagator):
    """Propagator for the AWS X-Ray Trace Header propagation protocol.

    See:
    https://docs.aws.amazon.com/xray/latest/devguide/xray-concepts.html#xray-concepts-tracingheader
    """

    @staticmethod
    def extract(carrier, getter=default_getter):
        """
        Extract the parent context from the ``X-Amzn-Trace-Id`` entry of ``carrier``.

        :param carrier: object holding the trace header, a ``dict`` with the default getter.
        :param getter: :class:`~sqstrace.propagation._carrier.Getter` used to read ``carrier``.
        :return: a remote ``Context``, or a root ``Context`` when no valid header is found.
        """
        trace_header = AwsXrayPropagator._get_trace_header(carrier, getter)
        if not trace_header:
            return Context()

        if not isinstance(trace_header, str):
            log.debug("Ignoring X-Ray trace header of type %s. Returning root context.", type(trace_header).__name__)
            return Context()

        properties = AwsXrayPropagator._extract_span_properties(trace_header)
        if properties is None:
            return Context()

        return Context(
            trace_id=properties.trace_id,
            span_id=properties.span_id,
            sampling_priority=properties.sampling_priority,
            is_remote=True,
        )

    @staticmethod
    def _get_trace_header(carrier, getter):
        trace_header = getter.get(carrier, TRACE_HEADER_KEY)
        if trace_header is None:
            trace_header = find_header_value(_POSSIBLE_TRACE_HEADER_KEYS, carrier, getter)
        return trace_header

    @staticmethod
    def _extract_span_properties(trace_header):
        # type: (str) -> Optional[_XrayHeader]
        try:
            return AwsXrayPropagator._parse_trace_header(trace_header)
        except AwsParseTraceHeaderError as err:
            log.debug("%s Returning root context.", err.message)
            return None

    @staticmethod
    def _parse_trace_header(trace_header):
        # type: (str) -> _XrayHeader
        trace_id = None
        span_id = None
        sampling_priority = None

        for kv_pair_str in trace_header.split(KV_PAIR_DELIMITER):
            if not kv_pair_str.strip():
                continue
            key_str, delimiter, value_str = kv_pair_str.partition(KEY_AND_VALUE_DELIMITER)
            if not delimiter:
                raise AwsParseTraceHeaderError(
                    "Error parsing X-Ray trace header. Invalid key value pair: %r." % (kv_pair_str,)
                )
            key, value = key_str.strip(), value_str.strip()

            if key == TRACE_ID_KEY:
                trace_id = AwsXrayPropagator._parse_trace_id(value)
                if trace_id is None:
                    raise AwsParseTraceHeaderError(
                        "Invalid TraceId in X-Ray trace header: %r with value %r." % (TRACE_HEADER_KEY, trace_header)
                    )
            elif key == PARENT_ID_KEY:
                span_id = AwsXrayPropagator._parse_span_id(value)
                if span_id is None:
                    raise AwsParseTraceHeaderError(
                        "Invalid ParentId in X-Ray trace header: %r with value %r." % (TRACE_HEADER_KEY, trace_header)
                    )
            elif key == SAMPLED_FLAG_KEY:
                if value not in _SAMPLED_FLAG_TO_PRIORITY:
                    raise AwsParseTraceHeaderError(
                        "Invalid Sampling flag in X-Ray trace header: %r with value %r."
                        % (TRACE_HEADER_KEY, trace_header)
                    )
                sampling_priority = _SAMPLED_FLAG_TO_PRIORITY[value]

        if trace_id is None or span_id is None:
            raise AwsParseTraceHeaderError(
                "Missing TraceId or ParentId in X-Ray trace header: %r with value %r."
                % (TRACE_HEADER_KEY, trace_header)
            )

        return _XrayHeader(trace_id, span_id, sampling_priority)

    @staticmethod
    def _parse_trace_id(trace_id_str):
        # type: (str) -> Optional[int]
        """Parse ``1-<epoch>-<unique id>`` or a bare 32 hex characters id into a 128 bit integer."""
        match = _XRAY_TRACE_ID_REGEX.match(trace_id_str)
        if match:
            hex_trace_id = match.group(1) + match.group(2)
        elif _HEX_TRACE_ID_REGEX.match(trace_id_str):
            hex_trace_id = trace_id_str
        else:
            return None
        return int(hex_trace_id, 16) or None

    @staticmethod
    def _parse_span_id(span_id_str):
        # type: (str) -> Optional[int]
        if not _PARENT_ID_REGEX.match(span_id_str):
            return None
        return int(span_id_str, 16) or None


class AwsXrayLambdaPropagator(AwsXrayPropagator):
    """Implementation of the AWS X-Ray Trace Header propagation protocol but
    with special handling for Lambda's ``_X_AMZN_TRACE_ID`` environment
    variable.

    The environment variable is only read when the carrier does not hold a
    valid trace header and ``SQSTRACE_XRAY_LAMBDA_FALLBACK`` is enabled.
    """

    @staticmethod
    def extract(carrier, getter=default_getter):
        xray_context = AwsXrayPropagator.extract(carrier, getter)

        if xray_context.is_remote or not config.xray.lambda_fallback:
            return xray_context

        trace_header = os.environ.get(AWS_TRACE_HEADER_ENV_KEY)

        if not trace_header:
            return xray_context

        return AwsXrayPropagator.extract({TRACE_HEADER_KEY: trace_header})
