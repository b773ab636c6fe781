from typing import Mapping
from typing import Optional

from opentelemetry.context.context import Context as OtelContext
from opentelemetry.propagators.textmap import CarrierT
from opentelemetry.propagators.textmap import Getter as OtelGetter
from opentelemetry.propagators.textmap import Setter as OtelSetter
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.propagators.textmap import default_getter as otel_default_getter
from opentelemetry.propagators.textmap import default_setter as otel_default_setter
from opentelemetry.trace import NonRecordingSpan as OtelNonRecordingSpan
from opentelemetry.trace import SpanContext as OtelSpanContext
from opentelemetry.trace import set_span_in_context
from opentelemetry.trace.span import TraceFlags

from sqstrace.context import Context
from sqstrace.contrib.internal.sqs.parent_context import of_system_attributes
from sqstrace.internal.logger import get_logger
from sqstrace.propagation._carrier import Getter
from sqstrace.propagation.vendor_specific.aws_xray import TRACE_HEADER_KEY
from sqstrace.propagation.vendor_specific.aws_xray import AwsXrayPropagator


log = get_logger(__name__)


class _OtelGetterAdapter(Getter):
    """Reads a carrier through an OpenTelemetry getter, which returns lists of values."""

    def __init__(self, otel_getter):
        # type: (OtelGetter) -> None
        self._otel_getter = otel_getter

    def get(self, carrier, key):
        values = self._otel_getter.get(carrier, key)
        if not values:
            return None
        return values[0]

    def keys(self, carrier):
        return self._otel_getter.keys(carrier)


def to_otel_context(context, otel_context=None):
    # type: (Context, Optional[OtelContext]) -> OtelContext
    """Set a remote ``context`` as the parent span of an OpenTelemetry context.

    A root ``context`` leaves ``otel_context`` untouched.
    """
    if otel_context is None:
        otel_context = OtelContext()

    if context.is_root:
        return otel_context

    tf = TraceFlags(TraceFlags.SAMPLED if context.sampled else TraceFlags.DEFAULT)
    span_context = OtelSpanContext(context.trace_id, context.span_id, context.is_remote, tf)
    return set_span_in_context(OtelNonRecordingSpan(span_context), otel_context)


def sqs_parent_context(system_attributes, otel_context=None):
    # type: (Optional[Mapping[str, str]], Optional[OtelContext]) -> OtelContext
    """OpenTelemetry context to start the spans processing an SQS message with."""
    return to_otel_context(of_system_attributes(system_attributes), otel_context)


class AwsXrayTextMapPropagator(TextMapPropagator):
    """OpenTelemetry propagator extracting the ``X-Amzn-Trace-Id`` header.

    Only extraction is supported, :meth:`inject` leaves the carrier untouched.
    """

    def extract(
        self,
        carrier: CarrierT,
        context: Optional[OtelContext] = None,
        getter: OtelGetter[CarrierT] = otel_default_getter,
    ) -> OtelContext:
        xray_context = AwsXrayPropagator.extract(carrier, _OtelGetterAdapter(getter))
        return to_otel_context(xray_context, context)

    def inject(
        self,
        carrier: CarrierT,
        context: Optional[OtelContext] = None,
        setter: OtelSetter[CarrierT] = otel_default_setter,
    ) -> None:
        log.debug("%s does not support injection, %s is not set", type(self).__name__, TRACE_HEADER_KEY)

    @property
    def fields(self):
        return {TRACE_HEADER_KEY}
