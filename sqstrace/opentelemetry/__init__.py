"""
OpenTelemetry support
=====================

Exposes the parent context of SQS messages and ``X-Amzn-Trace-Id`` headers
through the OpenTelemetry API, so spans created with an OpenTelemetry tracer
are linked to the producer's trace::

    from opentelemetry import trace

    from sqstrace.opentelemetry import sqs_parent_context

    tracer = trace.get_tracer(__name__)

    for message in messages:
        parent = sqs_parent_context(message.get("Attributes", {}))
        with tracer.start_as_current_span("sqs.process", context=parent, kind=trace.SpanKind.CONSUMER):
            handle(message)

``AwsXrayTextMapPropagator`` can also be configured as an OpenTelemetry
propagator with ``OTEL_PROPAGATORS=sqstrace_xray``. It only extracts context.
"""
from .propagator import AwsXrayTextMapPropagator
from .propagator import sqs_parent_context
from .propagator import to_otel_context


__all__ = ["AwsXrayTextMapPropagator", "sqs_parent_context", "to_otel_context"]
