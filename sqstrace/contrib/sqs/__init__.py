"""
The SQS integration resolves the parent context of messages received from
Amazon SQS.

SQS carries the AWS X-Ray trace header of a message in its ``AWSTraceHeader``
system attribute. It is only returned when requested, for example with boto3::

    response = sqs.receive_message(QueueUrl=queue_url, MessageSystemAttributeNames=["AWSTraceHeader"])

    for message in response.get("Messages", []):
        parent = of_system_attributes(message.get("Attributes", {}))

The returned :class:`~sqstrace.context.Context` is the parent to give to the
spans created while processing the message. It is a root context when the
message was not sent by an instrumented producer.

Configuration
~~~~~~~~~~~~~

.. py:data:: sqstrace.config.sqs.distributed_tracing

   Whether to extract the parent context from received messages. When disabled
   every message gets a root context.

   Can also be disabled with the ``SQSTRACE_SQS_DISTRIBUTED_TRACING`` environment variable.

   Default: ``True``
"""
from sqstrace.contrib.internal.sqs.parent_context import AWS_TRACE_SYSTEM_ATTRIBUTE
from sqstrace.contrib.internal.sqs.parent_context import of_system_attributes


__all__ = ["AWS_TRACE_SYSTEM_ATTRIBUTE", "of_system_attributes"]
