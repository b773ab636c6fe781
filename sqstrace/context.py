from dataclasses import dataclass
from typing import Optional

from .constants import AUTO_KEEP
from .constants import USER_KEEP


@dataclass(frozen=True)
class Context:
    """
    Represents the parent of the spans created while processing a message.

    A ``Context()`` built with no arguments is the root context: it has no
    ancestry and any span created from it starts a new trace. Propagators
    build remote contexts, which reference a span that lives in another
    process.

    Instances are immutable and can be shared freely between threads.
    """

    trace_id: Optional[int] = None
    span_id: Optional[int] = None
    sampling_priority: Optional[int] = None
    is_remote: bool = False

    @property
    def is_root(self):
        # type: () -> bool
        return self.trace_id is None or self.span_id is None

    @property
    def sampled(self):
        # type: () -> Optional[bool]
        """Sampling decision carried by the context, ``None`` when deferred to the local sampler."""
        if self.sampling_priority is None:
            return None
        return self.sampling_priority in (AUTO_KEEP, USER_KEEP)

    @property
    def trace_id_hex(self):
        # type: () -> Optional[str]
        if self.trace_id is None:
            return None
        return "{:032x}".format(self.trace_id)

    @property
    def span_id_hex(self):
        # type: () -> Optional[str]
        if self.span_id is None:
            return None
        return "{:016x}".format(self.span_id)

    def __repr__(self):
        # type: () -> str
        return "Context(trace_id=%s, span_id=%s, sampling_priority=%s, is_remote=%s)" % (
            self.trace_id,
            self.span_id,
            self.sampling_priority,
            self.is_remote,
        )
