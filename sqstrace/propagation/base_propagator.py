import abc

from ..context import Context
from ._carrier import Getter
from ._carrier import default_getter


class BasePropagator(metaclass=abc.ABCMeta):
    """Extraction side of a propagation format.

    Every format hands back a :class:`~sqstrace.context.Context`, so callers
    do not need to know which format produced it.
    """

    @staticmethod
    @abc.abstractmethod
    def extract(carrier, getter=default_getter):
        # type: (object, Getter) -> Context
        pass
