"""
Read-only access to the carriers trace context travels in.

A carrier is anything holding string keys and values: message system
attributes, HTTP headers, a WSGI environ. Propagators never touch carriers
directly, they go through a :class:`Getter` so callers can hand over whatever
container they already hold without copying it into a ``dict``.
"""
import abc
from typing import Any
from typing import Iterable
from typing import Mapping
from typing import Optional


class Getter(metaclass=abc.ABCMeta):
    """Reads values out of a carrier."""

    @abc.abstractmethod
    def get(self, carrier, key):
        # type: (Any, str) -> Optional[str]
        """Return the value stored under ``key``, or ``None`` when the carrier does not hold it."""

    @abc.abstractmethod
    def keys(self, carrier):
        # type: (Any) -> Iterable[str]
        """Return the keys held by the carrier, in no particular order."""


class DictGetter(Getter):
    """Getter for ``Mapping`` carriers. ``None`` reads as an empty carrier."""

    def get(self, carrier, key):
        # type: (Optional[Mapping[str, Any]], str) -> Optional[str]
        if not carrier:
            return None
        value = carrier.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="backslashreplace")
        return value

    def keys(self, carrier):
        # type: (Optional[Mapping[str, Any]]) -> Iterable[str]
        if not carrier:
            return []
        return list(carrier.keys())


default_getter = DictGetter()


def find_header_value(possible_header_names, carrier, getter=default_getter):
    # type: (frozenset, Any, Getter) -> Optional[str]
    """Case-insensitive lookup of the first key of ``carrier`` found in ``possible_header_names``.

    ``possible_header_names`` must hold lowercased names.
    """
    for key in getter.keys(carrier):
        if key.lower() in possible_header_names:
            return getter.get(carrier, key)
    return None
