"""
Call-recording stand-in callables.

Usage:
    from importmock import Call, stub

    send = stub("send").expects("alice", subject="hi").returns(True)
    assert send("alice", subject="hi") is True
    assert send.get_calls() == [Call(("alice",), {"subject": "hi"})]

    clock = stub().returns(lambda *args: 42)    # producer, called per call
    broken = stub().throws(ConnectionError("down"))
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from importmock.core.exceptions import UnexpectedArgumentsError
from importmock.doubles.equality import deep_equal

logger = logging.getLogger(__name__)


class Call(tuple):
    """
    Arguments of one stub invocation.

    A tuple of the positional arguments; keyword arguments are kept in
    ``kwargs``. A call without keyword arguments compares equal to the plain
    tuple of its positional arguments.
    """

    def __new__(cls, args: Tuple[Any, ...] = (), kwargs: Optional[Dict[str, Any]] = None):
        call = super().__new__(cls, args)
        call.kwargs = dict(kwargs or {})
        return call

    @property
    def args(self) -> Tuple[Any, ...]:
        return tuple(self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Call):
            return tuple(self) == tuple(other) and self.kwargs == other.kwargs
        if isinstance(other, tuple):
            return not self.kwargs and tuple(self) == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = tuple.__hash__

    def matches(self, other: "Call") -> bool:
        """Deep structural comparison of positional and keyword arguments."""
        return deep_equal(tuple(self), tuple(other)) and deep_equal(self.kwargs, other.kwargs)

    def __repr__(self) -> str:
        parts = [repr(arg) for arg in self]
        parts.extend(f"{key}={value!r}" for key, value in self.kwargs.items())
        return f"({', '.join(parts)})"


class _Raise:
    def __init__(self, error: BaseException):
        self.error = error


class _Produce:
    def __init__(self, producer):
        self.producer = producer


_UNSET = object()


class Stub:
    """
    A callable test double that records its calls.

    Configuration methods return the stub so they can be chained. ``clear()``
    forgets both the recorded calls and the configuration.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self._calls: List[Call] = []
        self._expected: Optional[Call] = None
        self._behaviour: Any = _UNSET

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        call = Call(args, kwargs)
        self._calls.append(call)

        if self._expected is not None and not self._expected.matches(call):
            raise UnexpectedArgumentsError(self.name, self._expected, call)

        behaviour = self._behaviour
        if isinstance(behaviour, _Raise):
            raise behaviour.error
        if isinstance(behaviour, _Produce):
            return behaviour.producer(*args, **kwargs)
        if behaviour is _UNSET:
            return None
        return behaviour

    # ========================================================================
    # Configuration
    # ========================================================================

    def expects(self, *args: Any, **kwargs: Any) -> "Stub":
        """
        Require every subsequent call to match these arguments.

        Matching uses deep structural equality, so separately built but
        equal values (lists, dicts, objects with equal attributes) match.
        """
        self._expected = Call(args, kwargs)
        return self

    def returns(self, value: Any) -> "Stub":
        """
        Return ``value`` from every call.

        If ``value`` is callable it is treated as a producer instead: it is
        called with each call's arguments and its result is returned.
        """
        self._behaviour = _Produce(value) if callable(value) else value
        return self

    def throws(self, error: Any) -> "Stub":
        """Raise ``error`` (an exception instance or class) from every call."""
        if isinstance(error, type) and issubclass(error, BaseException):
            error = error()
        if not isinstance(error, BaseException):
            raise TypeError(f"throws() needs an exception, got {type(error).__name__}")
        self._behaviour = _Raise(error)
        return self

    def clear(self) -> "Stub":
        """Forget recorded calls, the expectation and the return behaviour."""
        self._calls.clear()
        self._expected = None
        self._behaviour = _UNSET
        return self

    # Aliases
    set_expected_args = expects
    set_return_value = returns

    # ========================================================================
    # Inspection
    # ========================================================================

    def get_calls(self) -> List[Call]:
        """Recorded calls in invocation order (a copy)."""
        return list(self._calls)

    @property
    def call_count(self) -> int:
        return len(self._calls)

    @property
    def called(self) -> bool:
        return bool(self._calls)

    @property
    def last_call(self) -> Optional[Call]:
        return self._calls[-1] if self._calls else None

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<Stub{label} calls={len(self._calls)}>"


def stub(name: Optional[str] = None) -> Stub:
    """
    Create a new stub.

    Args:
        name: Optional label used in error messages

    Returns:
        Stub with no expectation that returns None
    """
    return Stub(name)


__all__ = ["Call", "Stub", "stub"]
