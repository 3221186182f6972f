"""
Deep structural equality for stub argument matching.

``deep_equal`` compares a closed set of value shapes explicitly instead of
delegating to ``==`` on containers, so that matching is strict (``1`` does
not match ``1.0`` or ``True``, a list does not match a tuple) and cyclic
values terminate.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Set, Tuple

_PRIMITIVES = (type(None), bool, int, float, complex, str, bytes)
_SEQUENCES = (list, tuple)
_SETS = (set, frozenset)


def deep_equal(left: Any, right: Any) -> bool:
    """
    Compare two values by structure and value.

    Shapes:
        - primitives: same type and ``==``
        - lists/tuples: same type, same length, element-wise (plus instance
          attributes for subclasses that have them, like ``Call.kwargs``)
        - mappings: same type, same keys (compared strictly), value-wise
        - sets: same type, same members (compared strictly)
        - objects with ``__dict__``: same type, attribute-wise
        - anything else: identity, then ``==``

    A pair of containers that is already being compared further up is
    treated as equal, so self-referencing structures compare in finite time.

    Example:
        >>> deep_equal({"a": [1, 2]}, {"a": [1, 2]})
        True
        >>> deep_equal(1, 1.0)
        False
    """
    return _compare(left, right, set())


def _tag(value: Any) -> Any:
    """Hashable stand-in for a key or set member that also carries its type."""
    if type(value) in (tuple, frozenset):
        return type(value), type(value)(_tag(item) for item in value)
    return type(value), value


def _same_members(left: Iterable[Any], right: Iterable[Any]) -> bool:
    return {_tag(item) for item in left} == {_tag(item) for item in right}


def _compare(left: Any, right: Any, active: Set[Tuple[int, int]]) -> bool:
    if left is right:
        return True
    if type(left) is not type(right):
        return False

    if isinstance(left, _PRIMITIVES):
        return left == right
    if isinstance(left, _SETS):
        return _same_members(left, right)

    key = (id(left), id(right))
    if key in active:
        return True
    active.add(key)
    try:
        if isinstance(left, _SEQUENCES):
            if len(left) != len(right) or not all(
                _compare(a, b, active) for a, b in zip(left, right)
            ):
                return False
            # Subclasses such as Call keep extra state in their instance dict
            if hasattr(left, "__dict__"):
                return _compare(vars(left), vars(right), active)
            return True
        if isinstance(left, Mapping):
            if not _same_members(left, right):
                return False
            return all(_compare(left[k], right[k], active) for k in left)
        if hasattr(left, "__dict__") and not callable(left):
            return _compare(vars(left), vars(right), active)
        return left == right
    finally:
        active.discard(key)


__all__ = ["deep_equal"]
