"""
Tests for deep structural equality.
"""

from collections import OrderedDict
from types import SimpleNamespace

import pytest

from importmock.doubles.equality import deep_equal
from importmock.doubles.stub import Call


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class OtherPoint(Point):
    pass


class TestPrimitives:
    """Test scalar comparison."""

    @pytest.mark.parametrize("value", [None, True, 0, 1.5, "text", b"bytes", 2j])
    def test_equal_to_itself(self, value):
        assert deep_equal(value, value)

    @pytest.mark.parametrize(
        "left,right",
        [
            (1, 1.0),
            (1, True),
            (0, False),
            ("1", 1),
            (b"a", "a"),
            (None, 0),
            ({1: "a"}, {True: "a"}),
            ({1: "a"}, {1.0: "a"}),
            ({1}, {1.0}),
            ({0}, {False}),
            (frozenset({1}), frozenset({True})),
            ({(1, 2): "a"}, {(1.0, 2): "a"}),
        ],
    )
    def test_different_types_never_match(self, left, right):
        assert not deep_equal(left, right)

    def test_different_values(self):
        assert not deep_equal(2, 3)
        assert not deep_equal("a", "b")


class TestContainers:
    """Test sequences, mappings and sets."""

    def test_nested_structures(self):
        left = {"a": [1, {"b": (2, 3)}], "c": {4, 5}}
        right = {"a": [1, {"b": (2, 3)}], "c": {5, 4}}

        assert deep_equal(left, right)

    def test_list_is_not_tuple(self):
        assert not deep_equal([1, 2], (1, 2))

    def test_length_mismatch(self):
        assert not deep_equal([1, 2], [1, 2, 3])

    def test_extra_key(self):
        assert not deep_equal({"a": 1}, {"a": 1, "b": 2})

    def test_nested_value_types_are_strict(self):
        assert not deep_equal({"a": [1]}, {"a": [1.0]})

    def test_mapping_order_is_irrelevant(self):
        assert deep_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})

    def test_mapping_types_must_match(self):
        assert not deep_equal(OrderedDict(a=1), {"a": 1})

    def test_equal_sets_with_mixed_members(self):
        assert deep_equal({1, "a", (2, 3)}, {(2, 3), "a", 1})

    def test_strict_keys_still_look_up_values(self):
        assert not deep_equal({1: "a"}, {1: "b"})

    def test_set_and_frozenset_differ(self):
        assert not deep_equal({1}, frozenset({1}))


class TestCalls:
    """Test recorded calls, which carry keyword arguments beside the tuple."""

    def test_equal_calls(self):
        assert deep_equal(Call((1,), {"a": [1]}), Call((1,), {"a": [1]}))

    def test_keyword_arguments_are_compared(self):
        assert not deep_equal(Call((1,), {"a": 1}), Call((1,), {"a": 2}))
        assert not deep_equal(Call((1,), {"a": 1}), Call((1,)))

    def test_keyword_values_are_strict(self):
        assert not deep_equal(Call((), {"a": 1}), Call((), {"a": True}))


class TestObjects:
    """Test attribute-wise comparison of objects."""

    def test_equal_attributes(self):
        assert deep_equal(Point(1, [2]), Point(1, [2]))

    def test_different_attributes(self):
        assert not deep_equal(Point(1, 2), Point(1, 3))

    def test_subclass_is_a_different_type(self):
        assert not deep_equal(Point(1, 2), OtherPoint(1, 2))

    def test_namespaces(self):
        assert deep_equal(SimpleNamespace(a=[1]), SimpleNamespace(a=[1]))

    def test_functions_compare_by_identity(self):
        def first():
            pass

        def second():
            pass

        assert deep_equal(first, first)
        assert not deep_equal(first, second)

    def test_objects_without_dict_use_eq(self):
        assert deep_equal(range(3), range(3))
        assert not deep_equal(range(3), range(4))


class TestCycles:
    """Test self-referencing values."""

    def test_self_referencing_lists(self):
        left = [1]
        left.append(left)
        right = [1]
        right.append(right)

        assert deep_equal(left, right)

    def test_self_referencing_lists_with_different_values(self):
        left = [1]
        left.append(left)
        right = [2]
        right.append(right)

        assert not deep_equal(left, right)

    def test_cyclic_objects(self):
        left = Point(1, None)
        left.y = left
        right = Point(1, None)
        right.y = right

        assert deep_equal(left, right)

    def test_shared_reference_is_not_a_cycle(self):
        shared = [1, 2]

        assert deep_equal([shared, shared], [[1, 2], [1, 2]])
