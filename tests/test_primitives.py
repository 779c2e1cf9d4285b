from __future__ import annotations

from pyhistory.state.primitives import is_absent, shallow_merge, strict_equals


def test_strict_equals_compares_scalars_by_value() -> None:
    assert strict_equals("abc", "".join(["a", "b", "c"]))
    assert strict_equals(10**20, 10**20)
    assert strict_equals(1.5, 1.5)


def test_strict_equals_distinguishes_types() -> None:
    assert not strict_equals(True, 1)
    assert not strict_equals(1, 1.0)
    assert not strict_equals("1", 1)


def test_strict_equals_uses_identity_for_composites() -> None:
    items = [1, 2]
    assert strict_equals(items, items)
    assert not strict_equals([1, 2], [1, 2])
    assert not strict_equals({"a": 1}, {"a": 1})


def test_strict_equals_nan_only_equal_to_same_object() -> None:
    nan = float("nan")
    assert strict_equals(nan, nan)
    assert not strict_equals(nan, float("nan"))


def test_shallow_merge_keeps_none_and_does_not_mutate_inputs() -> None:
    base = {"a": 1, "b": 2}
    patch = {"b": None, "c": 3}

    merged = shallow_merge(base, patch)

    assert merged == {"a": 1, "b": None, "c": 3}
    assert base == {"a": 1, "b": 2}
    assert patch == {"b": None, "c": 3}


def test_is_absent_only_for_none() -> None:
    assert is_absent(None)
    assert not is_absent(0)
    assert not is_absent("")
    assert not is_absent(False)
