from __future__ import annotations

from pyhistory.state.resolver import resolve_changes


def test_added_key_has_none_prev_val() -> None:
    changes = resolve_changes({"a": 1}, {})

    assert changes is not None
    assert changes.changed["a"].new_val == 1
    assert changes.changed["a"].prev_val is None
    assert changes.removed == {}
    assert changes.new_state == {"a": 1}
    assert changes.prev_state == {}


def test_unchanged_candidate_is_noop() -> None:
    assert resolve_changes({"a": 1, "b": "x"}, {"a": 1, "b": "x"}) is None


def test_nulled_key_is_removed_not_changed() -> None:
    changes = resolve_changes({"a": None, "b": 2}, {"a": 1, "b": 2})

    assert changes is not None
    assert changes.changed == {}
    assert changes.removed == {"a": 1}
    assert "a" not in changes.new_state
    assert changes.new_state == {"b": 2}


def test_key_missing_from_candidate_is_removed() -> None:
    changes = resolve_changes({"b": 2}, {"a": 1, "b": 2})

    assert changes is not None
    assert changes.removed == {"a": 1}


def test_nulling_unknown_key_is_noop() -> None:
    assert resolve_changes({"a": 1, "ghost": None}, {"a": 1}) is None


def test_nulled_unknown_key_stripped_when_other_changes_exist() -> None:
    changes = resolve_changes({"a": 2, "ghost": None}, {"a": 1})

    assert changes is not None
    assert changes.new_state == {"a": 2}
    assert "ghost" not in changes.changed
    assert "ghost" not in changes.removed


def test_structurally_equal_values_still_change() -> None:
    changes = resolve_changes({"filters": ["x"]}, {"filters": ["x"]})

    assert changes is not None
    assert "filters" in changes.changed


def test_custom_equality_comparator() -> None:
    changes = resolve_changes({"filters": ["x"]}, {"filters": ["x"]}, equals=lambda a, b: a == b)

    assert changes is None


def test_key_never_in_both_changed_and_removed() -> None:
    changes = resolve_changes({"a": None, "b": 3, "c": 4}, {"a": 1, "b": 2, "d": 5})

    assert changes is not None
    assert set(changes.changed) == {"b", "c"}
    assert set(changes.removed) == {"a", "d"}
    assert not set(changes.changed) & set(changes.removed)
    for change in changes.changed.values():
        assert change.new_val is not change.prev_val


def test_none_candidate_removes_everything() -> None:
    changes = resolve_changes(None, {"a": 1})

    assert changes is not None
    assert changes.removed == {"a": 1}
    assert changes.new_state == {}
