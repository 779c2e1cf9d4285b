"""Equality and merge primitives used by the resolver."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# Immutable scalar types compared by value; everything else compares by identity.
_VALUE_TYPES: tuple[type, ...] = (str, int, float, complex, bool, bytes)


def is_absent(value: Any) -> bool:
    """Return ``True`` when *value* means "remove this key"."""
    return value is None


def strict_equals(left: Any, right: Any) -> bool:
    """Shallow, strict equality.

    Identical objects are equal. Distinct objects are equal only when both are
    immutable scalars of exactly the same type with equal values, so ``True``
    and ``1`` differ, ``1`` and ``1.0`` differ, and two separately built lists
    always differ. A NaN equals only the very same NaN object.
    """
    if left is right:
        return True
    if type(left) is not type(right) or not isinstance(left, _VALUE_TYPES):
        return False
    return bool(left == right)


def shallow_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new dict holding *base* overlaid with *patch*.

    ``None`` values in *patch* are kept so the resolver can tell an explicitly
    removed key from one that was never present.
    """
    merged = dict(base)
    merged.update(patch)
    return merged
