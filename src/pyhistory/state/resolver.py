"""Change resolution.

Compares a candidate state (current state merged with a proposed patch)
against the previous state and classifies every affected key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pyhistory.state.events import ValueChange
from pyhistory.state.primitives import is_absent, strict_equals

_logger = logging.getLogger(__name__)


class ChangeSet(BaseModel):
    """Resolved difference between two states.

    A key appears in at most one of ``changed`` and ``removed``; ``new_state``
    never holds a ``None`` value.
    """

    model_config = ConfigDict(frozen=True)

    changed: dict[str, ValueChange] = Field(default_factory=dict)
    removed: dict[str, Any] = Field(default_factory=dict)
    new_state: dict[str, Any] = Field(default_factory=dict)
    prev_state: dict[str, Any] = Field(default_factory=dict)


def resolve_changes(
    candidate: Mapping[str, Any] | None,
    previous: Mapping[str, Any],
    *,
    equals: Callable[[Any, Any], bool] = strict_equals,
) -> ChangeSet | None:
    """Diff *candidate* against *previous*.

    Returns ``None`` when nothing was added, changed or removed.
    """
    new_state = dict(candidate or {})
    changed: dict[str, ValueChange] = {}
    removed: dict[str, Any] = {}

    for key, new_val in new_state.items():
        # Explicit None is a removal, handled below.
        if is_absent(new_val):
            continue
        prev_val = previous.get(key)
        if not equals(new_val, prev_val):
            changed[key] = ValueChange(new_val=new_val, prev_val=prev_val)

    for key, prev_val in previous.items():
        if key not in new_state or is_absent(new_state[key]):
            removed[key] = prev_val

    # Also strips keys nulled without ever having been present.
    new_state = {key: value for key, value in new_state.items() if not is_absent(value)}

    if not changed and not removed:
        _logger.debug("No state change resolved keys=%d", len(new_state))
        return None

    return ChangeSet(
        changed=changed,
        removed=removed,
        new_state=new_state,
        prev_state=dict(previous),
    )
