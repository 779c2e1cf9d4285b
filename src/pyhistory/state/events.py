"""History change events.

A notifying mutation produces one :class:`ChangeEvent` followed by one
:class:`KeyEvent` per affected key.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class EventType(StrEnum):
    CHANGE = "change"
    KEY = "key"

    @staticmethod
    def from_name(name: str) -> tuple[EventType, str | None, KeyEventKind | None]:
        """Parse a legacy event name.

        ``"change"`` maps to the global change event; ``"<key>Change"`` and
        ``"<key>Remove"`` map to key events filtered by key and kind.
        """
        if name in (EventType.CHANGE, EventType.KEY):
            return EventType(name), None, None
        for kind in KeyEventKind:
            suffix = kind.suffix
            if name.endswith(suffix) and len(name) > len(suffix):
                return EventType.KEY, name[: -len(suffix)], kind
        raise ValueError(f"Unknown history event name: {name!r}")


class KeyEventKind(StrEnum):
    CHANGED = "changed"
    REMOVED = "removed"

    @property
    def suffix(self) -> str:
        return "Change" if self is KeyEventKind.CHANGED else "Remove"


class ValueChange(BaseModel):
    """Before/after values of a single added or changed key."""

    model_config = ConfigDict(frozen=True)

    new_val: Any
    prev_val: Any = None


class ChangeEvent(BaseModel):
    """Global state change, broadcast to every listener scope of the store."""

    event_type: ClassVar[EventType] = EventType.CHANGE

    model_config = ConfigDict(frozen=True)

    changed: dict[str, ValueChange] = Field(
        default_factory=dict,
        description="Added or changed keys. prev_val is None for added keys.",
    )
    removed: dict[str, Any] = Field(
        default_factory=dict,
        description="Removed keys mapped to their value prior to removal.",
    )
    new_val: dict[str, Any] = Field(default_factory=dict, description="Whole state after the change")
    prev_val: dict[str, Any] = Field(default_factory=dict, description="Whole state before the change")


class KeyEvent(BaseModel):
    """A single key was changed or removed.

    Replaces the dynamic ``"<key>Change"`` / ``"<key>Remove"`` event names.
    """

    event_type: ClassVar[EventType] = EventType.KEY

    model_config = ConfigDict(frozen=True)

    key: str
    kind: KeyEventKind
    new_val: Any = None
    prev_val: Any = None

    @property
    def name(self) -> str:
        """Legacy event name, e.g. ``"pageChange"``."""
        return f"{self.key}{self.kind.suffix}"


HistoryEvent = ChangeEvent | KeyEvent
