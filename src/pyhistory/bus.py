"""Synchronous, ordered event delivery.

:class:`EventBus` is the publish/subscribe substrate used by ``History``.
Listeners run in two phases: ``on`` listeners before the event's default
handling and ``after`` listeners once it has completed. A bus can broadcast an
event to other buses (the store-wide scope) in the same firing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol

from pyhistory.state.events import EventType, HistoryEvent, KeyEvent, KeyEventKind

_logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventPhase(StrEnum):
    ON = "on"
    AFTER = "after"


class Notifier(Protocol):
    """Anything that can deliver history events to subscribers."""

    def fire(
        self,
        event: HistoryEvent,
        *,
        default_fn: Callable[[HistoryEvent], None] | None = None,
        broadcast_to: Sequence[Notifier] = (),
    ) -> None: ...

    def deliver(self, event: HistoryEvent, phase: EventPhase) -> None: ...


@dataclass(slots=True)
class Subscription:
    """A registered listener.

    ``key`` and ``kind`` only apply to :attr:`EventType.KEY` subscriptions;
    ``None`` matches any value.
    """

    bus: EventBus
    event_type: EventType
    listener: Listener
    phase: EventPhase = EventPhase.ON
    key: str | None = None
    kind: KeyEventKind | None = None
    active: bool = field(default=True)

    def matches(self, event: HistoryEvent) -> bool:
        if not self.active or event.event_type != self.event_type:
            return False
        if isinstance(event, KeyEvent):
            if self.key is not None and event.key != self.key:
                return False
            if self.kind is not None and event.kind != self.kind:
                return False
        return True

    def detach(self) -> None:
        self.bus.unsubscribe(self)


class EventBus:
    """In-process event target with on/after phases."""

    def __init__(self, *, name: str = "history") -> None:
        self.name = name
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self,
        event_type: EventType | str,
        listener: Listener,
        *,
        phase: EventPhase = EventPhase.ON,
        key: str | None = None,
        kind: KeyEventKind | None = None,
    ) -> Subscription:
        """Register *listener*.

        *event_type* also accepts a legacy name such as ``"pageChange"``,
        which is translated into a key subscription.
        """
        if not isinstance(event_type, EventType):
            event_type, name_key, name_kind = EventType.from_name(event_type)
            key = name_key if name_key is not None else key
            kind = name_kind if name_kind is not None else kind
        subscription = Subscription(
            bus=self,
            event_type=event_type,
            listener=listener,
            phase=phase,
            key=key,
            kind=kind,
        )
        self._subscriptions.append(subscription)
        return subscription

    def on(self, event_type: EventType | str, listener: Listener, **filters: Any) -> Subscription:
        return self.subscribe(event_type, listener, phase=EventPhase.ON, **filters)

    def after(self, event_type: EventType | str, listener: Listener, **filters: Any) -> Subscription:
        return self.subscribe(event_type, listener, phase=EventPhase.AFTER, **filters)

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.active = False
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]

    def detach_all(self) -> None:
        for subscription in self._subscriptions:
            subscription.active = False
        self._subscriptions = []

    def deliver(self, event: HistoryEvent, phase: EventPhase) -> None:
        """Call every listener of *phase* matching *event*, in subscription order."""
        # Snapshot so listeners may (un)subscribe while being notified.
        for subscription in list(self._subscriptions):
            if subscription.phase != phase or not subscription.matches(event):
                continue
            try:
                subscription.listener(event)
            except Exception:
                _logger.warning(
                    "History listener failed bus=%s event=%s",
                    self.name,
                    event.event_type,
                    exc_info=True,
                )

    def fire(
        self,
        event: HistoryEvent,
        *,
        default_fn: Callable[[HistoryEvent], None] | None = None,
        broadcast_to: Sequence[Notifier] = (),
    ) -> None:
        """Deliver *event*: ``on`` listeners, then *default_fn*, then ``after`` listeners.

        Each phase reaches this bus first and then every bus in *broadcast_to*.
        """
        targets: list[Notifier] = [self, *broadcast_to]
        for target in targets:
            target.deliver(event, EventPhase.ON)
        if default_fn is not None:
            default_fn(event)
        for target in targets:
            target.deliver(event, EventPhase.AFTER)
