"""History facade: add/replace/get over the shared state store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pyhistory.bus import EventBus, EventPhase, Listener, Subscription
from pyhistory.config import HistoryConfig
from pyhistory.exceptions import HistoryInvalidArgumentError
from pyhistory.state.dispatcher import dispatch_changes
from pyhistory.state.events import EventType, KeyEventKind
from pyhistory.state.primitives import shallow_merge
from pyhistory.state.resolver import resolve_changes
from pyhistory.state.store import StateStore, default_store

_logger = logging.getLogger(__name__)


class History:
    """Handle onto the shared history state.

    Every instance attached to the same :class:`StateStore` reads and writes
    the same state. ``add`` announces changes, ``replace`` applies them
    silently. Both return the instance so calls can be chained::

        history = History()
        history.add("page", 2).add({"sort": "asc", "filter": None})
        history.get("page")  # 2

    Global change events reach this instance's listeners and the store-wide
    :attr:`global_events` bus, where listeners see changes issued by any
    instance. Per-key events only reach the issuing instance.
    """

    NAME = "historyBase"

    def __init__(
        self,
        config: HistoryConfig | None = None,
        *,
        store: StateStore | None = None,
        events: EventBus | None = None,
    ) -> None:
        self._config = config or HistoryConfig()
        self._store = store if store is not None else default_store()
        self._events = events if events is not None else EventBus(name=self.NAME)

        # Initial state goes through the notifying path like any other add().
        initial_state = self._config.initial_state
        if isinstance(initial_state, Mapping):
            self.add(initial_state)
        elif initial_state is not None:
            _logger.debug("Ignoring non-mapping initial_state type=%s", type(initial_state).__name__)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def global_events(self) -> EventBus:
        """Store-wide listener scope shared by every attached instance."""
        return self._store.events

    def add(self, state: Mapping[str, Any] | str | None, value: Any = None) -> History:
        """Merge *state* into the shared state and fire change events.

        Keys whose value is ``None`` are removed. *state* may also be a single
        key, in which case *value* becomes its new value.
        """
        self._reconcile(self._normalize(state, value), silent=False)
        return self

    def replace(self, state: Mapping[str, Any] | str | None, value: Any = None) -> History:
        """Like :meth:`add`, but no events are fired."""
        self._reconcile(self._normalize(state, value), silent=True)
        return self

    def get(self, key: str | None = None) -> Any:
        """Return the value for *key* (``None`` if absent), or a copy of all state."""
        return self._store.read(key)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on(
        self,
        event_type: EventType | str,
        listener: Listener,
        *,
        key: str | None = None,
        kind: KeyEventKind | None = None,
    ) -> Subscription:
        """Listen before the change is committed."""
        return self._events.subscribe(event_type, listener, phase=EventPhase.ON, key=key, kind=kind)

    def after(
        self,
        event_type: EventType | str,
        listener: Listener,
        *,
        key: str | None = None,
        kind: KeyEventKind | None = None,
    ) -> Subscription:
        """Listen once the change has been committed."""
        return self._events.subscribe(event_type, listener, phase=EventPhase.AFTER, key=key, kind=kind)

    def destroy(self) -> None:
        """Detach every listener registered on this instance."""
        self._events.detach_all()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _normalize(self, state: Mapping[str, Any] | str | None, value: Any) -> dict[str, Any]:
        if state is None:
            return {}
        if isinstance(state, str):
            patch = {state: value}
        elif isinstance(state, Mapping):
            patch = dict(state)
        else:
            raise HistoryInvalidArgumentError(
                f"state must be a mapping or a key string, got {type(state).__name__}",
                argument=state,
            )

        for key in patch:
            if not isinstance(key, str):
                raise HistoryInvalidArgumentError(
                    f"state keys must be strings, got {type(key).__name__}",
                    argument=key,
                )
            if self._config.strict_keys and not key.strip():
                raise HistoryInvalidArgumentError("state keys must be non-empty", argument=key)
        return patch

    def _reconcile(self, patch: dict[str, Any], *, silent: bool) -> None:
        store = self._store

        def _job() -> None:
            previous = store.state
            changes = resolve_changes(shallow_merge(previous, patch), previous, equals=store.equals)
            if changes is None:
                return
            dispatch_changes(
                changes,
                store=store,
                notifier=self._events,
                silent=silent,
                broadcast_to=(store.events,),
            )

        store.run_serialized(_job)
