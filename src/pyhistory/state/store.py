"""Shared in-memory history state.

:class:`StateStore` is the only component allowed to hold history state.
:meth:`StateStore.commit` is the only code path that replaces it, and it is
reached exclusively through :func:`pyhistory.state.dispatcher.dispatch_changes`.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Mapping
from typing import Any

from pyhistory.bus import EventBus
from pyhistory.state.primitives import strict_equals

_logger = logging.getLogger(__name__)

_default_store: StateStore | None = None
_default_lock = threading.Lock()


class StateStore:
    """Single mapping of history state shared by every attached ``History``.

    The stored dict is replaced wholesale on each commit and never mutated in
    place, so readers always see a complete snapshot.
    """

    def __init__(
        self,
        *,
        equals: Callable[[Any, Any], bool] = strict_equals,
        name: str = "history",
    ) -> None:
        self.equals = equals
        self.name = name
        self.events = EventBus(name=f"{name}:global")
        self._state: dict[str, Any] = {}
        self._lock = threading.RLock()
        self._pending: deque[Callable[[], None]] = deque()
        self._draining = False

    def __len__(self) -> int:
        return len(self._state)

    def __contains__(self, key: object) -> bool:
        return key in self._state

    @property
    def state(self) -> Mapping[str, Any]:
        """The live snapshot. Treat as read-only; use :meth:`read` for a copy."""
        return self._state

    def read(self, key: str | None = None) -> Any:
        """Return the value for *key*, or a shallow copy of the whole state."""
        state = self._state
        if key is None:
            return dict(state)
        return state.get(key)

    def commit(self, new_state: Mapping[str, Any]) -> None:
        """Replace the stored state with *new_state*."""
        self._state = dict(new_state)
        _logger.debug("Committed %s state keys=%d", self.name, len(self._state))

    def run_serialized(self, job: Callable[[], None]) -> None:
        """Run *job* with exclusive access to the store.

        Other threads block until the running job, and anything it queued,
        has finished. A job submitted from the owning thread while another
        job is running (an event listener mutating state) is queued and run
        afterwards, so reconciliations never interleave.
        """
        with self._lock:
            self._pending.append(job)
            if self._draining:
                _logger.debug("Queued re-entrant %s mutation pending=%d", self.name, len(self._pending))
                return
            self._draining = True
            try:
                while self._pending:
                    self._pending.popleft()()
            except BaseException:
                if self._pending:
                    _logger.warning(
                        "Discarding %d queued %s mutation(s) after a failed reconciliation",
                        len(self._pending),
                        self.name,
                    )
                    self._pending.clear()
                raise
            finally:
                self._draining = False


def default_store() -> StateStore:
    """Return the process-wide store, creating it on first use."""
    global _default_store
    with _default_lock:
        if _default_store is None:
            _default_store = StateStore()
        return _default_store


def reset_default_store(store: StateStore | None = None) -> StateStore:
    """Replace the process-wide store (fresh one when *store* is omitted)."""
    global _default_store
    with _default_lock:
        _default_store = store if store is not None else StateStore()
        return _default_store
