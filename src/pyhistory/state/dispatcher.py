"""Commit resolved changes, announcing them unless the mutation is silent."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pyhistory.bus import Notifier
from pyhistory.state.events import ChangeEvent, HistoryEvent, KeyEvent, KeyEventKind
from pyhistory.state.resolver import ChangeSet
from pyhistory.state.store import StateStore

_logger = logging.getLogger(__name__)


def dispatch_changes(
    changes: ChangeSet,
    *,
    store: StateStore,
    notifier: Notifier,
    silent: bool = False,
    broadcast_to: Sequence[Notifier] = (),
) -> None:
    """Commit *changes* to *store*.

    Silent: commit only. Otherwise fire a non-cancellable :class:`ChangeEvent`
    whose default handling is the commit, so ``on`` listeners still observe
    the previous state, then one :class:`KeyEvent` per changed or removed key.
    """
    if silent:
        store.commit(changes.new_state)
        return

    _logger.debug(
        "Dispatching state change changed=%s removed=%s",
        list(changes.changed),
        list(changes.removed),
    )

    def _commit(_event: HistoryEvent) -> None:
        store.commit(changes.new_state)

    notifier.fire(
        ChangeEvent(
            changed=dict(changes.changed),
            removed=dict(changes.removed),
            new_val=dict(changes.new_state),
            prev_val=dict(changes.prev_state),
        ),
        default_fn=_commit,
        broadcast_to=broadcast_to,
    )

    for key, change in changes.changed.items():
        notifier.fire(
            KeyEvent(
                key=key,
                kind=KeyEventKind.CHANGED,
                new_val=change.new_val,
                prev_val=change.prev_val,
            )
        )
    for key, prev_val in changes.removed.items():
        notifier.fire(KeyEvent(key=key, kind=KeyEventKind.REMOVED, prev_val=prev_val))
