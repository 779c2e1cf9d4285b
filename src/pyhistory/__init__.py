"""pyhistory - Shared history state with change tracking and notification."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyhistory")
except PackageNotFoundError:
    __version__ = "0+local"
from pyhistory.bus import EventBus, EventPhase, Notifier, Subscription
from pyhistory.config import HistoryConfig
from pyhistory.exceptions import HistoryConfigError, HistoryError, HistoryInvalidArgumentError
from pyhistory.history import History
from pyhistory.state.events import ChangeEvent, EventType, KeyEvent, KeyEventKind, ValueChange
from pyhistory.state.primitives import shallow_merge, strict_equals
from pyhistory.state.resolver import ChangeSet, resolve_changes
from pyhistory.state.store import StateStore, default_store, reset_default_store

__all__ = [
    "__version__",
    "ChangeEvent",
    "ChangeSet",
    "EventBus",
    "EventPhase",
    "EventType",
    "History",
    "HistoryConfig",
    "HistoryConfigError",
    "HistoryError",
    "HistoryInvalidArgumentError",
    "KeyEvent",
    "KeyEventKind",
    "Notifier",
    "StateStore",
    "Subscription",
    "ValueChange",
    "default_store",
    "reset_default_store",
    "resolve_changes",
    "shallow_merge",
    "strict_equals",
]
