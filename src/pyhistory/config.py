"""History configuration for pyhistory."""

from __future__ import annotations

import dataclasses
import json
import os
from collections.abc import Mapping
from typing import Any

from pyhistory.exceptions import HistoryConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class HistoryConfig:
    """History instance configuration.

    Parameters
    ----------
    initial_state : Mapping or None
        State merged into the shared store when the instance is created.
        Values that are not a mapping (lists, callables, scalars) are ignored.
    strict_keys : bool
        Also reject empty or whitespace-only keys with
        :class:`~pyhistory.exceptions.HistoryInvalidArgumentError`. Non-string
        keys are always rejected.
    """

    initial_state: Any = None
    strict_keys: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> HistoryConfig:
        """Create configuration from environment variables.

        Reads ``PYHISTORY_STRICT_KEYS`` and ``PYHISTORY_INITIAL_STATE`` (a JSON
        object). Explicit keyword arguments override environment values.

        Raises
        ------
        HistoryConfigError
            If ``PYHISTORY_INITIAL_STATE`` is not valid JSON or not an object.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "strict_keys" not in overrides:
            config_kwargs["strict_keys"] = _env_bool(env.get("PYHISTORY_STRICT_KEYS"), False)

        raw_state = env.get("PYHISTORY_INITIAL_STATE")
        if raw_state is not None and "initial_state" not in overrides:
            try:
                parsed = json.loads(raw_state)
            except json.JSONDecodeError as exc:
                raise HistoryConfigError(f"PYHISTORY_INITIAL_STATE is not valid JSON: {exc}") from exc
            if not isinstance(parsed, Mapping):
                raise HistoryConfigError("PYHISTORY_INITIAL_STATE must be a JSON object")
            config_kwargs["initial_state"] = parsed

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
