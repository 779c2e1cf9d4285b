from __future__ import annotations

import pytest

from pyhistory.config import HistoryConfig
from pyhistory.exceptions import HistoryConfigError


def test_defaults() -> None:
    config = HistoryConfig()
    assert config.initial_state is None
    assert config.strict_keys is False


def test_from_env_reads_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYHISTORY_STRICT_KEYS", "yes")
    monkeypatch.setenv("PYHISTORY_INITIAL_STATE", '{"page": 2, "q": "shoes"}')

    config = HistoryConfig.from_env()

    assert config.strict_keys is True
    assert config.initial_state == {"page": 2, "q": "shoes"}


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYHISTORY_STRICT_KEYS", "1")
    monkeypatch.setenv("PYHISTORY_INITIAL_STATE", '{"page": 2}')

    config = HistoryConfig.from_env(strict_keys=False, initial_state={"page": 5})

    assert config.strict_keys is False
    assert config.initial_state == {"page": 5}


def test_from_env_unknown_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYHISTORY_STRICT_KEYS", "maybe")
    monkeypatch.delenv("PYHISTORY_INITIAL_STATE", raising=False)

    assert HistoryConfig.from_env().strict_keys is False


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "3"])
def test_from_env_rejects_bad_initial_state(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("PYHISTORY_INITIAL_STATE", raw)

    with pytest.raises(HistoryConfigError):
        HistoryConfig.from_env()
