from __future__ import annotations

import pytest

from pyhistory.state.store import StateStore, reset_default_store


@pytest.fixture(autouse=True)
def store() -> StateStore:
    """Give every test its own process-wide store."""
    return reset_default_store()
