"""Shared fixtures for itemledger integration tests.

Provides a ledger store with a deterministic clock, wired through the
contract dispatcher and the REST app, so tests can exercise whole item
lifecycles without a real ledger network.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from itemledger.api.app import create_app
from itemledger.contract import Dispatcher, build_dispatcher
from itemledger.ledger import InMemoryLedgerStore

# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

_T0 = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


class SteppingClock:
    """Returns _T0, _T0 + 1s, _T0 + 2s, ... on successive calls."""

    def __init__(self, start: datetime = _T0, step: timedelta = timedelta(seconds=1)) -> None:
        self._next = start
        self._step = step
        self.issued: list[datetime] = []

    def __call__(self) -> datetime:
        ts = self._next
        self._next += self._step
        self.issued.append(ts)
        return ts


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture()
def store(clock: SteppingClock) -> InMemoryLedgerStore:
    return InMemoryLedgerStore(clock=clock)


@pytest.fixture()
def dispatcher(store: InMemoryLedgerStore) -> Dispatcher:
    return build_dispatcher(store)


@pytest.fixture()
def client(dispatcher: Dispatcher) -> TestClient:
    return TestClient(create_app(dispatcher=dispatcher), raise_server_exceptions=False)
