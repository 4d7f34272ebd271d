from __future__ import annotations

import pytest

from tests.commerce.helpers import DummySession, FakeMarketplace


@pytest.fixture
def marketplace(monkeypatch) -> FakeMarketplace:
    market = FakeMarketplace()
    market.install(monkeypatch)
    return market


@pytest.fixture
def session() -> DummySession:
    return DummySession()
