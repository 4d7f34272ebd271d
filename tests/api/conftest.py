from __future__ import annotations

from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from app.api.routes import cart as cart_routes
from app.api.routes import credits as credits_routes
from app.api.routes import orders as orders_routes
from app.api.routes import promotions as promotions_routes
from app.main import app
from app.services.actor_auth import get_current_actor_id
from tests.commerce.helpers import DummySessionLocal


class ApiHarness:
    def __init__(self, session_local: DummySessionLocal) -> None:
        self.session_local = session_local
        self.client = TestClient(app)
        self.actor_id: UUID | None = uuid4()

    def act_as(self, actor_id: UUID | None) -> None:
        self.actor_id = actor_id


@pytest.fixture
def api(monkeypatch, marketplace):
    session_local = DummySessionLocal()
    for module in (orders_routes, cart_routes, promotions_routes, credits_routes):
        monkeypatch.setattr(module, "SessionLocal", session_local)

    harness = ApiHarness(session_local)
    app.dependency_overrides[get_current_actor_id] = lambda: harness.actor_id
    yield harness
    app.dependency_overrides.pop(get_current_actor_id, None)
