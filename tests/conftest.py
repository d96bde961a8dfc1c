import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENV", "test")

from expense_api.main import app
from expense_api.services.expense_store import ExpenseStore


@pytest.fixture(scope="function")
def store():
    return ExpenseStore()


@pytest.fixture(scope="function")
def client(store):
    previous = app.state.expense_store
    app.state.expense_store = store
    yield TestClient(app)
    app.state.expense_store = previous


@pytest.fixture
def create_expense(client):
    def _create(**overrides) -> int:
        payload = {"description": "Lunch", "amount": "12.50", "category": "food"}
        payload.update(overrides)
        resp = client.post("/api/expense", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    return _create
