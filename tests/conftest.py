import mongomock
import pytest
from fastapi.testclient import TestClient

from database import ensure_indexes, get_db, get_optional_db
from main import app


@pytest.fixture
def db():
    database = mongomock.MongoClient()["qmanage_test"]
    ensure_indexes(database)
    return database


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_optional_db] = lambda: db
    # no context manager: startup would try to reach a real MongoDB
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_outlet(client):
    def _make(name="Cafe A", **extra):
        body = {"name": name, "location": "Main Block", "timings": "9 AM - 9 PM", **extra}
        response = client.post("/api/outlets", json=body)
        assert response.status_code == 201, response.text
        return response.json()["outlet"]
    return _make


@pytest.fixture
def make_menu_item(client):
    def _make(outlet_id, name="Burger", price=100, category="Snacks", **extra):
        body = {"name": name, "price": price, "category": category, "outlet": outlet_id, **extra}
        response = client.post("/api/menu-items", json=body)
        assert response.status_code == 201, response.text
        return response.json()["menuItem"]
    return _make


@pytest.fixture
def customer():
    return {"name": "Asha Rao", "email": "Asha@Campus.EDU", "phone": "9876543210"}
