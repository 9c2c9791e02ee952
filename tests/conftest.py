import copy
import json

import pytest
from fastapi.testclient import TestClient

from DOGMARKET.core.database import JsonDocumentStore, get_store
from DOGMARKET.core.rate_limit import limiter
from DOGMARKET.main import app

SEED = {
    "users": [],
    "products": [
        {"id": "p1", "title": "Labrador Retriever - 4 months", "price": 120000, "category": "Puppy",
         "image": "/uploads/lab.jpg", "vendorId": "v101"},
        {"id": "p2", "title": "Premium Dog Leash (leather)", "price": 5500, "category": "Accessory",
         "image": "/uploads/leash.jpg", "vendorId": "v102"},
    ],
    "vendors": [
        {"id": "v101", "name": "Happy Paws Kennel", "location": "Lagos", "rating": 4.8},
        {"id": "v102", "name": "Urban Pet Supplies", "location": "Abuja", "rating": 4.5},
    ],
    "vets": [
        {"id": "vet201", "name": "Dr. Amina Bello", "clinic": "Lagos Vet Clinic", "lat": 6.5244,
         "lng": 3.3792, "license": "VET-001", "specialty": "Surgery"},
    ],
    "orders": [],
}


@pytest.fixture
def seed():
    return copy.deepcopy(SEED)


@pytest.fixture
def store(tmp_path, seed):
    path = tmp_path / "db.json"
    path.write_text(json.dumps(seed), encoding="utf-8")
    return JsonDocumentStore(str(path))


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    directory = tmp_path / "uploads"
    monkeypatch.setattr("DOGMARKET.media.upload.UPLOAD_DIR", str(directory))
    return directory


@pytest.fixture
def client(store, upload_dir):
    limiter.enabled = False
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def register(client):
    """Register a user and return (auth headers, user dict)."""
    counter = {"n": 0}

    def _register(role="buyer", name=None, email=None, password="secret123"):
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@dogmarket.ng"
        resp = client.post(
            "/api/auth/register",
            json={"name": name or f"{role.title()} {counter['n']}", "email": email,
                  "password": password, "role": role},
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return _register
