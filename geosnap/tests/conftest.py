import os
import tempfile
from uuid import uuid4

import pytest

# Must run before geosnap.utils.config is imported anywhere
_tmp_dir = tempfile.mkdtemp(prefix="geosnap-test-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"

from fastapi.testclient import TestClient  # noqa: E402

from geosnap.main import app  # noqa: E402


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def make_user(client):
    def _make(password: str = "secret123"):
        name = f"user_{uuid4().hex[:8]}"
        r = client.post("/api/auth/register", json={
            "username": name, "email": f"{name}@example.com", "password": password})
        assert r.status_code == 201, r.text
        body = r.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}
    return _make


@pytest.fixture
def make_photo(client):
    def _make(headers, lat=10.7769, lng=106.7009, rating=0, address=None, caption=None):
        r = client.post("/api/photos", headers=headers, json={
            "image": "data:image/png;base64,AAAA",
            "latitude": lat,
            "longitude": lng,
            "rating": rating,
            "address": address,
            "caption": caption,
        })
        assert r.status_code == 201, r.text
        return r.json()["photo"]
    return _make
