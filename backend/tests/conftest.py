import pytest
from fastapi.testclient import TestClient

from bloglist.config import Settings
from bloglist.main import create_app

TEST_SECRET = "test-secret-for-blog-list-tokens-0123456789"

INITIAL_USERS = [
    {"username": "aleckshen", "name": "aleck", "password": "shen"},
    {"username": "ashleeshum", "name": "ashlee", "password": "shum"},
]

INITIAL_BLOGS = [
    {"title": "Alecks blog", "author": "Aleck", "url": "https://www.aleckshen.com/", "likes": 4},
    {"title": "Ashlees blog", "author": "Ashlee", "url": "https://www.ashleeshum.com/", "likes": 8},
]


@pytest.fixture
def settings(monkeypatch):
    """Test settings backed by a fresh in-memory SQLite database."""
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.delenv("TEST_DATABASE_URL", raising=False)
    monkeypatch.delenv("JWT_EXPIRE_SECONDS", raising=False)
    return Settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


def _login(client, username, password):
    r = client.post("/api/login", json={"username": username, "password": password})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def seeded(client):
    """Register the initial users and create the initial blogs as the first one.

    Returns auth headers per username.
    """
    headers = {}
    for u in INITIAL_USERS:
        r = client.post("/api/users", json=u)
        assert r.status_code == 201
        headers[u["username"]] = _login(client, u["username"], u["password"])
    for b in INITIAL_BLOGS:
        r = client.post("/api/blogs", json=b, headers=headers["aleckshen"])
        assert r.status_code == 201
    return headers


@pytest.fixture
def blogs_in_db(client):
    return lambda: client.get("/api/blogs").json()
