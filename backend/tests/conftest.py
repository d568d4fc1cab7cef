import os

# main.py creates tables on import; keep that off the developer's database file
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, SessionLocal, get_db, init_db
from main import app
from utils.rate_limit import limiter


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    # Same session options as the application, bound to the test engine
    return sessionmaker(**{**SessionLocal.kw, "bind": engine})


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def test_client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def register(test_client):
    """Register a user and return ``(user_id, auth_headers)``."""

    def _register(username="alice", email=None, password="secret123"):
        response = test_client.post("/register", json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        })
        assert response.status_code == 201, response.text
        data = response.json()
        return data["user"]["id"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest.fixture
def make_product(test_client):
    """Create a catalog product through the API and return its JSON."""

    def _make_product(stock=10, title="Wireless Mouse", price=19.99):
        response = test_client.post("/products", json={
            "title": title,
            "description": f"{title} description",
            "category": "electronics",
            "price": price,
            "rating": 4.5,
            "stock": stock,
        })
        assert response.status_code == 201, response.text
        return response.json()

    return _make_product
