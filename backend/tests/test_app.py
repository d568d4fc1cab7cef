from fastapi.testclient import TestClient

from main import app
from routes.cart import get_cart_manager
from services.cart_manager import CartManager
from tests.fakes import InMemoryCartStore


def test_root(test_client: TestClient):
    response = test_client.get("/")

    assert response.status_code == 200
    assert "message" in response.json()


def test_unknown_route_uses_error_body(test_client: TestClient):
    response = test_client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_storage_failure_is_sanitized(test_client: TestClient, register):
    _, headers = register()
    store = InMemoryCartStore()
    store.broken = True
    app.dependency_overrides[get_cart_manager] = lambda: CartManager(store)

    response = test_client.get("/cart", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}


def test_rate_limit(test_client: TestClient):
    # The default budget is 100 requests per client IP
    statuses = [test_client.get("/").status_code for _ in range(101)]

    assert statuses[:100] == [200] * 100
    assert statuses[100] == 429
    assert test_client.get("/").json() == {"error": "Too many requests, please try again later."}
