from fastapi.testclient import TestClient

from models.log import Log


class TestRegister:

    def test_register_returns_token_and_user(self, test_client: TestClient):
        response = test_client.post("/register", json={
            "username": "alice",
            "email": "Alice@Example.com",
            "password": "secret123",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User registered successfully"
        assert data["token"]
        assert data["user"]["username"] == "alice"
        assert data["user"]["email"] == "alice@example.com"
        assert "password_hash" not in data["user"]

    def test_token_authenticates(self, test_client: TestClient, register):
        _, headers = register()

        assert test_client.get("/cart", headers=headers).status_code == 200

    def test_duplicate_email(self, test_client: TestClient, register):
        register("alice", email="shared@example.com")

        response = test_client.post("/register", json={
            "username": "another", "email": "shared@example.com", "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json() == {"error": "User already exists with this email"}

    def test_duplicate_username(self, test_client: TestClient, register):
        register("alice")

        response = test_client.post("/register", json={
            "username": "alice", "email": "other@example.com", "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json() == {"error": "Username is already taken"}

    def test_short_username(self, test_client: TestClient):
        response = test_client.post("/register", json={
            "username": "al", "email": "al@example.com", "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json() == {"error": "Username must be at least 3 characters long"}

    def test_short_password(self, test_client: TestClient):
        response = test_client.post("/register", json={
            "username": "alice", "email": "alice@example.com", "password": "123",
        })

        assert response.status_code == 400
        assert response.json() == {"error": "Password must be at least 6 characters long"}

    def test_invalid_email(self, test_client: TestClient):
        response = test_client.post("/register", json={
            "username": "alice", "email": "not-an-email", "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json() == {"error": "Please provide a valid email address"}

    def test_missing_fields(self, test_client: TestClient):
        response = test_client.post("/register", json={"username": "alice"})

        assert response.status_code == 400
        assert response.json() == {"error": "Please provide username, email and password"}

    def test_blank_fields_count_as_missing(self, test_client: TestClient):
        response = test_client.post("/register", json={
            "username": "   ", "email": "alice@example.com", "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json() == {"error": "Please provide username, email and password"}


class TestLogin:

    def test_login(self, test_client: TestClient, register):
        user_id, _ = register("alice", password="secret123")

        response = test_client.post("/login", json={"email": "alice@example.com", "password": "secret123"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["id"] == user_id
        cart = test_client.get("/cart", headers={"Authorization": f"Bearer {data['token']}"})
        assert cart.status_code == 200

    def test_wrong_password(self, test_client: TestClient, register):
        register("alice")

        response = test_client.post("/login", json={"email": "alice@example.com", "password": "wrong-pass"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid credentials"}

    def test_unknown_email(self, test_client: TestClient):
        response = test_client.post("/login", json={"email": "ghost@example.com", "password": "secret123"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid credentials"}

    def test_missing_fields(self, test_client: TestClient):
        response = test_client.post("/login", json={"email": "alice@example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Please provide email and password"}

    def test_attempts_are_audited(self, test_client: TestClient, register, db_session):
        register("alice")
        test_client.post("/login", json={"email": "alice@example.com", "password": "wrong-pass"})

        actions = [(log.action, log.status) for log in db_session.query(Log).order_by(Log.id)]
        assert actions == [("REGISTER", "SUCCESS"), ("LOGIN", "FAIL")]
