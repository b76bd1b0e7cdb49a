"""
API tests for /register and /login.
"""

from jose import jwt


class TestRegister:
    """POST /register"""

    def test_register_returns_201_without_password(self, client, sample_user):
        response = client.post("/register", json=sample_user)

        assert response.status_code == 201
        assert response.json() == {"email": "a@b.com", "name": "Ana"}
        assert response.headers["location"].endswith("/login")

    def test_register_duplicate_email_returns_400(self, client, sample_user):
        client.post("/register", json=sample_user)

        response = client.post(
            "/register", json={"email": "A@B.com", "password": "another"}
        )

        assert response.status_code == 400
        assert response.json()["error_type"] == "persistence_error"

    def test_register_invalid_payload_returns_field_errors(self, client):
        response = client.post("/register", json={"email": "nope"})

        assert response.status_code == 400
        body = response.json()
        assert body["error_type"] == "validation_error"
        assert set(body["details"]) == {"email", "password"}

    def test_register_malformed_body_returns_400(self, client):
        response = client.post("/register", json={"email": 123, "password": "secret"})

        assert response.status_code == 400
        assert "email" in response.json()["details"]

    def test_register_escaped_surrogate_password_returns_400(self, client):
        response = client.post(
            "/register",
            content=b'{"email": "s@b.com", "password": "\\ud800"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["details"] == {
            "password": ["The Password field contains invalid characters."]
        }


class TestLogin:
    """POST /login"""

    def test_login_returns_token_string(self, client, settings, sample_user):
        client.post("/register", json=sample_user)

        response = client.post(
            "/login", json={"email": "a@b.com", "password": "secret"}
        )

        assert response.status_code == 200
        token = response.json()
        assert isinstance(token, str) and token
        assert jwt.decode(token, settings.jwt_secret_key, algorithms=["HS256"])["sub"] == "a@b.com"

    def test_wrong_password_returns_400_not_401(self, client, sample_user):
        client.post("/register", json=sample_user)

        response = client.post(
            "/login", json={"email": "a@b.com", "password": "wrong"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "User or password wrong"

    def test_unknown_user_returns_400(self, client):
        response = client.post(
            "/login", json={"email": "ghost@b.com", "password": "secret"}
        )

        assert response.status_code == 400

    def test_missing_fields_return_validation_errors(self, client):
        response = client.post("/login", json={})

        assert response.status_code == 400
        assert set(response.json()["details"]) == {"email", "password"}
