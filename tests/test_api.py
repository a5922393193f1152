"""API endpoint tests: health, auth and the response envelope."""

from datetime import timedelta

from strix.api.dependencies import get_licitation_service
from strix.config import get_settings
from strix.main import app
from strix.models.user import User
from strix.services.auth import TokenService
from strix.services.exceptions import StoreError
from strix.services.licitation_service import LicitationService
from tests.conftest import register


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_hello(client):
    response = client.get("/hello")
    assert response.status_code == 200
    assert response.json() == {"message": "Hello World!"}


def test_register_first_user_is_admin(client):
    """The first user becomes admin, later ones do not."""
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "a@x.com", "password": "pw123456"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "User registered successfully"
    assert body["data"]["user"]["isAdmin"] is True
    assert "password" not in body["data"]["user"]
    assert "passwordHash" not in body["data"]["user"]

    response = client.post(
        "/api/auth/register",
        json={"username": "bob", "email": "b@x.com", "password": "pw123456"},
    )
    assert response.status_code == 201
    assert response.json()["data"]["user"]["isAdmin"] is False


def test_register_token_resolves_to_new_user(client):
    """The token returned at registration identifies the new user."""
    headers = register(client, "alice", "a@x.com")

    response = client.get("/api/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["data"]["id"] == headers.user_id


def test_register_missing_fields(client):
    response = client.post("/api/auth/register", json={"username": "alice", "email": "a@x.com"})
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Username, email and password are required"


def test_register_invalid_email(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "not-an-email", "password": "pw123456"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid email address"


def test_register_duplicate_email(client, admin_headers):
    """Test registration with duplicate email fails."""
    response = client.post(
        "/api/auth/register",
        json={"username": "someone", "email": admin_headers.email, "password": "pw123456"},
    )
    assert response.status_code == 400
    assert "already exists" in response.json()["message"]


def test_register_duplicate_username(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "other@x.com", "password": "pw123456"},
    )
    assert response.status_code == 400
    assert "already exists" in response.json()["message"]


def test_register_malformed_body(client):
    """Bodies that fail schema validation are reported as 400, not 422."""
    response = client.post("/api/auth/register", json={"username": 42, "email": [], "password": {}})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_login(client, admin_headers):
    """Test user login."""
    response = client.post(
        "/api/auth/login", json={"email": admin_headers.email, "password": "pw123456"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["data"]["token"]
    assert body["data"]["user"]["username"] == "alice"


def test_login_wrong_password(client, admin_headers):
    """Wrong password is a 400 with the generic message."""
    response = client.post(
        "/api/auth/login", json={"email": admin_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid credentials"


def test_login_unknown_email_matches_wrong_password(client, admin_headers):
    """An unknown email is indistinguishable from a wrong password."""
    wrong_password = client.post(
        "/api/auth/login", json={"email": admin_headers.email, "password": "wrongpass"}
    )
    unknown_email = client.post(
        "/api/auth/login", json={"email": "nobody@x.com", "password": "wrongpass"}
    )
    assert unknown_email.status_code == wrong_password.status_code == 400
    assert unknown_email.json() == wrong_password.json()


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"email": "a@x.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Email and password are required"


def test_login_inactive_user(client, db, admin_headers):
    db.query(User).filter(User.id == admin_headers.user_id).update({"is_active": False})
    db.commit()

    response = client.post(
        "/api/auth/login", json={"email": admin_headers.email, "password": "pw123456"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "User is inactive"


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    user = response.json()["data"]
    assert user == {
        "id": auth_headers.user_id,
        "username": "bob",
        "email": auth_headers.email,
        "isAdmin": False,
    }


def test_me_without_token(client):
    """A missing token is 401."""
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Access denied. No token provided."
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_me_with_scheme_but_no_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer"})
    assert response.status_code == 401


def test_me_with_other_scheme(client, admin_headers):
    """Only Bearer credentials are read; any other scheme is a missing token."""
    token = admin_headers["Authorization"].split()[1]
    response = client.get("/api/auth/me", headers={"Authorization": f"Basic {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Access denied. No token provided."


def test_me_with_invalid_token(client):
    """A token that does not verify is 403, not 401."""
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 403
    assert response.json()["message"] == "Invalid or expired token"


def test_me_with_expired_token(client, admin_headers):
    settings = get_settings()
    tokens = TokenService(settings.jwt_secret, expiration=timedelta(seconds=-5))
    token = tokens.issue(admin_headers.user_id)

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_me_for_deactivated_user(client, db, admin_headers):
    db.query(User).filter(User.id == admin_headers.user_id).update({"is_active": False})
    db.commit()

    response = client.get("/api/auth/me", headers=admin_headers)
    assert response.status_code == 403


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["status"] == "error"


class FailingStore:
    """Licitation store whose backend is unreachable."""

    def list_all(self):
        raise StoreError("connection refused")


def test_store_failure_is_500(client):
    app.dependency_overrides[get_licitation_service] = lambda: LicitationService(FailingStore())

    response = client.get("/api/licitations")
    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Internal server error"
    # Detail is echoed outside production
    assert body["error"] == "connection refused"
