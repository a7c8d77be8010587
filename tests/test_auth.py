"""Authentication and token tests."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest
from jose import jwt

from src.config import Settings
from src.exceptions import UnauthenticatedError
from src.services.auth import create_access_token, verify_access_token


def test_signup(client):
    """Test signing up returns a token and the public user view."""
    response = client.post(
        "/api/auth/signup",
        json={"username": "alice", "email": "a@x.com", "password": "pw123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User created successfully"
    assert data["token"]
    assert data["user"]["username"] == "alice"
    assert data["user"]["email"] == "a@x.com"
    assert set(data["user"]) == {"id", "username", "email"}


def test_signup_duplicate_email(client, auth_headers):
    """Test signup with an existing email fails even with a new username."""
    response = client.post(
        "/api/auth/signup",
        json={"username": "someoneelse", "email": auth_headers.email, "password": "password123"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_signup_duplicate_username(client, auth_headers):
    """Test signup with an existing username fails even with a new email."""
    response = client.post(
        "/api/auth/signup",
        json={"username": auth_headers.username, "email": "new@example.com", "password": "pw"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_signup_invalid_email(client):
    """Test signup validates the email address."""
    response = client.post(
        "/api/auth/signup",
        json={"username": "bob", "email": "not-an-email", "password": "password123"},
    )
    assert response.status_code == 422


def test_signin(client, auth_headers):
    """Test user signin."""
    response = client.post(
        "/api/auth/signin", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["user"]["id"] == auth_headers.user_id
    assert "password_hash" not in data["user"]

    claims = verify_access_token(data["token"])
    assert claims.user_id == auth_headers.user_id
    assert claims.username == auth_headers.username


def test_signin_wrong_password_and_unknown_email_look_the_same(client, auth_headers):
    """Test both signin failures give the same error."""
    wrong_password = client.post(
        "/api/auth/signin", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    unknown_email = client.post(
        "/api/auth/signin", json={"email": "nobody@example.com", "password": "testpass123"}
    )

    assert wrong_password.status_code == 400
    assert unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid credentials"}


def test_password_is_stored_hashed(client, db, auth_headers):
    """Test the plain password never reaches the database."""
    from src.models.user import User

    user = db.query(User).filter(User.id == auth_headers.user_id).first()
    assert user.password_hash != "testpass123"
    assert user.password_hash.startswith("$2")


def test_get_current_user(client, auth_headers):
    """Test getting current user information."""
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "id": auth_headers.user_id,
        "username": auth_headers.username,
        "email": auth_headers.email,
    }


def test_missing_token(client):
    """Test protected endpoints require a bearer token."""
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["detail"] == "Access token required"
    assert response.headers["www-authenticate"] == "Bearer"


def test_malformed_token(client):
    """Test a garbage token is rejected."""
    response = client.get("/api/support", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_token_with_wrong_signature(client, auth_headers):
    """Test a token signed with another secret is rejected."""
    forged = jwt.encode(
        {
            "sub": str(auth_headers.user_id),
            "username": auth_headers.username,
            "exp": datetime.now(UTC) + timedelta(hours=1),
        },
        "some-other-secret",
        algorithm="HS256",
    )
    response = client.get("/api/support", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401


def test_token_valid_just_before_expiry():
    """Test a token still verifies shortly before its 24 hours are up."""
    issued_at = datetime.now(UTC) - timedelta(hours=24) + timedelta(minutes=1)
    token = create_access_token(42, "alice", issued_at=issued_at)

    claims = verify_access_token(token)
    assert claims.user_id == 42
    assert claims.username == "alice"


def test_token_rejected_at_expiry():
    """Test a token stops verifying once 24 hours have passed."""
    token = create_access_token(42, "alice", issued_at=datetime.now(UTC) - timedelta(hours=24))

    with pytest.raises(UnauthenticatedError):
        verify_access_token(token)


def test_token_rejected_after_expiry():
    """Test an old token is rejected."""
    token = create_access_token(42, "alice", issued_at=datetime.now(UTC) - timedelta(days=3))

    with pytest.raises(UnauthenticatedError):
        verify_access_token(token)


def test_expired_token_rejected_by_api(client, auth_headers):
    """Test the API turns an expired token into a 401."""
    token = create_access_token(
        auth_headers.user_id,
        auth_headers.username,
        issued_at=datetime.now(UTC) - timedelta(hours=25),
    )
    response = client.get("/api/support", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_token_claims_trusted_without_user_lookup(client):
    """Test claims are trusted as-is by default."""
    token = create_access_token(9999, "ghost")
    response = client.get("/api/support", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_refetch_user_rejects_unknown_user(client):
    """Test AUTH_REFETCH_USER makes protected routes check the user still exists."""
    token = create_access_token(9999, "ghost")
    with patch(
        "src.api.dependencies.get_settings",
        return_value=Settings(auth_refetch_user=True),
    ):
        response = client.get("/api/support", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "User not found"


def test_refetch_user_accepts_existing_user(client, auth_headers):
    """Test AUTH_REFETCH_USER still lets real users through."""
    with patch(
        "src.api.dependencies.get_settings",
        return_value=Settings(auth_refetch_user=True),
    ):
        response = client.get("/api/support", headers=auth_headers)
    assert response.status_code == 200


def test_token_window_is_exactly_24_hours_of_whole_seconds():
    """Test iat and exp agree once sub-second precision is dropped."""
    issued_at = datetime(2026, 3, 1, 10, 0, 0, 900000, tzinfo=UTC)
    token = create_access_token(42, "alice", issued_at=issued_at)

    claims = jwt.get_unverified_claims(token)
    assert claims["iat"] == int(issued_at.replace(microsecond=0).timestamp())
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_token_valid_in_last_second_before_expiry():
    """Test a token issued almost 24 hours ago, mid-second, still verifies."""
    now = datetime.now(UTC)
    issued_at = (now - timedelta(hours=24) + timedelta(seconds=2)).replace(microsecond=900000)
    token = create_access_token(42, "alice", issued_at=issued_at)

    assert verify_access_token(token).user_id == 42
