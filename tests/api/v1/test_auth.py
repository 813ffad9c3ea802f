import pytest
import logging

from app.api.deps import get_identity_verifier
from app.core.exceptions import AuthenticationError
from app.main import app
from app.security.jwt import create_access_token, create_refresh_token, decode_token
from app.services.auth.identity import IdentityVerifier

logger = logging.getLogger(__name__)

IDENTITY = {
    "uid": "firebase-uid-1",
    "email": "grace@example.com",
    "name": "Grace Hopper",
    "picture": "https://img/grace.png",
}


class FakeVerifier(IdentityVerifier):
    def __init__(self, identity=None):
        self.identity = identity

    def verify_identity(self, token):
        if token != "good-token" or self.identity is None:
            raise AuthenticationError("Invalid identity token")
        return self.identity


@pytest.fixture
def verifier(client):
    fake = FakeVerifier(dict(IDENTITY))
    app.dependency_overrides[get_identity_verifier] = lambda: fake
    return fake


class TestFirebaseSignIn:
    def test_first_sign_in_creates_user(self, client, verifier):
        response = client.post("/api/auth/firebase", json={"token": "good-token"})

        logger.info(f"Response JSON: {response.json()}")
        assert response.status_code == 200
        body = response.json()
        assert body["created"] is True
        assert body["tokenType"] == "bearer"
        assert body["user"]["email"] == "grace@example.com"
        assert body["user"]["avatar"] == "https://img/grace.png"

        payload = decode_token(body["accessToken"])["payload"]
        assert payload["userId"] == str(body["user"]["id"])
        assert payload["type"] == "access"

    def test_second_sign_in_reuses_user(self, client, verifier):
        first = client.post("/api/auth/firebase", json={"token": "good-token"}).json()
        second = client.post("/api/auth/firebase", json={"token": "good-token"}).json()

        assert second["created"] is False
        assert second["user"]["id"] == first["user"]["id"]

    def test_existing_email_is_linked(self, client, db, verifier, make_user):
        existing = make_user(email="grace@example.com")

        body = client.post("/api/auth/firebase", json={"token": "good-token"}).json()

        db.refresh(existing)
        assert body["created"] is False
        assert body["user"]["id"] == existing.id
        assert existing.firebase_uid == "firebase-uid-1"

    def test_deactivated_account(self, client, verifier, make_user):
        make_user(email="grace@example.com", firebase_uid="firebase-uid-1", is_active=False)
        response = client.post("/api/auth/firebase", json={"token": "good-token"})
        assert response.status_code == 400
        assert response.json()["error"] == "ACCOUNT_DEACTIVATED"

    def test_invalid_identity_token(self, client, verifier):
        response = client.post("/api/auth/firebase", json={"token": "forged"})
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_TOKEN"


class TestRefreshToken:
    def test_refresh(self, client, make_user):
        user = make_user()
        response = client.post("/api/auth/refresh-token", json={"refreshToken": create_refresh_token(user.id)})

        assert response.status_code == 200
        payload = decode_token(response.json()["accessToken"])["payload"]
        assert payload["userId"] == str(user.id)
        assert payload["type"] == "access"

    def test_access_token_is_not_a_refresh_token(self, client, make_user):
        user = make_user()
        response = client.post("/api/auth/refresh-token", json={"refreshToken": create_access_token(user.id)})
        assert response.status_code == 403
        assert response.json()["detail"]["error"] == "REFRESH_TOKEN_INVALID"

    def test_deactivated_user(self, client, make_user):
        user = make_user(is_active=False)
        response = client.post("/api/auth/refresh-token", json={"refreshToken": create_refresh_token(user.id)})
        assert response.status_code == 403
