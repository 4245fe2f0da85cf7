"""
Tests for the account endpoints.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from django.contrib.auth import get_user_model

from blog_engine.tokens import decode_token, issue_token

User = get_user_model()


def register(api, **overrides):
    data = {"username": "newuser", "email": "new@example.com", "password": "secret123"}
    data.update(overrides)
    return api.post("/api/auth/register", data)


class TestRegister:
    def test_register_returns_user_and_token(self, api, db):
        response = register(api)
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["username"] == "newuser"
        assert body["data"]["role"] == "user"
        assert decode_token(body["token"]) == body["data"]["id"]

    def test_password_never_returned(self, api, db):
        body = register(api).json()
        assert "password" not in body["data"]
        token = body["token"]
        me = api.get("/api/auth/me", HTTP_AUTHORIZATION=f"Bearer {token}").json()
        assert "password" not in me["data"]

    def test_password_is_hashed(self, api, db):
        register(api)
        user = User.objects.get(username="newuser")
        assert user.password != "secret123"
        assert user.check_password("secret123")

    def test_register_admin(self, api, db):
        body = register(api, role="admin").json()
        assert body["data"]["role"] == "admin"

    def test_admin_registration_can_be_disabled(self, api, db, settings):
        settings.BLOG_ENGINE = {**settings.BLOG_ENGINE, "ALLOW_ADMIN_REGISTRATION": False}
        response = register(api, role="admin")
        assert response.status_code == 403

    def test_validation_errors(self, api, db):
        response = register(api, username="ab", email="bad", password="123")
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert {e["field"] for e in body["errors"]} == {"username", "email", "password"}
        assert not User.objects.exists()

    def test_padded_short_username_rejected(self, api, db):
        response = register(api, username="  ab  ")
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "username"
        assert not User.objects.exists()

    def test_username_and_email_stored_stripped(self, api, db):
        body = register(api, username="  newuser ", email=" new@example.com ").json()
        assert body["data"]["username"] == "newuser"
        assert body["data"]["email"] == "new@example.com"

    def test_duplicate_email_conflicts(self, api, user):
        response = register(api, email="TEST@example.com")
        assert response.status_code == 409
        assert response.json()["error"] == "Email is already registered"

    def test_duplicate_username_conflicts(self, api, user):
        response = register(api, username="testuser")
        assert response.status_code == 409


class TestLogin:
    def test_login_then_me_returns_same_identity(self, api, db):
        registered = register(api).json()["data"]
        login = api.post(
            "/api/auth/login", {"email": "new@example.com", "password": "secret123"}
        )
        assert login.status_code == 200
        token = login.json()["token"]

        me = api.get("/api/auth/me", HTTP_AUTHORIZATION=f"Bearer {token}")
        assert me.status_code == 200
        assert me.json()["data"]["id"] == registered["id"]
        assert me.json()["data"]["email"] == "new@example.com"

    def test_wrong_password(self, api, user):
        response = api.post("/api/auth/login", {"email": user.email, "password": "wrong!!"})
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}

    def test_unknown_email(self, api, db):
        response = api.post("/api/auth/login", {"email": "ghost@example.com", "password": "x"})
        assert response.status_code == 401

    def test_missing_fields(self, api, db):
        response = api.post("/api/auth/login", {"email": "a@b.co"})
        assert response.status_code == 400
        assert response.json()["error"] == "Please provide an email and password"


class TestTokens:
    def test_missing_token(self, api, db):
        response = api.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_malformed_token(self, api, db):
        response = api.get("/api/auth/me", HTTP_AUTHORIZATION="Bearer not-a-jwt")
        assert response.status_code == 401

    def test_wrong_scheme(self, api, user):
        response = api.get("/api/auth/me", HTTP_AUTHORIZATION=f"Token {issue_token(user)}")
        assert response.status_code == 401

    def test_expired_token(self, api, user):
        issued = datetime.now(timezone.utc) - timedelta(days=31)
        response = api.get(
            "/api/auth/me", HTTP_AUTHORIZATION=f"Bearer {issue_token(user, now=issued)}"
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Token has expired"

    def test_token_signed_with_other_secret(self, api, user):
        forged = jwt.encode(
            {"id": user.pk, "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            "some-other-secret-that-is-long-enough",
            algorithm="HS256",
        )
        response = api.get("/api/auth/me", HTTP_AUTHORIZATION=f"Bearer {forged}")
        assert response.status_code == 401

    def test_inactive_user_rejected(self, api, user):
        token = issue_token(user)
        user.is_active = False
        user.save()
        response = api.get("/api/auth/me", HTTP_AUTHORIZATION=f"Bearer {token}")
        assert response.status_code == 401


class TestUpdateDetails:
    def test_update_profile(self, api, user):
        response = api.put(
            "/api/auth/updatedetails",
            {"username": "renamed", "profile": {"bio": "Writer"}},
            user=user,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["username"] == "renamed"
        assert data["profile"] == {"bio": "Writer"}
        assert data["email"] == "test@example.com"

    def test_email_taken(self, api, user, other_user):
        response = api.put("/api/auth/updatedetails", {"email": other_user.email}, user=user)
        assert response.status_code == 409

    def test_keeping_own_email_is_fine(self, api, user):
        response = api.put("/api/auth/updatedetails", {"email": user.email}, user=user)
        assert response.status_code == 200

    def test_padded_short_username_rejected(self, api, user):
        response = api.put("/api/auth/updatedetails", {"username": "  ab  "}, user=user)
        assert response.status_code == 400
        user.refresh_from_db()
        assert user.username == "testuser"

    def test_requires_token(self, api, db):
        assert api.put("/api/auth/updatedetails", {"username": "x"}).status_code == 401


class TestUpdatePassword:
    def test_change_password(self, api, user):
        response = api.put(
            "/api/auth/updatepassword",
            {"currentPassword": "testpass123", "newPassword": "brandnew1"},
            user=user,
        )
        assert response.status_code == 200
        assert response.json()["token"]
        user.refresh_from_db()
        assert user.check_password("brandnew1")

    def test_wrong_current_password(self, api, user):
        response = api.put(
            "/api/auth/updatepassword",
            {"currentPassword": "nope", "newPassword": "brandnew1"},
            user=user,
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "currentPassword"
        user.refresh_from_db()
        assert user.check_password("testpass123")

    @pytest.mark.parametrize("new_password", ["", "12345"])
    def test_new_password_too_short(self, api, user, new_password):
        response = api.put(
            "/api/auth/updatepassword",
            {"currentPassword": "testpass123", "newPassword": new_password},
            user=user,
        )
        assert response.status_code == 400
