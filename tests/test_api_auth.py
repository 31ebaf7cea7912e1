"""Route tests for /api/auth: registration, login, /me and token handling."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt

from crisisconnect.core.config import get_settings
from crisisconnect.models import User
from tests.support import PASSWORD, ApiTestCase


class TestRegister(ApiTestCase):
    def test_register_creates_plain_user(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"name": "Sam", "email": " Sam@Example.org ", "password": "long-enough-pw"},
        )
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["role"], "user")
        self.assertEqual(body["email"], "sam@example.org")
        self.assertNotIn("password_hash", body)

    def test_role_cannot_be_chosen_at_registration(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"name": "Eve", "email": "eve@example.org", "password": "long-enough-pw", "role": "admin"},
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["role"], "user")

    def test_duplicate_email_conflicts(self) -> None:
        self.add_user(email="taken@example.org")
        resp = self.client.post(
            "/api/auth/register",
            json={"name": "Other", "email": "TAKEN@example.org", "password": "long-enough-pw"},
        )
        self.assertEqual(resp.status_code, 409)

    def test_unique_index_conflict_is_409(self) -> None:
        # Another request inserted the same email between the check and the commit.
        self.add_user(email="taken@example.org")
        with patch("crisisconnect.api.auth.email_taken", return_value=False):
            resp = self.client.post(
                "/api/auth/register",
                json={"name": "Other", "email": "taken@example.org", "password": "long-enough-pw"},
            )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(self.db.query(User).count(), 1)

    def test_short_password_rejected(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"name": "Sam", "email": "sam@example.org", "password": "short"},
        )
        self.assertEqual(resp.status_code, 422)

    def test_malformed_email_rejected(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"name": "Sam", "email": "not-an-email", "password": "long-enough-pw"},
        )
        self.assertEqual(resp.status_code, 422)

    def test_email_without_dotted_domain_rejected(self) -> None:
        for email in ("a@b", "a@@b.org", "a b@example.org"):
            resp = self.client.post(
                "/api/auth/register",
                json={"name": "Sam", "email": email, "password": "long-enough-pw"},
            )
            self.assertEqual(resp.status_code, 422, email)
        self.assertEqual(self.db.query(User).count(), 0)


class TestLogin(ApiTestCase):
    def test_login_returns_token_usable_on_me(self) -> None:
        user = self.add_user(name="Kim", email="kim@example.org")
        resp = self.client.post(
            "/api/auth/login", json={"email": "kim@example.org", "password": PASSWORD}
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["token_type"], "bearer")
        self.assertEqual(body["user"]["id"], user.id)

        me = self.client.get(
            "/api/auth/me",
            headers={"Authorization": f"Bearer {body['access_token']}"},
        )
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["name"], "Kim")

    def test_wrong_password_is_401(self) -> None:
        self.add_user(email="kim@example.org")
        resp = self.client.post(
            "/api/auth/login", json={"email": "kim@example.org", "password": "wrong-password"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_unknown_email_is_401(self) -> None:
        resp = self.client.post(
            "/api/auth/login", json={"email": "ghost@example.org", "password": PASSWORD}
        )
        self.assertEqual(resp.status_code, 401)


class TestTokenValidation(ApiTestCase):
    def test_missing_token(self) -> None:
        resp = self.client.get("/api/auth/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_garbage_token(self) -> None:
        resp = self.client.get(
            "/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_expired_token(self) -> None:
        user = self.add_user()
        settings = get_settings()
        past = datetime.now(UTC) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": str(user.id), "role": user.role, "iat": past, "exp": past + timedelta(minutes=5)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        resp = self.client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 401)

    def test_token_for_deleted_user(self) -> None:
        user = self.add_user()
        headers = self.auth_headers(user)
        self.db.delete(self.db.get(User, user.id))
        self.db.commit()
        resp = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(resp.status_code, 401)


if __name__ == "__main__":
    unittest.main()
