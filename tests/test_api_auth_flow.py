"""End-to-end auth flows through the HTTP API: cookies, refresh, logout variants and role gates."""

import unittest
from datetime import timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient
from support import clear_overrides, make_client, make_session_factory, seed_admin, seed_batch

from yearbook.core.config import settings
from yearbook.core.errors import InternalError
from yearbook.core.security import sign_access_token
from yearbook.services.authentication import EXPIRED_TOKEN
from yearbook.services.session_store import RefreshSessionStore

PREFIX = settings.API_V1_PREFIX
USER_PASSWORD = "Passw0rd!"


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        with self.session_factory() as db:
            self.batch_code = seed_batch(db, seed_admin(db)).batch_code
        self.client = make_client(self.session_factory)

    def tearDown(self) -> None:
        clear_overrides()

    def device(self) -> TestClient:
        """Another client with its own cookie jar."""
        return make_client(self.session_factory)

    def register_user(self, email: str = "a@x.com", enrollment_number: str = "E1") -> dict:
        response = self.client.post(
            f"{PREFIX}/users/register",
            json={
                "name": "User A",
                "email": email,
                "password": USER_PASSWORD,
                "enrollment_number": enrollment_number,
                "batch_code": self.batch_code,
            },
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def login(self, client: TestClient, path: str, email: str, password: str) -> dict:
        response = client.post(f"{PREFIX}/{path}/login", json={"email": email, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def refresh_with(self, refresh_token: str) -> int:
        client = self.device()
        client.cookies.set(settings.REFRESH_TOKEN_COOKIE, refresh_token)
        return client.post(f"{PREFIX}/auth/refresh").status_code


class TestLoginRefreshLogoutCycle(ApiTestCase):
    def test_full_cycle(self) -> None:
        registered = self.register_user()
        self.assertEqual(registered["kind"], "User")
        self.assertNotIn("password_hash", registered)

        body = self.login(self.client, "users", "a@x.com", USER_PASSWORD)
        self.assertTrue(body["access_token"])
        self.assertEqual(len(body["refresh_token"]), 80)
        self.assertEqual(self.client.cookies.get(settings.ACCESS_TOKEN_COOKIE), body["access_token"])
        self.assertEqual(self.client.cookies.get(settings.REFRESH_TOKEN_COOKIE), body["refresh_token"])

        # an access token past its TTL
        expired = sign_access_token(registered["id"], ttl=timedelta(seconds=-1))
        response = self.device().get(f"{PREFIX}/users/me", headers={"Authorization": f"Bearer {expired}"})
        self.assertEqual(response.status_code, 401)
        self.assertTrue(response.json()["tokenExpired"])
        self.assertEqual(response.json()["message"], EXPIRED_TOKEN)
        self.assertFalse(response.json()["success"])

        stale = self.device()
        stale.cookies.set(settings.REFRESH_TOKEN_COOKIE, body["refresh_token"])
        refreshed = stale.post(f"{PREFIX}/auth/refresh")
        self.assertEqual(refreshed.status_code, 200, refreshed.text)
        new_access = refreshed.json()["access_token"]

        me = self.device().get(f"{PREFIX}/users/me", headers={"Authorization": f"Bearer {new_access}"})
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["email"], "a@x.com")

        logout = stale.post(f"{PREFIX}/users/logout")
        self.assertEqual(logout.status_code, 200, logout.text)
        self.assertEqual(self.refresh_with(body["refresh_token"]), 401)

    def test_wrong_password_is_401_and_unknown_email_404(self) -> None:
        self.register_user()
        response = self.client.post(
            f"{PREFIX}/users/login", json={"email": "a@x.com", "password": "wrong-password"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertNotIn("tokenExpired", response.json())
        response = self.client.post(
            f"{PREFIX}/users/login", json={"email": "b@x.com", "password": USER_PASSWORD}
        )
        self.assertEqual(response.status_code, 404)

    def test_missing_access_token(self) -> None:
        response = self.client.get(f"{PREFIX}/users/me")
        self.assertEqual(response.status_code, 401)
        self.assertNotIn("tokenExpired", response.json())

    def test_invalid_access_token_is_not_flagged_expired(self) -> None:
        response = self.client.get(f"{PREFIX}/users/me", headers={"Authorization": "Bearer nonsense"})
        self.assertEqual(response.status_code, 401)
        self.assertNotIn("tokenExpired", response.json())

    def test_refresh_without_cookie(self) -> None:
        response = self.client.post(f"{PREFIX}/auth/refresh")
        self.assertEqual(response.status_code, 401)

    def test_cookie_wins_over_bearer_header(self) -> None:
        self.register_user()
        self.login(self.client, "users", "a@x.com", USER_PASSWORD)
        response = self.client.get(f"{PREFIX}/users/me", headers={"Authorization": "Bearer nonsense"})
        self.assertEqual(response.status_code, 200)

    def test_user_token_cannot_reach_admin_routes(self) -> None:
        self.register_user()
        self.login(self.client, "users", "a@x.com", USER_PASSWORD)
        self.assertEqual(self.client.get(f"{PREFIX}/admin/me").status_code, 403)


class TestRoleDiscrimination(ApiTestCase):
    def test_promotion_takes_effect_on_reissued_token_only(self) -> None:
        root = self.device()
        self.login(root, "admin", "root@x.com", "correct-horse-battery")
        created = root.post(
            f"{PREFIX}/admin/register",
            json={"name": "B", "email": "b@x.com", "password": "another-password"},
        )
        self.assertEqual(created.status_code, 201, created.text)
        self.assertEqual(created.json()["role"], "admin")

        other = self.device()
        body = self.login(other, "admin", "b@x.com", "another-password")
        stale_access = body["access_token"]
        self.assertEqual(other.get(f"{PREFIX}/admin/admins").status_code, 403)

        promoted = root.patch(
            f"{PREFIX}/admin/admins/{created.json()['id']}/role", json={"role": "superadmin"}
        )
        self.assertEqual(promoted.status_code, 200, promoted.text)

        stale = self.device().get(
            f"{PREFIX}/admin/admins", headers={"Authorization": f"Bearer {stale_access}"}
        )
        self.assertEqual(stale.status_code, 403)

        self.assertEqual(other.post(f"{PREFIX}/auth/refresh").status_code, 200)
        self.assertEqual(other.get(f"{PREFIX}/admin/admins").status_code, 200)

    def test_unauthenticated_admin_registration_after_bootstrap(self) -> None:
        response = self.client.post(
            f"{PREFIX}/admin/register",
            json={"name": "X", "email": "x@x.com", "password": "another-password"},
        )
        self.assertEqual(response.status_code, 403)

    def test_unusable_credential_after_bootstrap_is_forbidden(self) -> None:
        response = self.client.post(
            f"{PREFIX}/admin/register",
            json={"name": "X", "email": "x@x.com", "password": "another-password"},
            headers={"Authorization": "Bearer garbage"},
        )
        self.assertEqual(response.status_code, 403, response.text)

    def test_user_token_cannot_register_admin(self) -> None:
        user = self.register_user()
        response = self.device().post(
            f"{PREFIX}/admin/register",
            json={"name": "X", "email": "x@x.com", "password": "another-password"},
            headers={"Authorization": f"Bearer {sign_access_token(user['id'])}"},
        )
        self.assertEqual(response.status_code, 403, response.text)


class TestBootstrapOverHttp(unittest.TestCase):
    def setUp(self) -> None:
        self.client = make_client(make_session_factory())

    def tearDown(self) -> None:
        clear_overrides()

    def test_first_registration_is_superadmin(self) -> None:
        response = self.client.post(
            f"{PREFIX}/admin/register",
            json={"name": "Root", "email": "root@x.com", "password": "first-password"},
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["role"], "superadmin")

    def test_missing_fields_are_400_with_envelope(self) -> None:
        response = self.client.post(f"{PREFIX}/admin/register", json={"email": "root@x.com"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["success"], False)
        self.assertIn("message", response.json())

    def test_expired_cookie_does_not_block_bootstrap(self) -> None:
        self.client.cookies.set(
            settings.ACCESS_TOKEN_COOKIE, sign_access_token(1, "admin", ttl=timedelta(seconds=-1))
        )
        response = self.client.post(
            f"{PREFIX}/admin/register",
            json={"name": "Root", "email": "root@x.com", "password": "first-password"},
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["role"], "superadmin")

    def test_garbage_bearer_does_not_block_bootstrap(self) -> None:
        response = self.client.post(
            f"{PREFIX}/admin/register",
            json={"name": "Root", "email": "root@x.com", "password": "first-password"},
            headers={"Authorization": "Bearer garbage"},
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["role"], "superadmin")


class TestConcurrentSessions(ApiTestCase):
    def test_device_local_logout_keeps_other_device(self) -> None:
        self.register_user()
        phone, laptop = self.device(), self.device()
        phone_tokens = self.login(phone, "users", "a@x.com", USER_PASSWORD)
        laptop_tokens = self.login(laptop, "users", "a@x.com", USER_PASSWORD)
        self.assertNotEqual(phone_tokens["refresh_token"], laptop_tokens["refresh_token"])

        self.assertEqual(phone.post(f"{PREFIX}/auth/logout").status_code, 200)
        self.assertIsNone(phone.cookies.get(settings.REFRESH_TOKEN_COOKIE))

        self.assertEqual(self.refresh_with(phone_tokens["refresh_token"]), 401)
        self.assertEqual(self.refresh_with(laptop_tokens["refresh_token"]), 200)

    def test_user_logout_is_principal_wide(self) -> None:
        self.register_user()
        phone, laptop = self.device(), self.device()
        phone_tokens = self.login(phone, "users", "a@x.com", USER_PASSWORD)
        laptop_tokens = self.login(laptop, "users", "a@x.com", USER_PASSWORD)

        self.assertEqual(phone.post(f"{PREFIX}/users/logout").status_code, 200)

        self.assertEqual(self.refresh_with(phone_tokens["refresh_token"]), 401)
        self.assertEqual(self.refresh_with(laptop_tokens["refresh_token"]), 401)

    def test_admin_logout_is_principal_wide(self) -> None:
        phone, laptop = self.device(), self.device()
        phone_tokens = self.login(phone, "admin", "root@x.com", "correct-horse-battery")
        laptop_tokens = self.login(laptop, "admin", "root@x.com", "correct-horse-battery")

        self.assertEqual(laptop.post(f"{PREFIX}/admin/logout").status_code, 200)

        self.assertEqual(self.refresh_with(phone_tokens["refresh_token"]), 401)
        self.assertEqual(self.refresh_with(laptop_tokens["refresh_token"]), 401)

    def test_device_logout_is_idempotent(self) -> None:
        self.assertEqual(self.client.post(f"{PREFIX}/auth/logout").status_code, 200)
        self.assertEqual(self.client.post(f"{PREFIX}/auth/logout").status_code, 200)


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        response = self.client.get(f"{PREFIX}/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["database"], "connected")
        self.assertEqual(response.json()["status"], "ok")
        self.assertEqual(response.json()["environment"], settings.APP_ENV)


class TestStoreFailureEnvelope(ApiTestCase):
    def test_store_failure_is_generic_500(self) -> None:
        self.client.cookies.set(settings.REFRESH_TOKEN_COOKIE, "f" * 80)
        failure = InternalError("Refresh session store unavailable")
        with patch.object(RefreshSessionStore, "mark_invalid", side_effect=failure):
            response = self.client.post(f"{PREFIX}/auth/logout")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["message"], "Internal Server Error")
        self.assertNotIn("unavailable", response.text)
