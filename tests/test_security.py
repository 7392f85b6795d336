"""Unit tests for yearbook.core.security: password hashing and the access-token codec."""

import base64
import json
import unittest
from datetime import UTC, datetime, timedelta

import jwt

from yearbook.core.config import settings
from yearbook.core.security import (
    REFRESH_TOKEN_BYTES,
    generate_refresh_token,
    hash_password,
    sign_access_token,
    verify_access_token,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("s3cret-password")
        self.assertNotEqual(hashed, "s3cret-password")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("s3cret-password", hashed))

    def test_wrong_password_rejected(self) -> None:
        hashed = hash_password("s3cret-password")
        self.assertFalse(verify_password("other-password", hashed))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("same-password"), hash_password("same-password"))

    def test_malformed_hash_is_false_not_error(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestAccessTokenRoundTrip(unittest.TestCase):
    def test_user_token_has_no_role(self) -> None:
        check = verify_access_token(sign_access_token(7))
        self.assertTrue(check.valid)
        self.assertFalse(check.expired)
        self.assertEqual(check.claims.principal_id, 7)
        self.assertIsNone(check.claims.role)
        self.assertFalse(check.claims.is_admin)

    def test_admin_token_carries_role(self) -> None:
        check = verify_access_token(sign_access_token(3, "superadmin"))
        self.assertTrue(check.valid)
        self.assertEqual(check.claims.role, "superadmin")
        self.assertTrue(check.claims.is_admin)

    def test_exp_is_after_iat(self) -> None:
        token = sign_access_token(1)
        payload = jwt.decode(token, options={"verify_signature": False})
        self.assertEqual(
            payload["exp"] - payload["iat"],
            settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )


class TestAccessTokenRejection(unittest.TestCase):
    def test_expired_token_reports_expired(self) -> None:
        check = verify_access_token(sign_access_token(1, ttl=timedelta(seconds=-5)))
        self.assertFalse(check.valid)
        self.assertTrue(check.expired)
        self.assertIsNone(check.claims)

    def test_tampered_token_is_invalid_not_expired(self) -> None:
        head, _body, sig = sign_access_token(1).split(".")
        forged = json.dumps({"id": 2, "role": "superadmin", "exp": 4102444800}).encode()
        forged_body = base64.urlsafe_b64encode(forged).rstrip(b"=").decode()
        check = verify_access_token(".".join([head, forged_body, sig]))
        self.assertFalse(check.valid)
        self.assertFalse(check.expired)

    def test_wrong_secret_is_invalid(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"id": 1, "role": None, "exp": now + timedelta(minutes=5), "iat": now},
            "some-other-secret",
            algorithm=settings.JWT_ALGORITHM,
        )
        check = verify_access_token(token)
        self.assertFalse(check.valid)
        self.assertFalse(check.expired)

    def test_garbage_is_invalid(self) -> None:
        check = verify_access_token("not.a.jwt")
        self.assertFalse(check.valid)
        self.assertFalse(check.expired)

    def test_missing_id_claim_is_invalid(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"role": None, "exp": now + timedelta(minutes=5), "iat": now},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        self.assertFalse(verify_access_token(token).valid)

    def test_unknown_role_is_invalid(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"id": 1, "role": "root", "exp": now + timedelta(minutes=5), "iat": now},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        self.assertFalse(verify_access_token(token).valid)


class TestRefreshTokenGeneration(unittest.TestCase):
    def test_token_is_hex_of_expected_length(self) -> None:
        token = generate_refresh_token()
        self.assertEqual(len(token), REFRESH_TOKEN_BYTES * 2)
        int(token, 16)

    def test_tokens_are_unique(self) -> None:
        self.assertEqual(len({generate_refresh_token() for _ in range(50)}), 50)
