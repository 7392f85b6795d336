"""Password hashing, access-token signing/verification and refresh-token generation."""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from yearbook.core.config import settings

# Min/max lengths for name and password validation.
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# 40 random bytes -> 80 hex chars
REFRESH_TOKEN_BYTES = 40

ADMIN_ROLES = frozenset({"admin", "superadmin"})


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class AccessTokenClaims:
    """Identity carried by an access token. role is None for User principals."""

    principal_id: int
    role: str | None

    @property
    def is_admin(self) -> bool:
        return self.role is not None


@dataclass(frozen=True)
class AccessTokenCheck:
    """
    Three-way verification outcome.

    valid=True: claims is set.
    valid=False, expired=True: signature is good but exp has passed.
    valid=False, expired=False: malformed, tampered or wrongly shaped token.
    """

    valid: bool
    expired: bool
    claims: AccessTokenClaims | None = None


def sign_access_token(
    principal_id: int,
    role: str | None = None,
    ttl: timedelta | None = None,
) -> str:
    """Create a signed access token with claims {id, role, exp, iat}."""
    now = datetime.now(UTC)
    lifetime = ttl if ttl is not None else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "id": principal_id,
        "role": role,
        "exp": now + lifetime,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def verify_access_token(token: str) -> AccessTokenCheck:
    """Decode and validate an access token. Never raises."""
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "id"]},
        )
    except jwt.ExpiredSignatureError:
        return AccessTokenCheck(valid=False, expired=True)
    except jwt.PyJWTError:
        return AccessTokenCheck(valid=False, expired=False)

    principal_id = payload.get("id")
    role = payload.get("role")
    # bool is an int subclass; reject it explicitly
    if not isinstance(principal_id, int) or isinstance(principal_id, bool):
        return AccessTokenCheck(valid=False, expired=False)
    if role is not None and role not in ADMIN_ROLES:
        return AccessTokenCheck(valid=False, expired=False)
    return AccessTokenCheck(
        valid=True,
        expired=False,
        claims=AccessTokenClaims(principal_id=principal_id, role=role),
    )


def generate_refresh_token() -> str:
    """Return a new opaque refresh token (hex-encoded random bytes)."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)
