"""
Authentication gate: turns a bearer credential into a typed principal.

Outcomes are AUTHENTICATED (a UserPrincipal or AdminPrincipal is returned) or
REJECTED (an UnauthorizedError / ForbiddenError is raised). A credential
problem never surfaces as a 500.
"""

import logging

from yearbook.core.errors import ForbiddenError, UnauthorizedError
from yearbook.core.security import verify_access_token
from yearbook.schemas.auth import AdminPrincipal, UserPrincipal
from yearbook.services.credentials import CredentialStore

logger = logging.getLogger(__name__)

MISSING_TOKEN = "Unauthorized request: missing access token"
INVALID_TOKEN = "Invalid access token"
EXPIRED_TOKEN = "Access token has expired"
PRINCIPAL_NOT_FOUND = "Invalid access token: principal not found"


def authenticate_access_token(
    token: str | None,
    credentials: CredentialStore,
) -> UserPrincipal | AdminPrincipal:
    """
    Verify an access token and resolve its principal.

    A non-null role claim resolves an Admin, otherwise a User. The returned
    AdminPrincipal carries the role from the token, not the stored one.
    """
    if not token:
        raise UnauthorizedError(MISSING_TOKEN)

    check = verify_access_token(token)
    if not check.valid:
        if check.expired:
            raise UnauthorizedError(EXPIRED_TOKEN, token_expired=True)
        raise UnauthorizedError(INVALID_TOKEN)

    claims = check.claims
    if claims.is_admin:
        admin = credentials.find_admin(claims.principal_id)
        if admin is None:
            logger.warning("Access token for missing admin", extra={"admin_id": claims.principal_id})
            raise UnauthorizedError(PRINCIPAL_NOT_FOUND)
        principal = AdminPrincipal.model_validate(admin)
        return principal.model_copy(update={"role": claims.role})

    user = credentials.find_user(claims.principal_id)
    if user is None:
        logger.warning("Access token for missing user", extra={"user_id": claims.principal_id})
        raise UnauthorizedError(PRINCIPAL_NOT_FOUND)
    return UserPrincipal.model_validate(user)


def require_admin(principal: UserPrincipal | AdminPrincipal) -> AdminPrincipal:
    if not isinstance(principal, AdminPrincipal):
        raise ForbiddenError("Admin access required")
    return principal


def require_superadmin(principal: UserPrincipal | AdminPrincipal) -> AdminPrincipal:
    if not isinstance(principal, AdminPrincipal) or principal.role != "superadmin":
        raise ForbiddenError("Super Admin access required")
    return principal


def require_user(principal: UserPrincipal | AdminPrincipal) -> UserPrincipal:
    if not isinstance(principal, UserPrincipal):
        raise ForbiddenError("User access required")
    return principal
