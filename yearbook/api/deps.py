"""
Request-scoped authentication dependencies.

The access token is read from the access-token cookie, falling back to an
Authorization: Bearer header; the cookie wins when both are present. The
refresh token is only ever read from its cookie.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from yearbook.core.config import settings
from yearbook.core.database import get_db
from yearbook.core.errors import UnauthorizedError
from yearbook.schemas.auth import AdminPrincipal, Principal, UserPrincipal
from yearbook.services.authentication import (
    authenticate_access_token,
    require_admin,
    require_superadmin,
    require_user,
)
from yearbook.services.credentials import CredentialStore
from yearbook.services.montage_queue import MontageQueue

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def extract_access_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    cookie_token = request.cookies.get(settings.ACCESS_TOKEN_COOKIE)
    if cookie_token:
        return cookie_token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return None


def get_refresh_cookie(request: Request) -> str | None:
    return request.cookies.get(settings.REFRESH_TOKEN_COOKIE) or None


def get_current_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> Principal:
    """Dependency: require a valid access token. Raises 401 if missing, invalid or expired."""
    token = extract_access_token(request, credentials)
    return authenticate_access_token(token, CredentialStore(db))


def get_optional_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> Principal | None:
    """
    Dependency: the caller if a valid credential was sent, otherwise None.

    A missing, expired or invalid credential all mean an anonymous caller; the
    route decides what an anonymous caller may do.
    """
    token = extract_access_token(request, credentials)
    if token is None:
        return None
    try:
        return authenticate_access_token(token, CredentialStore(db))
    except UnauthorizedError as e:
        logger.info(
            "Ignoring unusable credential on optional-auth route: %s",
            e.message,
            extra={"path": request.url.path},
        )
        return None


def get_current_user(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> UserPrincipal:
    """Dependency: require a User principal. Raises 403 for admins."""
    return require_user(principal)


def get_current_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> AdminPrincipal:
    """Dependency: require an Admin principal. Raises 403 otherwise."""
    return require_admin(principal)


def get_current_superadmin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> AdminPrincipal:
    """Dependency: require an Admin principal whose token grants superadmin."""
    return require_superadmin(principal)


def get_montage_queue(request: Request) -> MontageQueue:
    return request.app.state.montage_queue


def set_auth_cookies(response: Response, access_token: str, refresh_token: str | None = None) -> None:
    response.set_cookie(
        settings.ACCESS_TOKEN_COOKIE,
        access_token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    if refresh_token is not None:
        response.set_cookie(
            settings.REFRESH_TOKEN_COOKIE,
            refresh_token,
            httponly=True,
            secure=settings.COOKIE_SECURE,
            samesite="lax",
            max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        )


def clear_auth_cookies(response: Response) -> None:
    for name in (settings.ACCESS_TOKEN_COOKIE, settings.REFRESH_TOKEN_COOKIE):
        response.delete_cookie(name, httponly=True, secure=settings.COOKIE_SECURE, samesite="lax")
