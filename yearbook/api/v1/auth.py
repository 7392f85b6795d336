"""Access-token refresh and device-local logout. Both read only the refresh cookie."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from yearbook.api.deps import clear_auth_cookies, get_refresh_cookie, set_auth_cookies
from yearbook.core.database import get_db
from yearbook.schemas.auth import AccessTokenResponse, MessageResponse
from yearbook.services.auth import AuthService

router = APIRouter()


@router.post("/refresh", response_model=AccessTokenResponse)
def refresh(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    refresh_token: Annotated[str | None, Depends(get_refresh_cookie)],
) -> AccessTokenResponse:
    """
    Issue a new access token from the refresh cookie.

    Does not need the old access token. The refresh session is not rotated.
    """
    access_token = AuthService(db).refresh_access_token(refresh_token)
    set_auth_cookies(response, access_token)
    return AccessTokenResponse(access_token=access_token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    refresh_token: Annotated[str | None, Depends(get_refresh_cookie)],
) -> MessageResponse:
    """Invalidate this device's refresh session only and clear both cookies."""
    AuthService(db).logout_device(refresh_token)
    clear_auth_cookies(response)
    return MessageResponse(message="Logged out successfully")
