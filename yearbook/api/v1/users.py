"""Student registration, login/logout and profile."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from yearbook.api.deps import (
    clear_auth_cookies,
    get_current_user,
    get_refresh_cookie,
    set_auth_cookies,
)
from yearbook.core.database import get_db
from yearbook.schemas.auth import (
    LoginRequest,
    MessageResponse,
    UserLoginResponse,
    UserPrincipal,
    UserRegisterRequest,
)
from yearbook.schemas.user import Classmate, ProfileUpdateRequest
from yearbook.services import users as user_service
from yearbook.services.auth import AuthService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=UserPrincipal, status_code=status.HTTP_201_CREATED)
def register(
    body: UserRegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserPrincipal:
    """Register against a batch code with an enrollment number from its roster."""
    return AuthService(db).register_user(
        name=body.name,
        email=body.email,
        password=body.password,
        enrollment_number=body.enrollment_number,
        batch_code=body.batch_code,
    )


@router.post("/login", response_model=UserLoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> UserLoginResponse:
    """Authenticate with email and password; tokens are returned and set as http-only cookies."""
    result = AuthService(db).login_user(body.email, body.password)
    set_auth_cookies(response, result.access_token, result.refresh_token)
    return UserLoginResponse(
        user=result.principal,
        access_token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    refresh_token: Annotated[str | None, Depends(get_refresh_cookie)],
) -> MessageResponse:
    """Revoke every refresh session of the user (all devices) and clear cookies."""
    AuthService(db).logout_principal(user, refresh_token)
    clear_auth_cookies(response)
    return MessageResponse(message="User logged out successfully")


@router.get("/me", response_model=UserPrincipal)
def me(user: Annotated[UserPrincipal, Depends(get_current_user)]) -> UserPrincipal:
    return user


@router.patch("/profile", response_model=UserPrincipal)
def update_profile(
    body: ProfileUpdateRequest,
    user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserPrincipal:
    row = user_service.update_profile(db, user, name=body.name, profile_picture=body.profile_picture)
    return UserPrincipal.model_validate(row)


@router.get("/classmates", response_model=list[Classmate])
def classmates(
    user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[Classmate]:
    return [Classmate.model_validate(u) for u in user_service.classmates(db, user)]
