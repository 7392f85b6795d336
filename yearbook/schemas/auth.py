"""Request/response schemas for authentication and the authenticated principal."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class UserPrincipal(BaseModel):
    """Authenticated student. Never carries the password hash."""

    kind: Literal["User"] = "User"
    id: int
    name: str
    email: str
    enrollment_number: str
    batch_id: int
    profile_picture: str = ""
    is_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class AdminPrincipal(BaseModel):
    """
    Authenticated administrator.

    role is the role granted when the access token was issued; a promotion or
    demotion becomes visible after the next refresh.
    """

    kind: Literal["Admin"] = "Admin"
    id: int
    name: str
    email: str
    role: Literal["admin", "superadmin"]
    created_by_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


Principal = Annotated[UserPrincipal | AdminPrincipal, Field(discriminator="kind")]


class LoginRequest(BaseModel):
    """Credentials for login. Blank values are rejected by the service."""

    email: str | None = Field(default=None, max_length=320, description="Email")
    password: str | None = Field(default=None, max_length=128, description="Password")


class UserRegisterRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=128)
    enrollment_number: str | None = Field(default=None, max_length=64)
    batch_code: str | None = Field(default=None, max_length=64)


class AdminRegisterRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=128)


class UserLoginResponse(BaseModel):
    """User plus the issued tokens (also set as http-only cookies)."""

    user: UserPrincipal
    access_token: str
    refresh_token: str


class AdminLoginResponse(BaseModel):
    admin: AdminPrincipal
    access_token: str
    refresh_token: str


class AccessTokenResponse(BaseModel):
    """New access token returned by the refresh endpoint."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class MessageResponse(BaseModel):
    message: str


class AdminRoleUpdateRequest(BaseModel):
    role: Literal["admin", "superadmin"]
