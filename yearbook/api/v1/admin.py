"""Admin registration/login/logout, admin management, batches and moderation."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.orm import Session

from yearbook.api.deps import (
    clear_auth_cookies,
    get_current_admin,
    get_current_superadmin,
    get_optional_principal,
    get_refresh_cookie,
    set_auth_cookies,
)
from yearbook.core.config import settings
from yearbook.core.database import get_db
from yearbook.schemas.auth import (
    AdminLoginResponse,
    AdminPrincipal,
    AdminRegisterRequest,
    AdminRoleUpdateRequest,
    LoginRequest,
    MessageResponse,
    Principal,
)
from yearbook.schemas.batch import BatchOut
from yearbook.schemas.entry import EntryOut
from yearbook.services import admins as admin_service
from yearbook.services import batches as batch_service
from yearbook.services import entries as entry_service
from yearbook.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=AdminPrincipal, status_code=status.HTTP_201_CREATED)
def register(
    body: AdminRegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[Principal | None, Depends(get_optional_principal)],
) -> AdminPrincipal:
    """
    Register an admin.

    The very first admin is created as superadmin without authentication;
    after that the caller must be an authenticated superadmin.
    """
    return AuthService(db).register_admin(
        name=body.name,
        email=body.email,
        password=body.password,
        caller=caller,
    )


@router.post("/login", response_model=AdminLoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AdminLoginResponse:
    result = AuthService(db).login_admin(body.email, body.password)
    set_auth_cookies(response, result.access_token, result.refresh_token)
    return AdminLoginResponse(
        admin=result.principal,
        access_token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    admin: Annotated[AdminPrincipal, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
    refresh_token: Annotated[str | None, Depends(get_refresh_cookie)],
) -> MessageResponse:
    """Revoke every refresh session of the admin (all devices) and clear cookies."""
    AuthService(db).logout_principal(admin, refresh_token)
    clear_auth_cookies(response)
    return MessageResponse(message="Admin logged out successfully")


@router.get("/me", response_model=AdminPrincipal)
def me(admin: Annotated[AdminPrincipal, Depends(get_current_admin)]) -> AdminPrincipal:
    return admin


@router.get("/admins", response_model=list[AdminPrincipal])
def list_admins(
    _superadmin: Annotated[AdminPrincipal, Depends(get_current_superadmin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[AdminPrincipal]:
    """List all admins (superadmin only)."""
    return [AdminPrincipal.model_validate(a) for a in admin_service.list_admins(db)]


@router.patch("/admins/{admin_id}/role", response_model=AdminPrincipal)
def update_admin_role(
    admin_id: int,
    body: AdminRoleUpdateRequest,
    superadmin: Annotated[AdminPrincipal, Depends(get_current_superadmin)],
    db: Annotated[Session, Depends(get_db)],
) -> AdminPrincipal:
    """Promote or demote an admin (superadmin only)."""
    admin = admin_service.set_admin_role(db, superadmin, admin_id, body.role)
    return AdminPrincipal.model_validate(admin)


@router.post("/batches", response_model=BatchOut, status_code=status.HTTP_201_CREATED)
def create_batch(
    admin: Annotated[AdminPrincipal, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
    batch_year: Annotated[str | None, Form()] = None,
    college_id: Annotated[int | None, Form()] = None,
    degree: Annotated[str | None, Form()] = None,
    excel: Annotated[UploadFile | None, File()] = None,
) -> BatchOut:
    """Create a batch from an enrollment spreadsheet (first sheet, enrollmentNumber column)."""
    content = excel.file.read() if excel is not None else None
    batch = batch_service.create_batch(
        db,
        batch_year=batch_year,
        college_id=college_id,
        degree=degree,
        sheet=content,
        sheet_content_type=excel.content_type if excel is not None else None,
        max_sheet_bytes=settings.MAX_ENROLLMENT_SHEET_BYTES,
        created_by_id=admin.id,
    )
    return BatchOut.model_validate(batch)


@router.get("/batches/{batch_id}", response_model=BatchOut)
def get_batch(
    batch_id: int,
    _admin: Annotated[AdminPrincipal, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> BatchOut:
    return BatchOut.model_validate(batch_service.get_batch(db, batch_id))


@router.get("/batches/{batch_id}/entries", response_model=list[EntryOut])
def get_batch_entries(
    batch_id: int,
    _admin: Annotated[AdminPrincipal, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[EntryOut]:
    return [EntryOut.model_validate(e) for e in entry_service.all_batch_entries(db, batch_id)]


@router.delete("/entries/{entry_id}", response_model=MessageResponse)
def remove_entry(
    entry_id: int,
    admin: Annotated[AdminPrincipal, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    entry_service.remove_entry(db, entry_id, admin.id)
    return MessageResponse(message="Entry removed successfully")
