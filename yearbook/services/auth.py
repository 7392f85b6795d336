"""Login, registration, access-token refresh and logout for both principal variants."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from yearbook.core.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from yearbook.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, sign_access_token
from yearbook.models import Admin, Batch, User
from yearbook.schemas.auth import AdminPrincipal, UserPrincipal
from yearbook.services.credentials import CredentialStore
from yearbook.services.session_manager import SessionManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    principal: UserPrincipal | AdminPrincipal
    access_token: str
    refresh_token: str


def _require_fields(message: str, *values: str | None) -> None:
    if any(v is None or not v.strip() for v in values):
        raise BadRequestError(message)


def _validate_password(password: str) -> None:
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise BadRequestError(
            f"Password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters"
        )


class AuthService:
    """Orchestrates CredentialStore, SessionManager and the token codec."""

    def __init__(
        self,
        db: Session,
        credentials: CredentialStore | None = None,
        sessions: SessionManager | None = None,
    ) -> None:
        self.db = db
        self.credentials = credentials or CredentialStore(db)
        self.sessions = sessions or SessionManager(db)

    # Registration

    def register_user(
        self,
        *,
        name: str | None,
        email: str | None,
        password: str | None,
        enrollment_number: str | None,
        batch_code: str | None,
    ) -> UserPrincipal:
        _require_fields("All fields are required", name, email, password, enrollment_number, batch_code)
        _validate_password(password)
        if self.credentials.find_user_by_email(email) is not None:
            raise ConflictError("User with this email already exists")

        batch = self.db.query(Batch).filter(Batch.batch_code == batch_code.strip()).first()
        if batch is None:
            raise NotFoundError("Invalid batch code")

        enrollment_number = enrollment_number.strip()
        if enrollment_number not in (batch.enrollment_numbers or []):
            raise BadRequestError("Invalid enrollment number for this batch")

        already_registered = (
            self.db.query(User)
            .filter(User.enrollment_number == enrollment_number, User.batch_id == batch.id)
            .first()
        )
        if already_registered is not None:
            raise ConflictError("This enrollment number is already registered for this batch")

        user = self.credentials.create_user(
            name=name,
            email=email,
            password=password,
            enrollment_number=enrollment_number,
            batch_id=batch.id,
        )
        return UserPrincipal.model_validate(user)

    def register_admin(
        self,
        *,
        name: str | None,
        email: str | None,
        password: str | None,
        caller: UserPrincipal | AdminPrincipal | None = None,
    ) -> AdminPrincipal:
        """
        Create an admin.

        While no admin exists the new admin becomes superadmin whoever the
        caller is. Afterwards only an authenticated superadmin may register
        admins, and they are created with role 'admin'.
        """
        _require_fields("All fields are required", name, email, password)
        _validate_password(password)
        if self.credentials.find_admin_by_email(email) is not None:
            raise ConflictError("Admin with this email already exists")

        is_first_admin = self.credentials.count_admins() == 0
        if not is_first_admin:
            if not isinstance(caller, AdminPrincipal) or caller.role != "superadmin":
                raise ForbiddenError("Only super admins can create new admins")

        created_by_id = caller.id if isinstance(caller, AdminPrincipal) else None
        admin = self.credentials.create_admin(
            name=name,
            email=email,
            password=password,
            role="superadmin" if is_first_admin else "admin",
            created_by_id=created_by_id,
        )
        if is_first_admin:
            logger.info("Bootstrap superadmin created", extra={"admin_id": admin.id})
        return AdminPrincipal.model_validate(admin)

    # Login

    def login_user(self, email: str | None, password: str | None) -> LoginResult:
        _require_fields("Email and password are required", email, password)
        user = self.credentials.find_user_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        if not self.credentials.verify_password(user, password):
            logger.info("User login rejected", extra={"user_id": user.id})
            raise UnauthorizedError("Invalid password")

        access_token = sign_access_token(user.id, None)
        refresh_token = self.sessions.issue_refresh_session(user.id, "User")
        logger.info("User logged in", extra={"user_id": user.id})
        return LoginResult(UserPrincipal.model_validate(user), access_token, refresh_token)

    def login_admin(self, email: str | None, password: str | None) -> LoginResult:
        _require_fields("Email and password are required", email, password)
        admin = self.credentials.find_admin_by_email(email)
        if admin is None:
            raise NotFoundError("Admin not found")
        if not self.credentials.verify_password(admin, password):
            logger.info("Admin login rejected", extra={"admin_id": admin.id})
            raise UnauthorizedError("Invalid password")

        access_token = sign_access_token(admin.id, admin.role)
        refresh_token = self.sessions.issue_refresh_session(admin.id, "Admin")
        logger.info("Admin logged in", extra={"admin_id": admin.id})
        return LoginResult(AdminPrincipal.model_validate(admin), access_token, refresh_token)

    # Refresh and logout

    def refresh_access_token(self, refresh_token: str | None) -> str:
        """
        Mint a new access token from a refresh session.

        The session is neither rotated nor extended. An Admin token carries the
        admin's current stored role.
        """
        if not refresh_token:
            raise UnauthorizedError("Refresh token is required")
        session = self.sessions.verify_refresh_session(refresh_token)
        if session is None:
            raise UnauthorizedError("Invalid or expired refresh token")

        principal = self.credentials.find_principal(session.principal_id, session.principal_type)
        if principal is None:
            raise NotFoundError("User not found")

        role = principal.role if isinstance(principal, Admin) else None
        return sign_access_token(principal.id, role)

    def logout_device(self, refresh_token: str | None) -> None:
        """Invalidate only the presented refresh token. Idempotent."""
        if refresh_token:
            self.sessions.invalidate(refresh_token)

    def logout_principal(
        self,
        principal: UserPrincipal | AdminPrincipal,
        refresh_token: str | None,
    ) -> int:
        """
        Revoke every session of principal when a refresh token was presented.

        Without a refresh token the caller is treated as already logged out.
        """
        if not refresh_token:
            return 0
        return self.sessions.invalidate_all(principal.id, principal.kind)

