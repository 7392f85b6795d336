"""Credential store: User and Admin records with bcrypt-hashed passwords."""

import logging
from typing import Literal

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from yearbook.core.errors import ConflictError
from yearbook.core.security import hash_password, verify_password
from yearbook.models import Admin, User

logger = logging.getLogger(__name__)

PrincipalType = Literal["User", "Admin"]


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively and stored trimmed and lower-cased."""
    return email.strip().lower()


class CredentialStore:
    """
    Lookup and creation of principals.

    Passwords are hashed here and nowhere else: create_* and set_password always
    hash before the row is flushed. Email uniqueness is scoped per variant; a
    User and an Admin may share an address.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # Lookups

    def find_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_admin_by_email(self, email: str) -> Admin | None:
        return self.db.query(Admin).filter(Admin.email == normalize_email(email)).first()

    def find_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def find_admin(self, admin_id: int) -> Admin | None:
        return self.db.get(Admin, admin_id)

    def find_principal(self, principal_id: int, principal_type: PrincipalType) -> User | Admin | None:
        if principal_type == "Admin":
            return self.find_admin(principal_id)
        return self.find_user(principal_id)

    def count_admins(self) -> int:
        return self.db.query(func.count(Admin.id)).scalar() or 0

    # Creation

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        enrollment_number: str,
        batch_id: int,
    ) -> User:
        """Persist a new user. Raises ConflictError if the email is taken."""
        email = normalize_email(email)
        if self.find_user_by_email(email) is not None:
            raise ConflictError("User with this email already exists")
        user = User(
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
            enrollment_number=enrollment_number.strip(),
            batch_id=batch_id,
        )
        self._commit_new(user, "User with this email or enrollment number already exists")
        logger.info("User created", extra={"user_id": user.id, "batch_id": batch_id})
        return user

    def create_admin(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: str,
        created_by_id: int | None = None,
    ) -> Admin:
        """Persist a new admin. Raises ConflictError if the email is taken."""
        email = normalize_email(email)
        if self.find_admin_by_email(email) is not None:
            raise ConflictError("Admin with this email already exists")
        admin = Admin(
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
            role=role,
            created_by_id=created_by_id,
        )
        self._commit_new(admin, "Admin with this email already exists")
        logger.info("Admin created", extra={"admin_id": admin.id, "role": role})
        return admin

    def set_password(self, principal: User | Admin, new_password: str) -> None:
        principal.password_hash = hash_password(new_password)
        self.db.commit()

    # Verification

    @staticmethod
    def verify_password(principal: User | Admin, plain_password: str) -> bool:
        return verify_password(plain_password, principal.password_hash)

    def _commit_new(self, row: User | Admin, conflict_message: str) -> None:
        # The unique index is the final arbiter when two registrations race.
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(conflict_message) from e
        self.db.refresh(row)
