"""Superadmin-only administration of admin accounts."""

import logging

from sqlalchemy.orm import Session

from yearbook.core.errors import BadRequestError, NotFoundError
from yearbook.models import Admin
from yearbook.schemas.auth import AdminPrincipal

logger = logging.getLogger(__name__)


def list_admins(db: Session) -> list[Admin]:
    return db.query(Admin).order_by(Admin.id).all()


def set_admin_role(db: Session, actor: AdminPrincipal, admin_id: int, role: str) -> Admin:
    """
    Promote or demote an admin.

    Outstanding access tokens keep their old role claim until they expire;
    the new role is picked up on the next refresh or login.
    """
    if admin_id == actor.id:
        raise BadRequestError("You cannot change your own role")
    admin = db.get(Admin, admin_id)
    if admin is None:
        raise NotFoundError("Admin not found")
    admin.role = role
    db.commit()
    db.refresh(admin)
    logger.info(
        "Admin role changed",
        extra={"admin_id": admin_id, "role": role, "changed_by": actor.id},
    )
    return admin
