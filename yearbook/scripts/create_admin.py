"""
Create an admin from the command line. Run from project root:
  python -m yearbook.scripts.create_admin NAME EMAIL PASSWORD [--created-by SUPERADMIN_ID]
The first admin ever created becomes superadmin. Later admins need
--created-by pointing at an existing superadmin.
"""
import argparse
import sys

from yearbook.core.database import SessionLocal
from yearbook.core.errors import YearbookError
from yearbook.schemas.auth import AdminPrincipal
from yearbook.services.auth import AuthService
from yearbook.services.credentials import CredentialStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a yearbook admin.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument(
        "--created-by",
        type=int,
        default=None,
        help="Id of the superadmin creating this admin (not needed for the first admin)",
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        caller = None
        if args.created_by is not None:
            creator = CredentialStore(db).find_admin(args.created_by)
            if creator is None:
                print(f"Admin {args.created_by} does not exist.", file=sys.stderr)
                return 1
            caller = AdminPrincipal.model_validate(creator)
        try:
            admin = AuthService(db).register_admin(
                name=args.name,
                email=args.email,
                password=args.password,
                caller=caller,
            )
        except YearbookError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created admin '{admin.email}' with role '{admin.role}' (id {admin.id}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
