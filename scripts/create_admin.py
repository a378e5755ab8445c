"""
Crée un compte admin du back-office, ou réinitialise son mot de passe.

    python -m scripts.create_admin admin@waman.ma --name "Admin"

Le mot de passe est demandé au terminal (jamais passé en argument).
"""

import argparse
import getpass
import sys

from sqlmodel import Session

from waman.core.config import jwt_settings
from waman.db.repositories.admin_users import AdminUserRepository
from waman.db.session import engine, init_db
from waman.features.authentication.services import AuthService


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create or reset a back-office admin account")
    parser.add_argument("email")
    parser.add_argument("--name", default=None)
    args = parser.parse_args(argv)

    password = getpass.getpass("Password: ")
    if len(password) < 8:
        print("❌ Password must be at least 8 characters", file=sys.stderr)
        return 1
    if password != getpass.getpass("Confirm: "):
        print("❌ Passwords do not match", file=sys.stderr)
        return 1

    init_db()
    with Session(engine) as session:
        auth = AuthService(user_repo=AdminUserRepository(session), jwt_settings=jwt_settings)
        user = auth.ensure_admin(email=args.email, password=password, name=args.name)
        print(f"✅ Admin ready: {user.email} (id={user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
