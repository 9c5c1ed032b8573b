#!/usr/bin/env python3
"""Create an ADMIN account, or promote an existing user to ADMIN.

Usage:
    python create_admin.py <username> [--firstname F] [--lastname L]

The password is read from ADMIN_PASSWORD or prompted for.
"""

import argparse
import getpass
import os
import sys
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app import crud
from app.core.security import get_password_hash
from app.db.database import SessionLocal, transactional
from app.models.user import UserRole
from app.schemas.user import UserCreate


def create_admin(username: str, password: str, firstname: str, lastname: str) -> int:
    db = SessionLocal()

    try:
        existing_user = crud.user.get_by_username(db, username=username)
        if existing_user:
            print(f"User already exists: {username} (role {existing_user.role.value})")
            if existing_user.role == UserRole.ADMIN:
                print("User is already ADMIN")
                return 0

            with transactional(db):
                crud.user.update(
                    db,
                    db_obj=existing_user,
                    obj_in={"role": UserRole.ADMIN, "hashed_password": get_password_hash(password)},
                )
            print(f"✅ Promoted {username} to ADMIN")
            return 0

        user_in = UserCreate(firstname=firstname, lastname=lastname, username=username, password=password)
        with transactional(db):
            user = crud.user.create(db, obj_in=user_in, role=UserRole.ADMIN)

        print("✅ Admin created successfully!")
        print(f"   Username: {user.username}")
        print(f"   ID: {user.id}")
        return 0

    except Exception as e:
        print(f"❌ Error creating admin: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote a VolunteerHub admin")
    parser.add_argument("username")
    parser.add_argument("--firstname", default="System")
    parser.add_argument("--lastname", default="Admin")
    args = parser.parse_args()

    password = os.getenv("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    sys.exit(create_admin(args.username, password, args.firstname, args.lastname))
