#!/usr/bin/env python3
"""
Script to create an admin account or promote an existing user to admin.
Usage: python make_admin.py EMAIL [--name NAME --age AGE]
"""

import argparse
import asyncio
import getpass
import sys

from knotty.core.security import get_password_hash
from knotty.db.database import SessionLocal
from knotty.domain.entities.user import User
from knotty.domain.enums import UserRole
from knotty.domain.exceptions import DomainError
from knotty.domain.repositories.unit_of_work import IUnitOfWork
from knotty.domain.value_objects.email import Email
from knotty.infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
import knotty.infrastructure.orm  # noqa: F401


async def make_admin(unit_of_work: IUnitOfWork, email: str, name: str = None, age: int = None, password: str = None) -> str:
    """Promote the user with this email, or create one when none exists.

    Returns "promoted", "unchanged" or "created".
    """
    async with unit_of_work:
        user = await unit_of_work.users.get_by_email(Email(email))
        if user:
            if user.is_admin:
                return "unchanged"
            user.change_role(UserRole.ADMIN)
            await unit_of_work.users.update(user)
            await unit_of_work.commit()
            return "promoted"

        if not name or age is None or not password:
            raise DomainError("Name, age and password are required to create a new admin")

        user = User.create(
            email=Email(email),
            name=name,
            age=age,
            password=password,
            hash_password=get_password_hash,
            role=UserRole.ADMIN,
        )
        await unit_of_work.users.add(user)
        await unit_of_work.commit()
        return "created"


def main() -> int:
    parser = argparse.ArgumentParser(description="Create or promote a Knotty admin account")
    parser.add_argument("email")
    parser.add_argument("--name", help="required when the account does not exist yet")
    parser.add_argument("--age", type=int, help="required when the account does not exist yet")
    args = parser.parse_args()

    password = None
    if args.name:
        password = getpass.getpass("Password for the new admin: ")

    db = SessionLocal()
    try:
        outcome = asyncio.run(make_admin(UnitOfWorkImpl(db), args.email, args.name, args.age, password))
    except (DomainError, ValueError) as e:
        print(f"Error: {getattr(e, 'message', e)}")
        return 1
    finally:
        db.close()

    print(f"{args.email}: {outcome}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
