"""
Create a user (e.g. an additional administrator). Run from project root:
  python -m inventory.scripts.create_user USERNAME PASSWORD [--email EMAIL] [--role ROLE]
Example:
  python -m inventory.scripts.create_user alice s3cret-pass --role Administrator
"""
import argparse
import logging
import sys

from inventory.core.config import get_settings
from inventory.core.database import SessionLocal
from inventory.core.errors import ServiceError
from inventory.core.security import ROLE_ADMIN, ROLE_USER
from inventory.services.auth import AuthService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Inventory API user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (at least PASSWORD_MIN_LENGTH chars)")
    parser.add_argument("--email", default=None, help="Email address")
    parser.add_argument("--role", default=ROLE_USER, choices=[ROLE_USER, ROLE_ADMIN])
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = AuthService(db, get_settings()).register(
            args.username.strip(), args.password, args.email, args.role
        )
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
