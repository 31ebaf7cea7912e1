"""
Create an account, typically the first admin (registration only creates 'user'). Run from project root:
  python -m crisisconnect.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m crisisconnect.scripts.create_user "Ops Lead" ops@example.org your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from crisisconnect.core.database import SessionLocal
from crisisconnect.core.security import (
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    ROLE_ADMIN,
    ROLE_USER,
    hash_password,
)
from crisisconnect.models import User
from crisisconnect.schemas.auth import RegisterRequest

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a CrisisConnect account.")
    parser.add_argument("name", help=f"Display name (1-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=[ROLE_USER, ROLE_ADMIN])
    args = parser.parse_args(argv)

    # Same name, email and password rules as /auth/register.
    try:
        details = RegisterRequest(name=args.name, email=args.email, password=args.password)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            print(f"Invalid {field}: {error['msg']}", file=sys.stderr)
        return 1
    name, email = details.name, details.email

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(details.password),
            role=args.role,
        )
        db.add(user)
        db.commit()
        logger.info("Created user email=%s role=%s", email, args.role)
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
