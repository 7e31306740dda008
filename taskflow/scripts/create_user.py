"""
Create a user (e.g. the first admin; registration always assigns 'user'). Run from project root:
  python -m taskflow.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m taskflow.scripts.create_user "Ops Admin" admin@example.com 'S3cure-pass' admin
"""
import argparse
import sys

from taskflow.core.config import get_settings
from taskflow.core.database import build_engine, build_session_factory
from taskflow.core.errors import ConflictError
from taskflow.services.users import create_user
from taskflow.services.validation import USER_ROLES, validate_registration


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Taskflow user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Min 8 chars with upper, lower and digit")
    parser.add_argument("role", nargs="?", default="user", choices=list(USER_ROLES))
    args = parser.parse_args(argv)

    error = validate_registration(
        {"name": args.name, "email": args.email, "password": args.password}
    )
    if error:
        print(error, file=sys.stderr)
        return 1

    settings = get_settings()
    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        try:
            user = create_user(
                db,
                name=args.name,
                email=args.email,
                password=args.password,
                role=args.role,
                bcrypt_rounds=settings.BCRYPT_ROUNDS,
            )
        except ConflictError as e:
            print(f"{e.message}: {args.email}", file=sys.stderr)
            return 1
        print(f"Created user '{user.email}' ({user.id}) with role '{user.role}'.")
        return 0
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
