"""
Create an account from the shell (e.g. to seed the first admin). Run from project root:
  python -m clubhouse.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m clubhouse.scripts.create_user Alice alice@example.com secret1 admin
"""
import argparse
import sys

from pydantic import ValidationError

from clubhouse.core.database import SessionLocal, init_db
from clubhouse.models.user import ROLES
from clubhouse.schemas.auth import SignupForm, first_error_message
from clubhouse.services.auth import EmailTakenError, register
from clubhouse.services.users import update_role


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a clubhouse account.")
    parser.add_argument("name", help="Display name (1-20 chars)")
    parser.add_argument("email", help="Email address used to log in")
    parser.add_argument("password", help="Password (6-30 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=None,
        choices=list(ROLES),
        help="Force a role; default follows signup (first account is admin)",
    )
    args = parser.parse_args(argv)

    try:
        form = SignupForm(name=args.name, email=args.email, password=args.password)
    except ValidationError as e:
        print(first_error_message(e), file=sys.stderr)
        return 1

    init_db()
    db = SessionLocal()
    try:
        try:
            user = register(db, form)
        except EmailTakenError as e:
            print(e.message, file=sys.stderr)
            return 1
        role = user.role
        if args.role is not None and args.role != user.role:
            update_role(db, user.email, args.role)
            role = args.role
        print(f"Created account '{user.email}' with role '{role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
