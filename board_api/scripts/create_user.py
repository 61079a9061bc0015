"""
Create a user from the shell. Run from project root:
  python -m board_api.scripts.create_user USERNAME PASSWORD
Example:
  python -m board_api.scripts.create_user alice pass1234
"""
import argparse
import sys

from board_api.core.database import SessionLocal
from board_api.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from board_api.services import credentials
from board_api.services.exceptions import UsernameAlreadyExistsError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a board user without going through /auth/signup.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        credentials.register(db, username, args.password)
    except UsernameAlreadyExistsError:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{username}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
