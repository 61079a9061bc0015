"""Credential store: register users and verify username/password pairs."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from board_api.core.security import hash_password, verify_password
from board_api.models import User
from board_api.services.exceptions import UsernameAlreadyExistsError

logger = logging.getLogger(__name__)


def register(db: Session, username: str, password: str) -> None:
    """
    Store a new user with a bcrypt hash of the password.

    Raises UsernameAlreadyExistsError if the username is taken, including when a
    concurrent signup wins the unique constraint.
    """
    if db.query(User.id).filter(User.username == username).first() is not None:
        raise UsernameAlreadyExistsError("Username already exists")
    db.add(User(username=username, password_hash=hash_password(password)))
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise UsernameAlreadyExistsError("Username already exists") from e
    logger.info("User registered", extra={"username": username})


def verify(db: Session, username: str, password: str) -> bool:
    """True iff the user exists and the password matches. Never says which check failed."""
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        return False
    return verify_password(password, user.password_hash)
