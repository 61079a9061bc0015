"""ORM model for application users (credential store)."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from board_api.models.base import Base


class User(Base):
    """
    User account for JWT authentication.

    Created at signup and never mutated afterwards; owns zero or more boards.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    boards = relationship("Board", back_populates="owner")
