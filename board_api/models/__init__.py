"""SQLAlchemy ORM models."""

from board_api.models.base import Base
from board_api.models.board import Board, BoardStatus
from board_api.models.user import User

__all__ = ["Base", "Board", "BoardStatus", "User"]
