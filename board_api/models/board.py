"""ORM model for boards and their optional attachment descriptor."""

import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from board_api.models.base import Base


class BoardStatus(str, enum.Enum):
    """Visibility of a board."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class Board(Base):
    """
    A board (forum post) owned by exactly one user.

    The attachment descriptor is embedded: file_name is the user-facing display
    name, file_path the generated storage key under UPLOAD_DIR, file_size the
    byte count. The three are written together or not at all.
    """

    __tablename__ = "boards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default=BoardStatus.PUBLIC.value)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    file_name = Column(String(512), nullable=True)
    file_path = Column(String(255), nullable=True)
    file_size = Column(Integer, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # BoardStore loads this through an explicit join (contains_eager).
    owner = relationship("User", back_populates="boards")
