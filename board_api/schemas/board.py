"""Request/response schemas for board endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from board_api.models.board import Board, BoardStatus


class BoardOwner(BaseModel):
    """Owner display info joined onto every board."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class BoardResponse(BaseModel):
    """
    Board as returned to clients.

    The storage path is server-side only and is never part of this payload.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: str
    status: BoardStatus
    user: BoardOwner
    file_name: str | None = Field(default=None, alias="fileName")
    file_size: int | None = Field(default=None, alias="fileSize")

    @classmethod
    def from_board(cls, board: Board) -> "BoardResponse":
        """Build the response from a board loaded with its owner."""
        return cls(
            id=board.id,
            title=board.title,
            description=board.description,
            status=BoardStatus(board.status),
            user=BoardOwner.model_validate(board.owner),
            file_name=board.file_name,
            file_size=board.file_size,
        )


class BoardStatusUpdate(BaseModel):
    """Body for PATCH /boards/{id}/status."""

    status: BoardStatus = Field(..., description="PUBLIC or PRIVATE")
