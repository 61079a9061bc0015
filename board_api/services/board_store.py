"""
Board store: ownership-scoped queries and row mutations for boards.

Methods flush but never commit; BoardService owns the transaction. Every read
that returns a Board joins its owner in the same query so the owner's username
is available without a second round trip.
"""

from dataclasses import dataclass

from sqlalchemy.orm import Query, Session, contains_eager

from board_api.models import Board, BoardStatus
from board_api.services.attachments import StoredAttachment
from board_api.services.exceptions import AttachmentNotFoundError, BoardNotFoundError


@dataclass(frozen=True)
class AttachmentInfo:
    """Display name and storage key of a board's attachment."""

    file_name: str
    file_path: str


def _not_found(board_id: int) -> BoardNotFoundError:
    return BoardNotFoundError(f"Board with id {board_id} not found")


class BoardStore:
    """Relational access to boards for one session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _with_owner(self) -> Query:
        return (
            self.db.query(Board)
            .join(Board.owner)
            .options(contains_eager(Board.owner))
        )

    def list_for_owner(self, owner_id: int) -> list[Board]:
        """Boards owned by owner_id in creation order."""
        return (
            self._with_owner()
            .filter(Board.user_id == owner_id)
            .order_by(Board.id)
            .all()
        )

    def get_by_id(self, board_id: int) -> Board:
        """Any board by id, with its owner. Not restricted to the caller."""
        board = self._with_owner().filter(Board.id == board_id).first()
        if board is None:
            raise _not_found(board_id)
        return board

    def get_owned(self, board_id: int, owner_id: int, for_update: bool = True) -> Board:
        """
        The board if it belongs to owner_id, locked for the current transaction.

        A board owned by someone else is reported exactly like a missing one.
        """
        query = self._with_owner().filter(Board.id == board_id, Board.user_id == owner_id)
        if for_update:
            query = query.with_for_update(of=Board)
        board = query.first()
        if board is None:
            raise _not_found(board_id)
        return board

    def create(
        self,
        title: str,
        description: str,
        owner_id: int,
        attachment: StoredAttachment | None = None,
    ) -> Board:
        """Insert a PUBLIC board for owner_id, with the attachment descriptor when given."""
        board = Board(
            title=title,
            description=description,
            status=BoardStatus.PUBLIC.value,
            user_id=owner_id,
        )
        if attachment is not None:
            _set_attachment(board, attachment)
        self.db.add(board)
        self.db.flush()
        return board

    def update_content(
        self,
        board_id: int,
        title: str,
        description: str,
        owner_id: int,
        attachment: StoredAttachment | None = None,
    ) -> Board:
        """Replace title/description (and the whole descriptor when given) on an owned board."""
        board = self.get_owned(board_id, owner_id)
        board.title = title
        board.description = description
        if attachment is not None:
            _set_attachment(board, attachment)
        self.db.flush()
        return board

    def update_status(
        self,
        board_id: int,
        status: BoardStatus,
        owner_id: int | None = None,
    ) -> Board:
        """Set status. Scoped to the owner when owner_id is given."""
        if owner_id is None:
            board = self.get_by_id(board_id)
        else:
            board = self.get_owned(board_id, owner_id)
        board.status = BoardStatus(status).value
        self.db.flush()
        return board

    def delete(self, board_id: int, owner_id: int) -> None:
        """Delete the row matching id and owner; BoardNotFoundError if none matched."""
        deleted = (
            self.db.query(Board)
            .filter(Board.id == board_id, Board.user_id == owner_id)
            .delete(synchronize_session="fetch")
        )
        if deleted == 0:
            raise _not_found(board_id)

    def get_attachment_info(self, board_id: int) -> AttachmentInfo:
        """Display name and storage key for a board's attachment."""
        row = (
            self.db.query(Board.file_name, Board.file_path)
            .filter(Board.id == board_id)
            .first()
        )
        if row is None or not row.file_name or not row.file_path:
            raise AttachmentNotFoundError(f"File not found for board {board_id}")
        return AttachmentInfo(file_name=row.file_name, file_path=row.file_path)


def _set_attachment(board: Board, attachment: StoredAttachment) -> None:
    board.file_name = attachment.file_name
    board.file_path = attachment.file_path
    board.file_size = attachment.file_size
