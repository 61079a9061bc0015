"""
Board operations that keep attachment bytes on disk consistent with board rows.

Ordering rules:
- new bytes are written before the row that references them, and removed again
  if the transaction fails;
- replaced or deleted bytes are removed only after the row change is committed,
  using the descriptor read from the locked row beforehand.
"""

import logging
from pathlib import Path

from sqlalchemy.orm import Session

from board_api.models import Board, BoardStatus
from board_api.services.attachments import AttachmentStorage, FileUpload, StoredAttachment
from board_api.services.board_store import BoardStore

logger = logging.getLogger(__name__)


class BoardService:
    """Transactional board use cases for one request."""

    def __init__(self, db: Session, storage: AttachmentStorage) -> None:
        self.db = db
        self.store = BoardStore(db)
        self.storage = storage

    def list_boards(self, owner_id: int) -> list[Board]:
        boards = self.store.list_for_owner(owner_id)
        logger.debug("Listed boards", extra={"owner_id": owner_id, "count": len(boards)})
        return boards

    def get_board(self, board_id: int) -> Board:
        return self.store.get_by_id(board_id)

    def create_board(
        self,
        title: str,
        description: str,
        owner_id: int,
        upload: FileUpload | None = None,
    ) -> Board:
        """Create a PUBLIC board, storing the upload first when one is given."""
        stored = self.storage.save(upload) if upload is not None else None
        try:
            board = self.store.create(title, description, owner_id, attachment=stored)
            board_id = board.id
            self.db.commit()
        except Exception:
            self.db.rollback()
            if stored is not None:
                self.storage.remove(stored.file_path)
            raise
        logger.info(
            "Board created",
            extra={"board_id": board_id, "owner_id": owner_id, **_attachment_extra(stored)},
        )
        return self.store.get_by_id(board_id)

    def update_board(
        self,
        board_id: int,
        title: str,
        description: str,
        owner_id: int,
        upload: FileUpload | None = None,
    ) -> Board:
        """
        Update title/description and optionally replace the attachment.

        Ownership is checked before any bytes are written. Without an upload the
        existing attachment is left as is.
        """
        stored: StoredAttachment | None = None
        try:
            board = self.store.get_owned(board_id, owner_id)
            old_path = board.file_path
            if upload is not None:
                stored = self.storage.save(upload)
            self.store.update_content(board_id, title, description, owner_id, attachment=stored)
            self.db.commit()
        except Exception:
            self.db.rollback()
            if stored is not None:
                self.storage.remove(stored.file_path)
            raise
        if stored is not None and old_path:
            self.storage.remove(old_path)
        logger.info(
            "Board updated",
            extra={
                "board_id": board_id,
                "owner_id": owner_id,
                "replaced_attachment": bool(stored is not None and old_path),
                **_attachment_extra(stored),
            },
        )
        return self.store.get_by_id(board_id)

    def update_status(
        self,
        board_id: int,
        status: BoardStatus,
        owner_id: int | None = None,
    ) -> Board:
        try:
            self.store.update_status(board_id, status, owner_id=owner_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(
            "Board status changed",
            extra={"board_id": board_id, "owner_id": owner_id, "status": BoardStatus(status).value},
        )
        return self.store.get_by_id(board_id)

    def delete_board(self, board_id: int, owner_id: int) -> None:
        """
        Delete an owned board and then its stored bytes, if any.

        The descriptor is read before the row goes away; a board without an
        attachment causes no filesystem call.
        """
        try:
            board = self.store.get_owned(board_id, owner_id)
            old_path = board.file_path
            self.store.delete(board_id, owner_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        if old_path:
            self.storage.remove(old_path)
        logger.info(
            "Board deleted",
            extra={"board_id": board_id, "owner_id": owner_id, "storage_path": old_path},
        )

    def get_download(self, board_id: int) -> tuple[str, Path]:
        """Display name and on-disk path of a board's attachment."""
        info = self.store.get_attachment_info(board_id)
        return info.file_name, self.storage.open_path(info.file_path)


def _attachment_extra(stored: StoredAttachment | None) -> dict[str, str | int]:
    if stored is None:
        return {}
    return {
        "file_name": stored.file_name,
        "storage_path": stored.file_path,
        "file_size": stored.file_size,
    }
