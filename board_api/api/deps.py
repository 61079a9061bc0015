"""Shared request dependencies: attachment storage and the board service."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from board_api.core.config import get_settings
from board_api.core.database import get_db
from board_api.services.attachments import AttachmentStorage
from board_api.services.boards import BoardService


def get_attachment_storage() -> AttachmentStorage:
    """Storage rooted at UPLOAD_DIR with the configured size limit."""
    settings = get_settings()
    return AttachmentStorage(settings.UPLOAD_DIR, max_bytes=settings.MAX_UPLOAD_FILE_BYTES)


def get_board_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[AttachmentStorage, Depends(get_attachment_storage)],
) -> BoardService:
    return BoardService(db, storage)
