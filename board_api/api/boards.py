"""Board CRUD endpoints with optional single-file attachment upload/download."""

import logging
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from fastapi.responses import FileResponse

from board_api.api.auth import get_current_user
from board_api.api.deps import get_board_service
from board_api.schemas.auth import CurrentUser
from board_api.schemas.board import BoardResponse, BoardStatusUpdate
from board_api.services.attachments import FileUpload
from board_api.services.boards import BoardService
from board_api.services.exceptions import (
    AttachmentNotFoundError,
    AttachmentTooLargeError,
    BoardNotFoundError,
)

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(get_current_user)])

TITLE_MAX_LEN = 255


def _require_text(value: str, field: str, max_len: int | None = None) -> str:
    """Reject empty or whitespace-only form fields before they reach the store."""
    value = value.strip()
    if not value:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{field} must not be empty.",
        )
    if max_len is not None and len(value) > max_len:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{field} must be at most {max_len} characters.",
        )
    return value


def _to_upload(file: UploadFile | None) -> FileUpload | None:
    # Browsers submit an empty part with no filename when no file was chosen.
    if file is None or not file.filename:
        return None
    return FileUpload(filename=file.filename, stream=file.file)


def _not_found(e: BoardNotFoundError | AttachmentNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


def _too_large(e: AttachmentTooLargeError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=e.message)


@router.get("", response_model=list[BoardResponse])
def list_boards(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
) -> list[BoardResponse]:
    """Return the caller's boards in creation order."""
    logger.debug("User %s listing boards", user.username)
    return [BoardResponse.from_board(b) for b in service.list_boards(user.id)]


@router.get("/files/{board_id}")
def download_file(
    board_id: int,
    service: Annotated[BoardService, Depends(get_board_service)],
) -> FileResponse:
    """
    Stream a board's attachment under its original name.

    The server-side storage path never leaves the server; clients address the
    file by board id only.
    """
    try:
        file_name, path = service.get_download(board_id)
    except AttachmentNotFoundError as e:
        raise _not_found(e) from e
    return FileResponse(
        path,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(file_name, safe='')}"},
    )


@router.get("/{board_id}", response_model=BoardResponse)
def get_board(
    board_id: int,
    service: Annotated[BoardService, Depends(get_board_service)],
) -> BoardResponse:
    """Return one board by id with its owner's username."""
    try:
        return BoardResponse.from_board(service.get_board(board_id))
    except BoardNotFoundError as e:
        raise _not_found(e) from e


@router.post("", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
def create_board(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
    title: Annotated[str, Form()],
    description: Annotated[str, Form()],
    file: Annotated[UploadFile | None, File()] = None,
) -> BoardResponse:
    """
    Create a board from multipart form data.

    - **title**, **description**: required, non-empty.
    - **file**: optional attachment, stored under a generated name.
    """
    title = _require_text(title, "title", TITLE_MAX_LEN)
    description = _require_text(description, "description")
    upload = _to_upload(file)
    try:
        board = service.create_board(title, description, user.id, upload=upload)
    except AttachmentTooLargeError as e:
        raise _too_large(e) from e
    return BoardResponse.from_board(board)


@router.patch("/{board_id}/status", response_model=BoardResponse)
def update_board_status(
    board_id: int,
    body: BoardStatusUpdate,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
) -> BoardResponse:
    """Set a board's status to PUBLIC or PRIVATE (owner only)."""
    try:
        board = service.update_status(board_id, body.status, owner_id=user.id)
    except BoardNotFoundError as e:
        raise _not_found(e) from e
    return BoardResponse.from_board(board)


@router.patch("/{board_id}", response_model=BoardResponse)
def update_board(
    board_id: int,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
    title: Annotated[str, Form()],
    description: Annotated[str, Form()],
    file: Annotated[UploadFile | None, File()] = None,
) -> BoardResponse:
    """
    Update title and description; a new file replaces the old attachment.

    Without a file the existing attachment is kept.
    """
    title = _require_text(title, "title", TITLE_MAX_LEN)
    description = _require_text(description, "description")
    upload = _to_upload(file)
    try:
        board = service.update_board(board_id, title, description, user.id, upload=upload)
    except BoardNotFoundError as e:
        raise _not_found(e) from e
    except AttachmentTooLargeError as e:
        raise _too_large(e) from e
    return BoardResponse.from_board(board)


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_board(
    board_id: int,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
) -> Response:
    """Delete a board and its stored file (owner only)."""
    try:
        service.delete_board(board_id, user.id)
    except BoardNotFoundError as e:
        raise _not_found(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
