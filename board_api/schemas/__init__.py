"""Pydantic request/response schemas."""

from board_api.schemas.auth import AuthCredentials, CurrentUser, TokenResponse
from board_api.schemas.board import BoardOwner, BoardResponse, BoardStatusUpdate
from board_api.schemas.health import HealthResponse

__all__ = [
    "AuthCredentials",
    "BoardOwner",
    "BoardResponse",
    "BoardStatusUpdate",
    "CurrentUser",
    "HealthResponse",
    "TokenResponse",
]
