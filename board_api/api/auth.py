"""Signup/signin routes and the bearer-token dependency (get_current_user)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from board_api.core.database import get_db
from board_api.core.security import create_access_token, decode_access_token
from board_api.models import User
from board_api.schemas.auth import AuthCredentials, CurrentUser, TokenResponse
from board_api.services import credentials
from board_api.services.exceptions import UsernameAlreadyExistsError

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    body: AuthCredentials,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Register a new user. Returns 409 if the username is taken."""
    try:
        credentials.register(db, body.username, body.password)
    except UsernameAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/signin", response_model=TokenResponse)
def signin(
    body: AuthCredentials,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <accessToken>
    """
    if not credentials.verify(db, body.username, body.password):
        logger.info("Signin failed", extra={"username": body.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="login failed",
        )
    return TokenResponse(access_token=create_access_token(body.username))


def get_current_user(
    bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if bearer is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(bearer.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    username = payload.get("sub")
    if not username or not isinstance(username, str):
        raise _unauthorized("Invalid token payload")
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise _unauthorized("User not found")
    return CurrentUser(id=user.id, username=user.username)
