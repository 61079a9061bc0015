"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class AuthCredentials(BaseModel):
    """Username and password for signup and signin."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful signin."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(
        ...,
        alias="accessToken",
        description="JWT access token; send as Authorization: Bearer <token>",
    )


class CurrentUser(BaseModel):
    """Authenticated user (id, username) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
