"""HTTP routes."""

from fastapi import APIRouter

from board_api.api import auth, boards, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(boards.router, prefix="/boards", tags=["boards"])
