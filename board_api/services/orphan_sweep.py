"""Orphan sweep: delete stored attachment files that no board references."""

import logging
import time
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from board_api.models import Board
from board_api.services.attachments import AttachmentStorage

if TYPE_CHECKING:
    from board_api.core.config import Settings

logger = logging.getLogger(__name__)


def sweep_orphaned_attachments(
    session: Session,
    storage: AttachmentStorage,
    settings: "Settings",
) -> int:
    """
    Remove files in storage that no board row points at.

    Files younger than ORPHAN_SWEEP_GRACE_MINUTES are skipped so uploads whose
    board row is not committed yet survive. Returns the number of files removed.
    Idempotent: safe to run repeatedly.
    """
    if not settings.ORPHAN_SWEEP_ENABLED:
        logger.info("Orphan sweep is disabled (ORPHAN_SWEEP_ENABLED=false); skipping.")
        return 0

    referenced = {
        path
        for (path,) in session.query(Board.file_path).filter(Board.file_path.isnot(None))
    }
    cutoff = time.time() - settings.ORPHAN_SWEEP_GRACE_MINUTES * 60

    removed = 0
    for entry in storage.iter_stored():
        if entry.name in referenced:
            continue
        if entry.stat().st_mtime > cutoff:
            continue
        if storage.remove(entry.name):
            removed += 1

    if removed > 0:
        logger.info(
            "Orphan sweep run: referenced=%s, files_removed=%s",
            len(referenced),
            removed,
        )
    return removed
