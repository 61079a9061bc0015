"""
CLI entrypoint for the orphaned-attachment sweep. Run from cron, e.g.:

  python -m board_api.sweep

Or hourly: 0 * * * * cd /path/to/board-api && .venv/bin/python -m board_api.sweep
"""

import logging
import sys

from board_api.api.deps import get_attachment_storage
from board_api.core.config import get_settings
from board_api.core.database import SessionLocal
from board_api.core.logging_config import configure_logging
from board_api.services.orphan_sweep import sweep_orphaned_attachments

logger = logging.getLogger(__name__)


def main() -> int:
    """Run the sweep: remove stored files that no board references."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        removed = sweep_orphaned_attachments(db, get_attachment_storage(), settings)
        logger.info("Orphan sweep completed: files_removed=%s", removed)
        return 0
    except Exception as e:
        logger.exception("Orphan sweep failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
