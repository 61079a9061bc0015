"""
Local-disk storage for board attachments.

Files live in one flat directory under generated names; the display name the
user uploaded is kept separately on the board row and never touches the
filesystem.
"""

import logging
import os
import re
import secrets
import time
import unicodedata
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from board_api.services.exceptions import AttachmentNotFoundError, AttachmentTooLargeError

logger = logging.getLogger(__name__)

COPY_CHUNK_BYTES = 1024 * 1024
DEFAULT_DISPLAY_NAME = "file"
_SAFE_EXTENSION = re.compile(r"^[A-Za-z0-9]{1,16}$")


@dataclass(frozen=True)
class FileUpload:
    """An incoming file: the client-supplied name and a readable binary stream."""

    filename: str | None
    stream: BinaryIO


@dataclass(frozen=True)
class StoredAttachment:
    """Descriptor of bytes written to storage."""

    file_name: str
    file_path: str
    file_size: int


def normalize_display_name(raw: str | None) -> str:
    """Reduce a client-supplied filename to a safe display name (last segment, NFC, printable)."""
    name = (raw or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = unicodedata.normalize("NFC", name)
    name = "".join(ch for ch in name if ch.isprintable()).strip()
    return name or DEFAULT_DISPLAY_NAME


def generate_storage_name(display_name: str) -> str:
    """
    Build a collision-resistant storage filename: <epoch millis>-<random hex>[.<ext>].

    The extension is carried over only when it is short and ASCII alphanumeric.
    """
    unique = f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"
    ext = os.path.splitext(display_name)[1][1:]
    if _SAFE_EXTENSION.match(ext):
        return f"{unique}.{ext}"
    return unique


class AttachmentStorage:
    """Saves, resolves and removes attachment bytes under a root directory."""

    def __init__(self, root: str | Path, max_bytes: int | None = None) -> None:
        self.root = Path(root)
        self.max_bytes = max_bytes

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def save(self, upload: FileUpload) -> StoredAttachment:
        """
        Stream the upload to a new file and return its descriptor.

        Raises AttachmentTooLargeError past max_bytes; no partial file is left behind.
        """
        self.ensure_root()
        display_name = normalize_display_name(upload.filename)
        storage_name = generate_storage_name(display_name)
        target = self.root / storage_name
        size = 0
        try:
            with open(target, "xb") as out:
                while True:
                    chunk = upload.stream.read(COPY_CHUNK_BYTES)
                    if not chunk:
                        break
                    size += len(chunk)
                    if self.max_bytes is not None and size > self.max_bytes:
                        raise AttachmentTooLargeError(self.max_bytes)
                    out.write(chunk)
        except Exception:
            target.unlink(missing_ok=True)
            raise
        logger.info(
            "Attachment stored",
            extra={"file_name": display_name, "storage_path": storage_name, "file_size": size},
        )
        return StoredAttachment(file_name=display_name, file_path=storage_name, file_size=size)

    def path_for(self, storage_path: str) -> Path:
        """Resolve a storage key to a path inside root. Keys escaping root are rejected."""
        root = self.root.resolve()
        candidate = (root / storage_path).resolve()
        if candidate.parent != root:
            raise AttachmentNotFoundError("Stored file not found.")
        return candidate

    def open_path(self, storage_path: str) -> Path:
        """Like path_for, but the file must exist."""
        path = self.path_for(storage_path)
        if not path.is_file():
            logger.warning("Attachment bytes missing", extra={"storage_path": storage_path})
            raise AttachmentNotFoundError("Stored file not found.")
        return path

    def remove(self, storage_path: str) -> bool:
        """
        Delete stored bytes. Returns False if they were already gone.

        Any OSError other than FileNotFoundError propagates.
        """
        path = self.path_for(storage_path)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.info("Attachment already absent", extra={"storage_path": storage_path})
            return False
        logger.info("Attachment removed", extra={"storage_path": storage_path})
        return True

    def iter_stored(self) -> Iterator[Path]:
        """Yield every regular file currently in storage."""
        if not self.root.is_dir():
            return
        for entry in sorted(self.root.iterdir()):
            if entry.is_file():
                yield entry
