"""Shared helpers: isolated SQLite databases and temporary attachment storage."""

import io
import tempfile
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from board_api.core.security import hash_password
from board_api.models import Base, User
from board_api.services.attachments import AttachmentStorage, FileUpload


def make_session_factory() -> tuple[Engine, sessionmaker]:
    """Fresh in-memory SQLite with all tables; one shared connection across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_storage(max_bytes: int | None = None) -> tuple[tempfile.TemporaryDirectory, AttachmentStorage]:
    """Temporary upload directory and storage rooted in it. Caller cleans up the directory."""
    tmp = tempfile.TemporaryDirectory(prefix="board-api-test-")
    return tmp, AttachmentStorage(Path(tmp.name), max_bytes=max_bytes)


def add_user(db: Session, username: str, password: str = "pass1234") -> User:
    user = User(username=username, password_hash=hash_password(password))
    db.add(user)
    db.commit()
    return user


def upload(name: str, content: bytes) -> FileUpload:
    return FileUpload(filename=name, stream=io.BytesIO(content))


def stored_names(storage: AttachmentStorage) -> list[str]:
    return [p.name for p in storage.iter_stored()]
