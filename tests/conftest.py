"""Test environment: in-memory SQLite, fast bcrypt, fixed JWT secret. Loaded before any app import."""

import os
import tempfile

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="board-api-uploads-")
