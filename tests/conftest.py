"""Test environment: in-memory SQLite, a fixed JWT secret and cheap bcrypt rounds.

Set before any app module is imported so the cached settings pick them up.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "dev"
os.environ["LOG_LEVEL"] = "WARNING"
