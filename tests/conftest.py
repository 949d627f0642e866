"""
Test environment setup. Runs before any inventory import so module-level
settings and the engine point at an in-memory SQLite database instead of
Postgres, and bcrypt uses its minimum cost to keep hashing fast.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "dev"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")

import inventory.core.security as security  # noqa: E402

security.BCRYPT_ROUNDS = 4
