"""
Password hashing and verification.

bcrypt only looks at the first 72 bytes of its input; longer passwords
are cut to that prefix on both the hash and the verify side so that any
non-empty password can register and log in.
"""

from __future__ import annotations

import bcrypt

BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """Salted bcrypt hash at work factor ``rounds``."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
