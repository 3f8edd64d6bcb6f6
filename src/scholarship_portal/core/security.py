"""
Password hashing utilities (bcrypt).

bcrypt only reads the first 72 bytes of a password. Both hashing and
verification cut the UTF-8 encoding to that length, so longer passwords
are accepted and verify consistently.
"""

import bcrypt

BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plain-text password for storage."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plain-text password against a stored hash.

    Returns False for malformed hashes instead of raising.
    """
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
