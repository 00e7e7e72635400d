"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a
fixed-length input so long passwords are not silently truncated.
"""

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Return True if plain_password matches password_hash; False on malformed hashes."""
    try:
        return bool(bcrypt.checkpw(_prehash(plain_password), password_hash.encode("utf-8")))
    except (ValueError, TypeError):
        return False


def hash_password(password: str) -> str:
    """Return the bcrypt hash (as text) of the SHA-256 pre-hashed password."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")
