"""Cryptographic helpers — authentication token generation and hashing."""

from __future__ import annotations

import hashlib
import hmac
import secrets
import string

TOKEN_ALPHABET = string.ascii_letters + string.digits

_SALT_BYTES = 16


def sha256(data: bytes) -> bytes:
    """Single SHA-256 hash."""
    return hashlib.sha256(data).digest()


def generate_token(length: int) -> str:
    """Random alphanumeric bearer token drawn from the OS CSPRNG."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def hash_token(token: str, *, salt: bytes | None = None) -> str:
    """Return ``"{salt_hex}${digest_hex}"`` for storage.

    The digest is SHA-256 over salt + token. Tokens are high-entropy random
    strings, so a single salted hash is sufficient.
    """
    if salt is None:
        salt = secrets.token_bytes(_SALT_BYTES)
    digest = sha256(salt + token.encode("utf-8"))
    return f"{salt.hex()}${digest.hex()}"


def verify_token(token: str, stored: str) -> bool:
    """Constant-time check of *token* against a value from :func:`hash_token`."""
    salt_hex, sep, _ = stored.partition("$")
    if not sep:
        return False
    try:
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    return hmac.compare_digest(hash_token(token, salt=salt), stored)
