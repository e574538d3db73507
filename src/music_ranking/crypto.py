"""Cryptographic utilities for passwords and access tokens."""

import base64
import hashlib
import hmac
import os
import secrets

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from music_ranking.config import get_settings

# Scrypt cost parameters (n=2**14, r=8, p=1)
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_LENGTH = 32


def _scrypt(salt: bytes) -> Scrypt:
    return Scrypt(salt=salt, length=SCRYPT_LENGTH, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P)


def hash_password(password: str) -> str:
    """Hash a password as ``scrypt$<salt>$<key>`` (urlsafe base64 parts)."""
    salt = os.urandom(16)
    key = _scrypt(salt).derive(password.encode())
    return "$".join(
        [
            "scrypt",
            base64.urlsafe_b64encode(salt).decode(),
            base64.urlsafe_b64encode(key).decode(),
        ]
    )


def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a stored hash in constant time."""
    try:
        scheme, salt_b64, key_b64 = hashed.split("$")
    except ValueError:
        return False
    if scheme != "scrypt":
        return False

    salt = base64.urlsafe_b64decode(salt_b64)
    key = base64.urlsafe_b64decode(key_b64)
    try:
        _scrypt(salt).verify(password.encode(), key)
    except InvalidKey:
        return False
    return True


def generate_token_secret() -> str:
    """Generate the secret part of an access token (64 hex chars)."""
    return secrets.token_hex(32)


def hash_token(secret: str) -> str:
    """Keyed SHA256 of a token secret, as stored in access_tokens.token_hash."""
    settings = get_settings()
    return hmac.new(
        settings.SECRET_KEY.encode(),
        secret.encode(),
        hashlib.sha256,
    ).hexdigest()
