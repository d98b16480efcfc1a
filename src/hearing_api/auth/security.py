"""Password hashing utilities for the credential store."""

import hashlib
import hmac
import secrets
from typing import Optional

from ..config import get_config


def hash_password(
    password: str,
    salt: Optional[bytes] = None,
    iterations: Optional[int] = None,
) -> tuple[str, str]:
    """
    Hash a password using PBKDF2-HMAC-SHA256.

    Args:
        password: The plain text password to hash
        salt: Optional salt bytes. If None, generates a secure random salt.
        iterations: PBKDF2 iterations. Defaults to the configured value.

    Returns:
        tuple[str, str]: (salt_hex, hash_hex) for storage
    """
    if salt is None:
        salt = secrets.token_bytes(32)  # 256-bit salt

    if iterations is None:
        iterations = get_config().app.password_hash_iterations

    password_hash = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt, iterations
    )

    return salt.hex(), password_hash.hex()


def verify_password(
    password: str,
    salt_hex: str,
    hash_hex: str,
    iterations: Optional[int] = None,
) -> bool:
    """
    Verify a password against stored salt and hash.

    Args:
        password: The plain text password to verify
        salt_hex: The hex-encoded salt
        hash_hex: The hex-encoded hash
        iterations: PBKDF2 iterations used when hashing

    Returns:
        bool: True if password is valid, False otherwise
    """
    if not password or not salt_hex or not hash_hex:
        return False

    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (ValueError, TypeError):
        # Invalid hex encoding
        return False

    if iterations is None:
        iterations = get_config().app.password_hash_iterations

    computed_hash = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt, iterations
    )

    # Use constant-time comparison to prevent timing attacks
    return hmac.compare_digest(computed_hash, stored_hash)
