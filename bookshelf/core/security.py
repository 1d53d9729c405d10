"""Security helpers (hashing and verification)."""

from __future__ import annotations

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()
_PREFIX = "argon2$"


class HashDerivationError(Exception):
    """Raised when a password hash could not be derived."""


def hash_password(password: str) -> str:
    """Create an Argon2id hash (random salt per call) with a prefix for detection."""
    try:
        hashed = _ph.hash(password)
    except (argon_exc.HashingError, TypeError) as exc:
        raise HashDerivationError("Failed to derive password hash") from exc
    if not hashed:
        raise HashDerivationError("Failed to derive password hash")
    return f"{_PREFIX}{hashed}"


def verify_password(password: str, stored_hash: str | None) -> bool:
    stored = stored_hash or ""
    if not stored.startswith(_PREFIX):
        return False
    hashed = stored[len(_PREFIX) :]
    try:
        return _ph.verify(hashed, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False
