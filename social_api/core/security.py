"""Security helpers (hashing and verification)."""

from __future__ import annotations

from argon2 import PasswordHasher, exceptions as argon_exc

from social_api.core.errors import CredentialError

_ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Create a salted Argon2id hash."""
    return _ph.hash(password)


def verify_password(password: str, stored_hash: str | None) -> bool:
    """
    Check a plaintext password against a stored hash.

    A mismatch returns False. A hash that cannot be parsed raises
    CredentialError: it is a data problem, not a failed login.
    """
    if not stored_hash:
        raise CredentialError("Stored credential is missing")
    try:
        return _ph.verify(stored_hash, password)
    except argon_exc.VerifyMismatchError:
        return False
    except (argon_exc.InvalidHashError, argon_exc.VerificationError) as exc:
        raise CredentialError("Stored credential is malformed") from exc


def password_needs_rehash(stored_hash: str) -> bool:
    try:
        return _ph.check_needs_rehash(stored_hash)
    except argon_exc.InvalidHashError as exc:
        raise CredentialError("Stored credential is malformed") from exc
