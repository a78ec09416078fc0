"""Facade – the operations external collaborators call.

All functions are stateless and safe to call from many threads at once. They
are CPU-bound (and memory-bound for SCrypt/Argon2); from asyncio code, go
through :class:`mp_passhash.scheduling.HashingPool` instead of calling them
on the event loop.

Usage::

    encoded = hash_password("s3cret", PBKDF2Preferences(iterations=100_000))
    ok, upgraded = verify_and_rehash("s3cret", encoded, Argon2Preferences())
    if ok and upgraded:
        store(upgraded)
"""
from __future__ import annotations

from mp_passhash import codec, hasher, rehash, verifier
from mp_passhash.config import HashingSettings
from mp_passhash.kernel.ports import PasswordHasher
from mp_passhash.preferences import DEFAULT_HASH_PREFERENCES, HashPreferences

__all__ = [
    "DEFAULT_PREFERENCES",
    "MultiAlgorithmPasswordHasher",
    "decode_preferences",
    "hash_password",
    "needs_rehash",
    "verify_and_rehash",
    "verify_password",
]

DEFAULT_PREFERENCES: HashPreferences = DEFAULT_HASH_PREFERENCES


def hash_password(
    password: str,
    preferences: HashPreferences = DEFAULT_PREFERENCES,
    *,
    settings: HashingSettings | None = None,
) -> str:
    """Hash *password* with *preferences* merged over its variant defaults."""
    return hasher.hash_password(password, preferences, settings)


def verify_password(
    password: str,
    encoded: str,
    known_preferences: HashPreferences | None = None,
    *,
    settings: HashingSettings | None = None,
) -> bool:
    return verifier.verify(password, encoded, known_preferences, settings)


def needs_rehash(
    encoded: str,
    desired: HashPreferences = DEFAULT_PREFERENCES,
    known_preferences: HashPreferences | None = None,
) -> bool:
    return rehash.needs_rehash(encoded, desired, known_preferences)


def decode_preferences(encoded: str) -> HashPreferences:
    """Recover the resolved preferences embedded in *encoded*.

    Raises:
        InvalidHashFormatError: missing ``$`` or fewer than two segments.
        UnknownAlgorithmError: unrecognised identifier.
        InvalidDigestAlgorithmError: ``hmac-``/``pbkdf2-`` with an unknown digest.
    """
    return codec.decode(encoded)


def verify_and_rehash(
    password: str,
    encoded: str,
    desired: HashPreferences = DEFAULT_PREFERENCES,
    *,
    settings: HashingSettings | None = None,
) -> tuple[bool, str | None]:
    """Verify, then re-hash under *desired* if the stored hash is outdated.

    Returns ``(verified, new_hash)``; ``new_hash`` is ``None`` unless the
    password verified and a rehash was needed. The hash is decoded once and
    the result reused for both checks.
    """
    stored = codec.decode(encoded)
    if not verifier.verify(password, encoded, stored, settings):
        return False, None
    if rehash.needs_rehash(encoded, desired, stored):
        return True, hasher.hash_password(password, desired, settings)
    return True, None


class MultiAlgorithmPasswordHasher(PasswordHasher):
    """:class:`PasswordHasher` bound to one preferences object."""

    def __init__(
        self,
        preferences: HashPreferences = DEFAULT_PREFERENCES,
        settings: HashingSettings | None = None,
    ) -> None:
        self.preferences = preferences
        self._settings = settings

    def hash(self, password: str) -> str:
        return hash_password(password, self.preferences, settings=self._settings)

    def verify(self, password: str, hashed: str) -> bool:
        return verify_password(password, hashed, settings=self._settings)

    def needs_rehash(self, hashed: str) -> bool:
        return needs_rehash(hashed, self.preferences)
