"""Verifier – recompute and compare in constant time."""
from __future__ import annotations

import hmac

import bcrypt
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from argon2.low_level import verify_secret

from mp_passhash import codec
from mp_passhash.config import HashingSettings
from mp_passhash.hasher import (
    ARGON2_TYPES,
    BCRYPT_MAX_PASSWORD_BYTES,
    derive,
    enforce_limits,
    to_bytes,
)
from mp_passhash.kernel.errors import InvalidHashFormatError
from mp_passhash.observability import get_logger
from mp_passhash.preferences import Algorithm, HashPreferences

__all__ = ["verify"]

log = get_logger(__name__)


def verify(
    password: str | bytes,
    encoded: str,
    known_preferences: HashPreferences | None = None,
    settings: HashingSettings | None = None,
) -> bool:
    """Return whether *password* produces *encoded*.

    *known_preferences* skips decoding when the caller already holds the
    output of :func:`mp_passhash.codec.decode` for this hash. Salt, digest and
    (for PBKDF2/SCrypt) the digest length are always read from *encoded*
    itself. Argon2 verification uses the cost parameters in *encoded*, so
    those are checked against the caps as well.

    Raises:
        InvalidHashFormatError / UnknownAlgorithmError: *encoded* is malformed,
            or *known_preferences* belong to another algorithm.
        ParameterLimitError: the stored parameters exceed the configured caps.
    """
    hash_codec, segments = codec.resolve_codec(encoded)
    if known_preferences is None:
        preferences = hash_codec.decode(encoded, segments)
    else:
        preferences = known_preferences
        if preferences.algorithm is not hash_codec.algorithm:
            raise InvalidHashFormatError(
                "Known preferences do not match the hash algorithm",
                detail={"hash": hash_codec.algorithm.value, "known": preferences.algorithm.value},
            )
    enforce_limits(preferences, settings)
    if known_preferences is not None and preferences.algorithm is Algorithm.ARGON2:
        # libargon2 runs with the m/t/p written in the string.
        enforce_limits(hash_codec.decode(encoded, segments), settings)

    match preferences.algorithm:
        case Algorithm.BCRYPT:
            verified = _verify_bcrypt(password, encoded)
        case Algorithm.ARGON2:
            verified = _verify_argon2(password, encoded, preferences)
        case _:
            stored = hash_codec.extract(encoded, segments)
            candidate = derive(password, preferences, stored.salt, length=len(stored.digest))
            verified = hmac.compare_digest(candidate, stored.digest)

    log.debug("password_verified", algorithm=preferences.algorithm.value, verified=verified)
    return verified


def _verify_bcrypt(password: str | bytes, encoded: str) -> bool:
    secret = to_bytes(password)[:BCRYPT_MAX_PASSWORD_BYTES]
    try:
        return bcrypt.checkpw(secret, encoded.encode("ascii"))
    except ValueError as exc:
        raise InvalidHashFormatError("Invalid bcrypt hash", cause=exc) from exc


def _verify_argon2(password: str | bytes, encoded: str, preferences: HashPreferences) -> bool:
    try:
        return verify_secret(encoded.encode("ascii"), to_bytes(password), ARGON2_TYPES[preferences.type])
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError, UnicodeEncodeError) as exc:
        raise InvalidHashFormatError("Invalid Argon2 hash", cause=exc) from exc
