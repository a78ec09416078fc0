"""Hasher – salt generation and the per-algorithm primitives.

Primitives:

* Plain Hash / Plain Hash+Salt: :mod:`hashlib` (``H(password)`` and ``H(password ‖ salt)``)
* HMAC: :mod:`hmac` keyed with the salt
* PBKDF2 / SCrypt: ``cryptography`` KDFs
* BCrypt: ``bcrypt``
* Argon2: ``argon2-cffi`` low-level raw hashing, PHC-encoded by the codec
"""
from __future__ import annotations

import contextlib
import hashlib
import hmac
import os
from typing import Iterator

import argon2.exceptions
import bcrypt
from argon2.low_level import Type, hash_secret_raw
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from mp_passhash import codec
from mp_passhash.codec import DerivedHash
from mp_passhash.config import HashingSettings, get_settings
from mp_passhash.kernel.errors import (
    BaseError,
    InvalidPreferencesError,
    ParameterLimitError,
    PrimitiveFailureError,
)
from mp_passhash.observability import get_logger
from mp_passhash.preferences import (
    Algorithm,
    Argon2Type,
    DigestAlgorithm,
    HashPreferences,
    resolve,
)

__all__ = [
    "ARGON2_TYPES",
    "BCRYPT_MAX_PASSWORD_BYTES",
    "BCRYPT_MIN_ROUNDS",
    "derive",
    "enforce_limits",
    "generate_salt",
    "hash_password",
    "primitive",
    "to_bytes",
]

log = get_logger(__name__)

BCRYPT_MIN_ROUNDS = 4
BCRYPT_MAX_PASSWORD_BYTES = 72

ARGON2_TYPES: dict[Argon2Type, Type] = {
    Argon2Type.D: Type.D,
    Argon2Type.I: Type.I,
    Argon2Type.ID: Type.ID,
}

_KDF_HASHES: dict[DigestAlgorithm, type[hashes.HashAlgorithm]] = {
    DigestAlgorithm.MD5: hashes.MD5,
    DigestAlgorithm.SHA1: hashes.SHA1,
    DigestAlgorithm.SHA256: hashes.SHA256,
    DigestAlgorithm.SHA512: hashes.SHA512,
}

_PRIMITIVE_ERRORS = (
    ValueError,
    TypeError,
    OverflowError,
    MemoryError,
    OSError,
    UnsupportedAlgorithm,
    argon2.exceptions.HashingError,
)


@contextlib.contextmanager
def primitive(name: str) -> Iterator[None]:
    """Re-raise failures of the wrapped primitive as :class:`PrimitiveFailureError`."""
    try:
        yield
    except BaseError:
        raise
    except _PRIMITIVE_ERRORS as exc:
        raise PrimitiveFailureError(name, cause=exc) from exc


def to_bytes(password: str | bytes) -> bytes:
    return password if isinstance(password, bytes) else password.encode("utf-8")


def generate_salt(length: int) -> bytes:
    """Return *length* bytes from the OS CSPRNG."""
    with primitive("rng"):
        return os.urandom(length)


def enforce_limits(preferences: HashPreferences, settings: HashingSettings | None = None) -> None:
    """Reject length and memory parameters before anything is allocated.

    Checked on both the hashing and the verification path, since decoded
    preferences come from untrusted strings.
    """
    settings = settings or get_settings()
    caps = {"salt_length": settings.max_salt_length, "hash_length": settings.max_hash_length}
    for name, limit in caps.items():
        value = getattr(preferences, name, None)
        if value is None:
            continue
        if value < 0:
            raise InvalidPreferencesError(errors=[{"field": name, "message": "must be >= 0"}])
        if value > limit:
            raise ParameterLimitError(name, value, limit)

    if preferences.algorithm is Algorithm.ARGON2 and preferences.memory_cost is not None:
        if preferences.memory_cost > settings.max_memory_kib:
            raise ParameterLimitError("memory_cost", preferences.memory_cost, settings.max_memory_kib)
    elif preferences.algorithm is Algorithm.SCRYPT and None not in (
        preferences.cost, preferences.block_size, preferences.parallelization,
    ):
        working_set = 128 * preferences.block_size * (preferences.cost + preferences.parallelization)
        if working_set > settings.max_memory_kib * 1024:
            raise ParameterLimitError("cost", working_set // 1024, settings.max_memory_kib)


def derive(
    password: str | bytes,
    preferences: HashPreferences,
    salt: bytes | None,
    length: int | None = None,
) -> bytes:
    """Compute the raw digest for a resolved, non-BCrypt variant.

    *length* overrides the resolved ``hash_length`` for PBKDF2, SCrypt and
    Argon2; verification passes the stored digest's length.
    """
    secret = to_bytes(password)
    match preferences.algorithm:
        case Algorithm.PLAIN_HASH:
            with primitive("digest"):
                return hashlib.new(preferences.digest_algorithm.digest_name, secret).digest()
        case Algorithm.PLAIN_HASH_SALT:
            with primitive("digest"):
                h = hashlib.new(preferences.digest_algorithm.digest_name, secret)
                h.update(salt)
                return h.digest()
        case Algorithm.HMAC:
            with primitive("hmac"):
                return hmac.new(salt, secret, preferences.digest_algorithm.digest_name).digest()
        case Algorithm.PBKDF2:
            with primitive("pbkdf2"):
                kdf = PBKDF2HMAC(
                    algorithm=_KDF_HASHES[preferences.digest_algorithm](),
                    length=preferences.hash_length if length is None else length,
                    salt=salt,
                    iterations=preferences.iterations,
                )
                return kdf.derive(secret)
        case Algorithm.SCRYPT:
            with primitive("scrypt"):
                kdf = Scrypt(
                    salt=salt,
                    length=preferences.hash_length if length is None else length,
                    n=preferences.cost,
                    r=preferences.block_size,
                    p=preferences.parallelization,
                )
                return kdf.derive(secret)
        case Algorithm.ARGON2:
            with primitive("argon2"):
                return hash_secret_raw(
                    secret=secret,
                    salt=salt,
                    time_cost=preferences.time_cost,
                    memory_cost=preferences.memory_cost,
                    parallelism=preferences.parallelism,
                    hash_len=preferences.hash_length if length is None else length,
                    type=ARGON2_TYPES[preferences.type],
                    version=preferences.version.number,
                )
        case _:
            raise TypeError(f"{preferences.algorithm.value} has no raw digest primitive")


def _bcrypt_hash(secret: bytes, preferences: HashPreferences) -> bytes:
    # Same floor and input truncation the native bcrypt salt generator applies.
    rounds = max(preferences.rounds, BCRYPT_MIN_ROUNDS)
    with primitive("bcrypt"):
        salt = bcrypt.gensalt(rounds=rounds, prefix=f"2{preferences.minor_version.value}".encode())
        return bcrypt.hashpw(secret[:BCRYPT_MAX_PASSWORD_BYTES], salt)


def hash_password(
    password: str | bytes,
    preferences: HashPreferences,
    settings: HashingSettings | None = None,
) -> str:
    """Resolve *preferences*, hash *password* and return the encoded string."""
    resolved = resolve(preferences)
    enforce_limits(resolved, settings)
    match resolved.algorithm:
        case Algorithm.BCRYPT:
            derived = DerivedHash(digest=_bcrypt_hash(to_bytes(password), resolved))
        case Algorithm.PLAIN_HASH:
            derived = DerivedHash(digest=derive(password, resolved, None))
        case _:
            salt = generate_salt(resolved.salt_length)
            derived = DerivedHash(digest=derive(password, resolved, salt), salt=salt)
    log.debug("password_hashed", algorithm=resolved.algorithm.value)
    return codec.encode(resolved, derived)
