"""Preferences – per-variant default tables and the defaults merge."""
from __future__ import annotations

import dataclasses

from mp_passhash.preferences.types import (
    Argon2Preferences,
    Argon2Type,
    Argon2Version,
    BCryptMinorVersion,
    BCryptPreferences,
    DigestAlgorithm,
    HashPreferences,
    HMACPreferences,
    PBKDF2Preferences,
    PlainHashPreferences,
    PlainHashSaltPreferences,
    SCryptPreferences,
)

__all__ = [
    "DEFAULT_ARGON2_PREFERENCES",
    "DEFAULT_BCRYPT_PREFERENCES",
    "DEFAULT_DIGEST_ALGORITHM",
    "DEFAULT_HASH_PREFERENCES",
    "DEFAULT_HMAC_PREFERENCES",
    "DEFAULT_PBKDF2_PREFERENCES",
    "DEFAULT_PLAIN_HASH_PREFERENCES",
    "DEFAULT_PLAIN_HASH_SALT_PREFERENCES",
    "DEFAULT_SALT_LENGTH",
    "DEFAULT_SCRYPT_PREFERENCES",
    "defaults_for",
    "is_resolved",
    "resolve",
]

DEFAULT_DIGEST_ALGORITHM = DigestAlgorithm.SHA512
DEFAULT_SALT_LENGTH = 16

DEFAULT_PLAIN_HASH_PREFERENCES = PlainHashPreferences(
    digest_algorithm=DEFAULT_DIGEST_ALGORITHM,
)

DEFAULT_PLAIN_HASH_SALT_PREFERENCES = PlainHashSaltPreferences(
    digest_algorithm=DEFAULT_DIGEST_ALGORITHM,
    salt_length=DEFAULT_SALT_LENGTH,
)

DEFAULT_HMAC_PREFERENCES = HMACPreferences(
    digest_algorithm=DEFAULT_DIGEST_ALGORITHM,
    salt_length=DEFAULT_SALT_LENGTH,
)

# hash_length is left open: it follows the digest size of the resolved digest.
DEFAULT_PBKDF2_PREFERENCES = PBKDF2Preferences(
    digest_algorithm=DEFAULT_DIGEST_ALGORITHM,
    salt_length=DEFAULT_SALT_LENGTH,
    iterations=1,
)

DEFAULT_BCRYPT_PREFERENCES = BCryptPreferences(
    minor_version=BCryptMinorVersion.B,
    rounds=10,
)

DEFAULT_SCRYPT_PREFERENCES = SCryptPreferences(
    hash_length=32,
    salt_length=DEFAULT_SALT_LENGTH,
    cost=16384,
    block_size=8,
    parallelization=1,
)

# Same values argon2-cffi's PasswordHasher uses when constructed without arguments.
DEFAULT_ARGON2_PREFERENCES = Argon2Preferences(
    type=Argon2Type.ID,
    version=Argon2Version.V1_3,
    hash_length=32,
    salt_length=DEFAULT_SALT_LENGTH,
    memory_cost=65536,
    time_cost=3,
    parallelism=4,
)

DEFAULT_HASH_PREFERENCES: HashPreferences = Argon2Preferences()

_DEFAULTS: dict[type, HashPreferences] = {
    PlainHashPreferences: DEFAULT_PLAIN_HASH_PREFERENCES,
    PlainHashSaltPreferences: DEFAULT_PLAIN_HASH_SALT_PREFERENCES,
    HMACPreferences: DEFAULT_HMAC_PREFERENCES,
    PBKDF2Preferences: DEFAULT_PBKDF2_PREFERENCES,
    BCryptPreferences: DEFAULT_BCRYPT_PREFERENCES,
    SCryptPreferences: DEFAULT_SCRYPT_PREFERENCES,
    Argon2Preferences: DEFAULT_ARGON2_PREFERENCES,
}


def defaults_for(preferences: HashPreferences) -> HashPreferences:
    """Return the default record of *preferences*' variant."""
    try:
        return _DEFAULTS[type(preferences)]
    except KeyError:
        raise TypeError(f"Not a hash preferences variant: {type(preferences).__name__}") from None


def resolve(preferences: HashPreferences) -> HashPreferences:
    """Merge the caller's fields over the variant defaults.

    Shallow and field-by-field: a ``None`` field takes the default, any other
    value is kept as given. Values are not bound-checked here.
    """
    defaults = defaults_for(preferences)
    merged = {
        field.name: (
            getattr(defaults, field.name)
            if getattr(preferences, field.name) is None
            else getattr(preferences, field.name)
        )
        for field in dataclasses.fields(preferences)
    }
    if isinstance(preferences, PBKDF2Preferences) and merged["hash_length"] is None:
        merged["hash_length"] = merged["digest_algorithm"].digest_size
    return type(preferences)(**merged)


def is_resolved(preferences: HashPreferences) -> bool:
    return all(getattr(preferences, f.name) is not None for f in dataclasses.fields(preferences))
