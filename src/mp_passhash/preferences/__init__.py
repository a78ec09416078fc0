"""Preferences – closed set of algorithm variants, bounds, defaults."""
from mp_passhash.preferences.types import (
    Algorithm,
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
from mp_passhash.preferences.bounds import BOUNDS, Bound, check_bounds
from mp_passhash.preferences.defaults import (
    DEFAULT_ARGON2_PREFERENCES,
    DEFAULT_BCRYPT_PREFERENCES,
    DEFAULT_HASH_PREFERENCES,
    DEFAULT_HMAC_PREFERENCES,
    DEFAULT_PBKDF2_PREFERENCES,
    DEFAULT_PLAIN_HASH_PREFERENCES,
    DEFAULT_PLAIN_HASH_SALT_PREFERENCES,
    DEFAULT_SCRYPT_PREFERENCES,
    defaults_for,
    is_resolved,
    resolve,
)
from mp_passhash.preferences.serialization import preferences_from_dict, preferences_to_dict

__all__ = [
    "Algorithm",
    "Argon2Preferences",
    "Argon2Type",
    "Argon2Version",
    "BCryptMinorVersion",
    "BCryptPreferences",
    "BOUNDS",
    "Bound",
    "DEFAULT_ARGON2_PREFERENCES",
    "DEFAULT_BCRYPT_PREFERENCES",
    "DEFAULT_HASH_PREFERENCES",
    "DEFAULT_HMAC_PREFERENCES",
    "DEFAULT_PBKDF2_PREFERENCES",
    "DEFAULT_PLAIN_HASH_PREFERENCES",
    "DEFAULT_PLAIN_HASH_SALT_PREFERENCES",
    "DEFAULT_SCRYPT_PREFERENCES",
    "DigestAlgorithm",
    "HMACPreferences",
    "HashPreferences",
    "PBKDF2Preferences",
    "PlainHashPreferences",
    "PlainHashSaltPreferences",
    "SCryptPreferences",
    "check_bounds",
    "defaults_for",
    "is_resolved",
    "preferences_from_dict",
    "preferences_to_dict",
    "resolve",
]
