"""Shared fixtures: one cheap preferences object per algorithm."""

from __future__ import annotations

import pytest

from mp_passhash.config import HashingSettings
from mp_passhash.preferences import (
    Argon2Preferences,
    Argon2Type,
    Argon2Version,
    BCryptMinorVersion,
    BCryptPreferences,
    DigestAlgorithm,
    HMACPreferences,
    PBKDF2Preferences,
    PlainHashPreferences,
    PlainHashSaltPreferences,
    SCryptPreferences,
)

FAST_PREFERENCES = {
    "plain": PlainHashPreferences(digest_algorithm=DigestAlgorithm.SHA256),
    "plain_salt": PlainHashSaltPreferences(digest_algorithm=DigestAlgorithm.SHA1, salt_length=8),
    "hmac": HMACPreferences(digest_algorithm=DigestAlgorithm.MD5, salt_length=24),
    "pbkdf2": PBKDF2Preferences(
        digest_algorithm=DigestAlgorithm.SHA256, salt_length=16, iterations=1000, hash_length=48,
    ),
    "bcrypt": BCryptPreferences(minor_version=BCryptMinorVersion.A, rounds=4),
    "scrypt": SCryptPreferences(hash_length=24, salt_length=12, cost=1024, block_size=8, parallelization=1),
    "argon2": Argon2Preferences(
        type=Argon2Type.D,
        version=Argon2Version.V1_3,
        hash_length=16,
        salt_length=8,
        memory_cost=2048,
        time_cost=2,
        parallelism=1,
    ),
}

SALTED = ("plain_salt", "hmac", "pbkdf2", "bcrypt", "scrypt", "argon2")


@pytest.fixture(params=sorted(FAST_PREFERENCES), ids=sorted(FAST_PREFERENCES))
def fast_preferences(request: pytest.FixtureRequest):
    return FAST_PREFERENCES[request.param]


@pytest.fixture
def argon2_fast() -> Argon2Preferences:
    return FAST_PREFERENCES["argon2"]


@pytest.fixture
def tight_settings() -> HashingSettings:
    return HashingSettings(max_salt_length=32, max_hash_length=64, max_memory_kib=4096)


@pytest.fixture
def preferences_table() -> dict:
    return dict(FAST_PREFERENCES)


@pytest.fixture(params=SALTED, ids=SALTED)
def salted_preferences(request: pytest.FixtureRequest):
    return FAST_PREFERENCES[request.param]
