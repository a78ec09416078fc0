"""Preferences – algorithm tags, enumerations and the per-variant records."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import ClassVar, Union

__all__ = [
    "Algorithm",
    "Argon2Preferences",
    "Argon2Type",
    "Argon2Version",
    "BCryptMinorVersion",
    "BCryptPreferences",
    "DigestAlgorithm",
    "HMACPreferences",
    "HashPreferences",
    "PBKDF2Preferences",
    "PlainHashPreferences",
    "PlainHashSaltPreferences",
    "SCryptPreferences",
]


class Algorithm(str, Enum):
    """Discriminator of :data:`HashPreferences`; values are the JSON tags."""

    PLAIN_HASH = "Plain Hash"
    PLAIN_HASH_SALT = "Plain Hash+Salt"
    HMAC = "HMAC"
    PBKDF2 = "PBKDF2"
    BCRYPT = "BCrypt"
    SCRYPT = "SCrypt"
    ARGON2 = "Argon2"


_DIGEST_IDENTIFIERS = {"MD5": "1", "SHA1": "sha1", "SHA256": "5", "SHA512": "6"}
_DIGEST_SIZES = {"MD5": 16, "SHA1": 20, "SHA256": 32, "SHA512": 64}


class DigestAlgorithm(str, Enum):
    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def identifier(self) -> str:
        """Short code used by the Plain Hash variants (``$5$...``)."""
        return _DIGEST_IDENTIFIERS[self.value]

    @property
    def digest_name(self) -> str:
        """Lowercase name used by ``hmac-``/``pbkdf2-`` identifiers and hashlib."""
        return self.value.lower()

    @property
    def digest_size(self) -> int:
        return _DIGEST_SIZES[self.value]

    @classmethod
    def from_identifier(cls, identifier: str) -> "DigestAlgorithm | None":
        for member in cls:
            if member.identifier == identifier:
                return member
        return None

    @classmethod
    def from_name(cls, name: str) -> "DigestAlgorithm | None":
        """Case-insensitive lookup by algorithm name."""
        try:
            return cls(name.upper())
        except ValueError:
            return None


class BCryptMinorVersion(str, Enum):
    A = "a"
    B = "b"


class Argon2Type(str, Enum):
    D = "d"
    ID = "id"
    I = "i"  # noqa: E741

    @property
    def identifier(self) -> str:
        return f"argon2{self.value}"


_ARGON2_VERSION_NUMBERS = {"1.0": 0x10, "1.3": 0x13}


class Argon2Version(str, Enum):
    V1_0 = "1.0"
    V1_3 = "1.3"

    @property
    def number(self) -> int:
        """Numeric version as written in the PHC ``v=`` field."""
        return _ARGON2_VERSION_NUMBERS[self.value]

    @classmethod
    def from_number(cls, number: int) -> "Argon2Version | None":
        for member in cls:
            if member.number == number:
                return member
        return None


# ---------------------------------------------------------------------------
# Variant records. ``None`` means "use the variant default".
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class PlainHashPreferences:
    algorithm: ClassVar[Algorithm] = Algorithm.PLAIN_HASH

    digest_algorithm: DigestAlgorithm | None = None


@dataclasses.dataclass(frozen=True)
class PlainHashSaltPreferences:
    algorithm: ClassVar[Algorithm] = Algorithm.PLAIN_HASH_SALT

    digest_algorithm: DigestAlgorithm | None = None
    salt_length: int | None = None


@dataclasses.dataclass(frozen=True)
class HMACPreferences:
    algorithm: ClassVar[Algorithm] = Algorithm.HMAC

    digest_algorithm: DigestAlgorithm | None = None
    salt_length: int | None = None


@dataclasses.dataclass(frozen=True)
class PBKDF2Preferences:
    algorithm: ClassVar[Algorithm] = Algorithm.PBKDF2

    digest_algorithm: DigestAlgorithm | None = None
    salt_length: int | None = None
    iterations: int | None = None
    hash_length: int | None = None


@dataclasses.dataclass(frozen=True)
class BCryptPreferences:
    algorithm: ClassVar[Algorithm] = Algorithm.BCRYPT

    minor_version: BCryptMinorVersion | None = None
    rounds: int | None = None


@dataclasses.dataclass(frozen=True)
class SCryptPreferences:
    algorithm: ClassVar[Algorithm] = Algorithm.SCRYPT

    hash_length: int | None = None
    salt_length: int | None = None
    cost: int | None = None
    block_size: int | None = None
    parallelization: int | None = None


@dataclasses.dataclass(frozen=True)
class Argon2Preferences:
    algorithm: ClassVar[Algorithm] = Algorithm.ARGON2

    type: Argon2Type | None = None
    version: Argon2Version | None = None
    hash_length: int | None = None
    salt_length: int | None = None
    memory_cost: int | None = None
    time_cost: int | None = None
    parallelism: int | None = None


HashPreferences = Union[
    PlainHashPreferences,
    PlainHashSaltPreferences,
    HMACPreferences,
    PBKDF2Preferences,
    BCryptPreferences,
    SCryptPreferences,
    Argon2Preferences,
]
