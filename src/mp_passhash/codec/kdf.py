"""Codec – SCrypt and Argon2, both in PHC string format.

SCrypt::

    $s2$n=<cost>,r=<blockSize>,p=<parallelization>$<salt>$<hash>

Argon2 (identical to libargon2's encoded form)::

    $argon2<type>$v=<16|19>$m=<memoryCost>,t=<timeCost>,p=<parallelism>$<salt>$<hash>

Salt and hash lengths are not stored as parameters. SCrypt decoding derives
them from the decoded byte strings; Argon2 decoding reads them, with every
other parameter, through argon2-cffi's ``extract_parameters``.
"""
from __future__ import annotations

import re
from typing import Sequence

from argon2 import extract_parameters
from argon2.exceptions import InvalidHashError

from mp_passhash.codec import phc
from mp_passhash.codec.base import DerivedHash, HashCodec
from mp_passhash.kernel.errors import InvalidHashFormatError
from mp_passhash.preferences import (
    Algorithm,
    Argon2Preferences,
    Argon2Type,
    Argon2Version,
    HashPreferences,
    SCryptPreferences,
)

__all__ = ["Argon2Codec", "SCRYPT_ID", "SCryptCodec"]

SCRYPT_ID = "s2"
_ARGON2_ID_RE = re.compile(r"^argon2(d|i|id)$")


def _salt_and_hash(parsed: phc.PHCString) -> DerivedHash:
    if parsed.salt is None or parsed.hash is None:
        raise InvalidHashFormatError("PHC string is missing its salt or hash")
    return DerivedHash(digest=parsed.hash, salt=parsed.salt)


class SCryptCodec(HashCodec):
    algorithm = Algorithm.SCRYPT

    def matches(self, segments: Sequence[str]) -> bool:
        return segments[0] == SCRYPT_ID

    def encode(self, preferences: HashPreferences, derived: DerivedHash) -> str:
        return phc.serialize(
            phc.PHCString(
                id=SCRYPT_ID,
                params={
                    "n": str(preferences.cost),
                    "r": str(preferences.block_size),
                    "p": str(preferences.parallelization),
                },
                salt=derived.salt or b"",
                hash=derived.digest,
            )
        )

    def decode(self, encoded: str, segments: Sequence[str]) -> SCryptPreferences:
        parsed = phc.deserialize(encoded)
        derived = _salt_and_hash(parsed)
        return SCryptPreferences(
            hash_length=len(derived.digest),
            salt_length=len(derived.salt),
            cost=phc.int_param(parsed, "n"),
            block_size=phc.int_param(parsed, "r"),
            parallelization=phc.int_param(parsed, "p"),
        )

    def extract(self, encoded: str, segments: Sequence[str]) -> DerivedHash:
        return _salt_and_hash(phc.deserialize(encoded))


class Argon2Codec(HashCodec):
    algorithm = Algorithm.ARGON2

    def matches(self, segments: Sequence[str]) -> bool:
        return bool(_ARGON2_ID_RE.match(segments[0]))

    def encode(self, preferences: HashPreferences, derived: DerivedHash) -> str:
        return phc.serialize(
            phc.PHCString(
                id=preferences.type.identifier,
                version=preferences.version.number,
                params={
                    "m": str(preferences.memory_cost),
                    "t": str(preferences.time_cost),
                    "p": str(preferences.parallelism),
                },
                salt=derived.salt or b"",
                hash=derived.digest,
            )
        )

    def decode(self, encoded: str, segments: Sequence[str]) -> Argon2Preferences:
        try:
            parameters = extract_parameters(encoded)
        except InvalidHashError as exc:
            raise InvalidHashFormatError("Invalid Argon2 hash", cause=exc) from exc
        version = Argon2Version.from_number(parameters.version)
        if version is None:
            raise InvalidHashFormatError("Missing or unsupported Argon2 version")
        return Argon2Preferences(
            type=Argon2Type(_ARGON2_ID_RE.match(segments[0]).group(1)),
            version=version,
            hash_length=parameters.hash_len,
            salt_length=parameters.salt_len,
            memory_cost=parameters.memory_cost,
            time_cost=parameters.time_cost,
            parallelism=parameters.parallelism,
        )
