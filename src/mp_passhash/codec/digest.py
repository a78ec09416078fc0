"""Codec – Plain Hash (``$<id>$<hash>``) and Plain Hash+Salt (``$<id>$<salt>$<hash>``)."""
from __future__ import annotations

from typing import Sequence

from mp_passhash.codec.base import DerivedHash, HashCodec
from mp_passhash.codec.encoding import b64decode, b64encode
from mp_passhash.preferences import (
    Algorithm,
    DigestAlgorithm,
    HashPreferences,
    PlainHashPreferences,
    PlainHashSaltPreferences,
)

__all__ = ["PlainHashCodec", "PlainHashSaltCodec"]


class PlainHashCodec(HashCodec):
    algorithm = Algorithm.PLAIN_HASH

    def matches(self, segments: Sequence[str]) -> bool:
        return len(segments) == 2 and DigestAlgorithm.from_identifier(segments[0]) is not None

    def encode(self, preferences: HashPreferences, derived: DerivedHash) -> str:
        return f"${preferences.digest_algorithm.identifier}${b64encode(derived.digest)}"

    def decode(self, encoded: str, segments: Sequence[str]) -> PlainHashPreferences:
        return PlainHashPreferences(digest_algorithm=DigestAlgorithm.from_identifier(segments[0]))

    def extract(self, encoded: str, segments: Sequence[str]) -> DerivedHash:
        return DerivedHash(digest=b64decode(segments[1]))


class PlainHashSaltCodec(HashCodec):
    algorithm = Algorithm.PLAIN_HASH_SALT

    def matches(self, segments: Sequence[str]) -> bool:
        return len(segments) == 3 and DigestAlgorithm.from_identifier(segments[0]) is not None

    def encode(self, preferences: HashPreferences, derived: DerivedHash) -> str:
        return (
            f"${preferences.digest_algorithm.identifier}"
            f"${b64encode(derived.salt or b'')}${b64encode(derived.digest)}"
        )

    def decode(self, encoded: str, segments: Sequence[str]) -> PlainHashSaltPreferences:
        return PlainHashSaltPreferences(
            digest_algorithm=DigestAlgorithm.from_identifier(segments[0]),
            salt_length=len(b64decode(segments[1])),
        )

    def extract(self, encoded: str, segments: Sequence[str]) -> DerivedHash:
        return DerivedHash(digest=b64decode(segments[2]), salt=b64decode(segments[1]))
