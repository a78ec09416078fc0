"""Codec – HMAC (``$hmac-<name>$<salt>$<mac>``) and PBKDF2
(``$pbkdf2-<name>$<iterations>$<salt>$<hash>``).

Both identifiers carry the lowercase digest name, not the short code used by
the plain digest variants.
"""
from __future__ import annotations

import re
from typing import Sequence

from mp_passhash.codec.base import DerivedHash, HashCodec
from mp_passhash.codec.encoding import b64decode, b64encode
from mp_passhash.kernel.errors import InvalidDigestAlgorithmError, InvalidHashFormatError
from mp_passhash.preferences import (
    DEFAULT_PBKDF2_PREFERENCES,
    Algorithm,
    DigestAlgorithm,
    HashPreferences,
    HMACPreferences,
    PBKDF2Preferences,
)

__all__ = ["HMAC_ID_PREFIX", "HMACCodec", "PBKDF2Codec", "PBKDF2_ID_PREFIX"]

HMAC_ID_PREFIX = "hmac-"
PBKDF2_ID_PREFIX = "pbkdf2-"
_ITERATIONS_RE = re.compile(r"[0-9]+")


def _digest_from_identifier(identifier: str, prefix: str) -> DigestAlgorithm:
    name = identifier[len(prefix):]
    digest = DigestAlgorithm.from_name(name)
    if digest is None:
        raise InvalidDigestAlgorithmError(name)
    return digest


def _require_segments(segments: Sequence[str], count: int) -> None:
    if len(segments) < count:
        raise InvalidHashFormatError(detail={"segments": len(segments), "expected": count})


class HMACCodec(HashCodec):
    algorithm = Algorithm.HMAC

    def matches(self, segments: Sequence[str]) -> bool:
        return segments[0].startswith(HMAC_ID_PREFIX)

    def encode(self, preferences: HashPreferences, derived: DerivedHash) -> str:
        return (
            f"${HMAC_ID_PREFIX}{preferences.digest_algorithm.digest_name}"
            f"${b64encode(derived.salt or b'')}${b64encode(derived.digest)}"
        )

    def decode(self, encoded: str, segments: Sequence[str]) -> HMACPreferences:
        _require_segments(segments, 3)
        return HMACPreferences(
            digest_algorithm=_digest_from_identifier(segments[0], HMAC_ID_PREFIX),
            salt_length=len(b64decode(segments[1])),
        )

    def extract(self, encoded: str, segments: Sequence[str]) -> DerivedHash:
        _require_segments(segments, 3)
        return DerivedHash(digest=b64decode(segments[2]), salt=b64decode(segments[1]))


class PBKDF2Codec(HashCodec):
    algorithm = Algorithm.PBKDF2

    def matches(self, segments: Sequence[str]) -> bool:
        return segments[0].startswith(PBKDF2_ID_PREFIX)

    def encode(self, preferences: HashPreferences, derived: DerivedHash) -> str:
        return (
            f"${PBKDF2_ID_PREFIX}{preferences.digest_algorithm.digest_name}"
            f"${preferences.iterations}"
            f"${b64encode(derived.salt or b'')}${b64encode(derived.digest)}"
        )

    def decode(self, encoded: str, segments: Sequence[str]) -> PBKDF2Preferences:
        _require_segments(segments, 4)
        if _ITERATIONS_RE.fullmatch(segments[1]):
            iterations = int(segments[1])
        else:
            iterations = DEFAULT_PBKDF2_PREFERENCES.iterations
        return PBKDF2Preferences(
            digest_algorithm=_digest_from_identifier(segments[0], PBKDF2_ID_PREFIX),
            salt_length=len(b64decode(segments[2])),
            iterations=iterations,
            hash_length=len(b64decode(segments[3])),
        )

    def extract(self, encoded: str, segments: Sequence[str]) -> DerivedHash:
        _require_segments(segments, 4)
        return DerivedHash(digest=b64decode(segments[3]), salt=b64decode(segments[2]))
