"""Codec – BCrypt.

The wire format belongs to the bcrypt library (``$2a$``/``$2b$``, two-digit
cost, 22 salt chars and 31 hash chars in bcrypt's own base64 alphabet). The
hasher's digest for this variant already is that string.
"""
from __future__ import annotations

import re
from typing import Sequence

from mp_passhash.codec.base import DerivedHash, HashCodec
from mp_passhash.kernel.errors import InvalidHashFormatError
from mp_passhash.preferences import (
    Algorithm,
    BCryptMinorVersion,
    BCryptPreferences,
    HashPreferences,
)

__all__ = ["BCryptCodec"]

_ID_RE = re.compile(r"^2[ab]$")
_COST_RE = re.compile(r"[0-9]{1,2}")


class BCryptCodec(HashCodec):
    algorithm = Algorithm.BCRYPT

    def matches(self, segments: Sequence[str]) -> bool:
        return bool(_ID_RE.match(segments[0]))

    def encode(self, preferences: HashPreferences, derived: DerivedHash) -> str:
        return derived.digest.decode("ascii")

    def decode(self, encoded: str, segments: Sequence[str]) -> BCryptPreferences:
        if not _COST_RE.fullmatch(segments[1]):
            raise InvalidHashFormatError("Invalid bcrypt cost factor")
        return BCryptPreferences(
            minor_version=BCryptMinorVersion(segments[0][1]),
            rounds=int(segments[1]),
        )
