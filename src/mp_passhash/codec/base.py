"""Codec – common capability implemented by every algorithm's codec."""
from __future__ import annotations

import abc
import dataclasses
from typing import ClassVar, Sequence

from mp_passhash.preferences import Algorithm, HashPreferences

__all__ = ["DerivedHash", "HashCodec"]


@dataclasses.dataclass(frozen=True)
class DerivedHash:
    """Salt and digest bytes produced by the hasher or read back from a hash."""

    digest: bytes
    salt: bytes | None = None

    def __repr__(self) -> str:
        salt_len = None if self.salt is None else len(self.salt)
        return f"DerivedHash(digest_len={len(self.digest)}, salt_len={salt_len})"


class HashCodec(abc.ABC):
    """Encode/decode pair for one algorithm's textual format.

    ``segments`` is always the encoded hash without its leading ``$``, split
    on ``$``; the dispatcher computes it once and hands it to every codec.
    """

    algorithm: ClassVar[Algorithm]

    @abc.abstractmethod
    def matches(self, segments: Sequence[str]) -> bool: ...

    @abc.abstractmethod
    def encode(self, preferences: HashPreferences, derived: DerivedHash) -> str: ...

    @abc.abstractmethod
    def decode(self, encoded: str, segments: Sequence[str]) -> HashPreferences:
        """Recover resolved preferences from what is observable in the string."""

    def extract(self, encoded: str, segments: Sequence[str]) -> DerivedHash:
        """Return the stored salt and digest for recomputation."""
        raise NotImplementedError(f"{self.algorithm.value} hashes are verified by their native library")
