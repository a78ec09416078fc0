"""Codec – encoded hash strings for every supported algorithm.

Decoding branches once on the leading identifier and hands the string to the
matching algorithm codec. Recognition order matters: the ``hmac-``/``pbkdf2-``
prefixes and the PHC identifiers are tried before the digest short-codes.
"""
from __future__ import annotations

from mp_passhash.codec.base import DerivedHash, HashCodec
from mp_passhash.codec.crypt import BCryptCodec
from mp_passhash.codec.digest import PlainHashCodec, PlainHashSaltCodec
from mp_passhash.codec.encoding import b64decode, b64encode
from mp_passhash.codec.kdf import Argon2Codec, SCryptCodec
from mp_passhash.codec.keyed import HMACCodec, PBKDF2Codec
from mp_passhash.kernel.errors import InvalidHashFormatError, UnknownAlgorithmError
from mp_passhash.preferences import Algorithm, DigestAlgorithm, HashPreferences

__all__ = [
    "Argon2Codec",
    "BCryptCodec",
    "DerivedHash",
    "HMACCodec",
    "HashCodec",
    "PBKDF2Codec",
    "PlainHashCodec",
    "PlainHashSaltCodec",
    "SCryptCodec",
    "b64decode",
    "b64encode",
    "codec_for",
    "decode",
    "encode",
    "resolve_codec",
    "split_segments",
]

_CODECS: tuple[HashCodec, ...] = (
    BCryptCodec(),
    SCryptCodec(),
    Argon2Codec(),
    HMACCodec(),
    PBKDF2Codec(),
    PlainHashCodec(),
    PlainHashSaltCodec(),
)
_BY_ALGORITHM: dict[Algorithm, HashCodec] = {codec.algorithm: codec for codec in _CODECS}


def split_segments(encoded: str) -> list[str]:
    """Return the ``$``-separated segments after the leading ``$``."""
    if not isinstance(encoded, str) or not encoded.startswith("$"):
        raise InvalidHashFormatError("Password hash must start with '$'")
    segments = encoded[1:].split("$")
    if len(segments) < 2:
        raise InvalidHashFormatError(detail={"segments": len(segments), "expected": 2})
    return segments


def codec_for(algorithm: Algorithm) -> HashCodec:
    return _BY_ALGORITHM[algorithm]


def resolve_codec(encoded: str) -> tuple[HashCodec, list[str]]:
    """Find the codec owning *encoded*.

    Raises:
        InvalidHashFormatError: malformed string, or a digest short-code with
            the wrong number of segments.
        UnknownAlgorithmError: identifier not recognised.
    """
    segments = split_segments(encoded)
    for codec in _CODECS:
        if codec.matches(segments):
            return codec, segments
    identifier = segments[0]
    if DigestAlgorithm.from_identifier(identifier) is not None:
        raise InvalidHashFormatError(
            detail={"identifier": identifier, "segments": len(segments)},
        )
    raise UnknownAlgorithmError(identifier)


def decode(encoded: str) -> HashPreferences:
    """Recover resolved preferences from *encoded* without the password."""
    codec, segments = resolve_codec(encoded)
    return codec.decode(encoded, segments)


def encode(preferences: HashPreferences, derived: DerivedHash) -> str:
    """Serialise resolved *preferences* and *derived* bytes."""
    return codec_for(preferences.algorithm).encode(preferences, derived)
