"""Codec – PHC string format.

Layout::

    $<id>[$v=<version>][$<param>=<value>(,<param>=<value>)*][$<salt>[$<hash>]]

Salt and hash are unpadded standard base64. Used by the SCrypt (``s2``) and
Argon2 (``argon2d``/``argon2i``/``argon2id``) codecs.
"""
from __future__ import annotations

import dataclasses
import re

from mp_passhash.codec.encoding import b64decode, b64encode
from mp_passhash.kernel.errors import InvalidHashFormatError

__all__ = ["PHCString", "deserialize", "int_param", "serialize"]

_ID_RE = re.compile(r"^[a-z0-9-]{1,32}$")
_PARAM_NAME_RE = re.compile(r"^[a-z0-9-]{1,32}$")
_PARAM_VALUE_RE = re.compile(r"^[a-zA-Z0-9/+.-]+$")
_VERSION_RE = re.compile(r"^v=([0-9]+)$")
_DIGITS_RE = re.compile(r"[0-9]+")


@dataclasses.dataclass(frozen=True)
class PHCString:
    id: str
    version: int | None = None
    params: dict[str, str] = dataclasses.field(default_factory=dict)
    salt: bytes | None = None
    hash: bytes | None = None


def serialize(phc: PHCString) -> str:
    if not _ID_RE.match(phc.id):
        raise ValueError(f"Invalid PHC id {phc.id!r}")
    if phc.hash is not None and phc.salt is None:
        raise ValueError("PHC hash requires a salt")
    parts = ["", phc.id]
    if phc.version is not None:
        parts.append(f"v={phc.version}")
    if phc.params:
        parts.append(",".join(f"{name}={value}" for name, value in phc.params.items()))
    if phc.salt is not None:
        parts.append(b64encode(phc.salt))
        if phc.hash is not None:
            parts.append(b64encode(phc.hash))
    return "$".join(parts)


def deserialize(encoded: str) -> PHCString:
    """Parse *encoded*; raises :class:`InvalidHashFormatError` on any violation."""
    if not encoded.startswith("$"):
        raise InvalidHashFormatError("PHC string must start with '$'")
    fields = encoded[1:].split("$")
    phc_id = fields.pop(0)
    if not _ID_RE.match(phc_id):
        raise InvalidHashFormatError("Invalid PHC identifier")

    version: int | None = None
    if fields:
        match = _VERSION_RE.match(fields[0])
        if match:
            version = int(match.group(1))
            fields.pop(0)

    params: dict[str, str] = {}
    if fields and "=" in fields[0]:
        for pair in fields.pop(0).split(","):
            name, sep, value = pair.partition("=")
            if not sep or not _PARAM_NAME_RE.match(name) or not _PARAM_VALUE_RE.match(value):
                raise InvalidHashFormatError("Invalid PHC parameter segment")
            params[name] = value

    salt = b64decode(fields.pop(0)) if fields else None
    digest = b64decode(fields.pop(0)) if fields else None
    if fields:
        raise InvalidHashFormatError("Too many segments in PHC string")
    return PHCString(id=phc_id, version=version, params=params, salt=salt, hash=digest)


def int_param(phc: PHCString, name: str) -> int:
    raw = phc.params.get(name)
    if raw is None or not _DIGITS_RE.fullmatch(raw):
        raise InvalidHashFormatError(f"Missing or non-numeric PHC parameter '{name}'")
    return int(raw)
