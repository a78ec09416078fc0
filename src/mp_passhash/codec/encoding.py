"""Codec – unpadded standard base64 used by every binary hash segment."""
from __future__ import annotations

import base64
import binascii

from mp_passhash.kernel.errors import InvalidHashFormatError

__all__ = ["b64decode", "b64encode"]


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").rstrip("=")


def b64decode(data: str) -> bytes:
    """Decode an unpadded segment; trailing padding is tolerated."""
    stripped = data.rstrip("=")
    try:
        return base64.b64decode(stripped + "=" * (-len(stripped) % 4), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidHashFormatError("Invalid base64 segment in password hash", cause=exc) from exc
