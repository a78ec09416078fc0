"""Preferences – published numeric bounds per variant."""
from __future__ import annotations

import dataclasses
from typing import Any

from mp_passhash.preferences.types import Algorithm, HashPreferences

__all__ = ["BOUNDS", "Bound", "check_bounds"]

MAX_UINT32 = 2**32 - 1
MAX_INT32 = 2**31 - 1
MAX_UINT24 = 2**24 - 1


@dataclasses.dataclass(frozen=True)
class Bound:
    """Inclusive integer range."""

    min: int
    max: int

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


_UINT32 = Bound(0, MAX_UINT32)
_SALT_LENGTH = Bound(0, MAX_INT32)

BOUNDS: dict[Algorithm, dict[str, Bound]] = {
    Algorithm.PLAIN_HASH: {},
    Algorithm.PLAIN_HASH_SALT: {"salt_length": _SALT_LENGTH},
    Algorithm.HMAC: {"salt_length": _SALT_LENGTH},
    Algorithm.PBKDF2: {
        "salt_length": _SALT_LENGTH,
        "iterations": Bound(1, MAX_UINT32),
        "hash_length": _UINT32,
    },
    Algorithm.BCRYPT: {"rounds": Bound(1, 31)},
    Algorithm.SCRYPT: {
        "hash_length": _UINT32,
        "salt_length": _SALT_LENGTH,
        "cost": _UINT32,
        "block_size": _UINT32,
        "parallelization": _UINT32,
    },
    Algorithm.ARGON2: {
        "hash_length": Bound(4, MAX_UINT32),
        "salt_length": Bound(8, MAX_INT32),
        "memory_cost": Bound(2048, MAX_UINT32),
        "time_cost": Bound(2, MAX_UINT32),
        "parallelism": Bound(1, MAX_UINT24),
    },
}


def check_bounds(preferences: HashPreferences) -> list[dict[str, Any]]:
    """Return one ``{"field", "message"}`` entry per out-of-range field.

    Unset fields are skipped; an empty list means the preferences are valid.
    """
    errors: list[dict[str, Any]] = []
    for name, bound in BOUNDS[preferences.algorithm].items():
        value = getattr(preferences, name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append({"field": name, "message": "must be an integer"})
        elif value < bound.min:
            errors.append({"field": name, "message": f"must be >= {bound.min}"})
        elif value > bound.max:
            errors.append({"field": name, "message": f"must be <= {bound.max}"})
    return errors
