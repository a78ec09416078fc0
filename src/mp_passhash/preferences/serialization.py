"""Preferences – JSON shape ``{"algorithm": <tag>, <camelCase fields>...}``.

The shape is the one exchanged with configuration stores and request
validators. Parsing is strict: unknown keys, unknown enum values, non-integer
numbers and out-of-bound values are all reported together in a single
:class:`InvalidPreferencesError`.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Mapping

from mp_passhash.kernel.errors import InvalidPreferencesError
from mp_passhash.preferences.bounds import check_bounds
from mp_passhash.preferences.types import (
    Algorithm,
    Argon2Preferences,
    Argon2Type,
    Argon2Version,
    BCryptMinorVersion,
    BCryptPreferences,
    DigestAlgorithm,
    HashPreferences,
    HMACPreferences,
    PBKDF2Preferences,
    PlainHashPreferences,
    PlainHashSaltPreferences,
    SCryptPreferences,
)

__all__ = ["VARIANTS", "preferences_from_dict", "preferences_to_dict"]

VARIANTS: dict[Algorithm, type] = {
    Algorithm.PLAIN_HASH: PlainHashPreferences,
    Algorithm.PLAIN_HASH_SALT: PlainHashSaltPreferences,
    Algorithm.HMAC: HMACPreferences,
    Algorithm.PBKDF2: PBKDF2Preferences,
    Algorithm.BCRYPT: BCryptPreferences,
    Algorithm.SCRYPT: SCryptPreferences,
    Algorithm.ARGON2: Argon2Preferences,
}

_ENUM_FIELDS: dict[str, type[Enum]] = {
    "digest_algorithm": DigestAlgorithm,
    "minor_version": BCryptMinorVersion,
    "type": Argon2Type,
    "version": Argon2Version,
}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def preferences_from_dict(data: Mapping[str, Any]) -> HashPreferences:
    """Build a preferences variant from its JSON form.

    Raises:
        InvalidPreferencesError: on any structural, enum or bound violation.
    """
    tag = data.get("algorithm")
    try:
        algorithm = Algorithm(tag)
    except ValueError:
        raise InvalidPreferencesError(
            "Unknown hash preferences algorithm",
            errors=[{"field": "algorithm", "message": f"must be one of {[a.value for a in Algorithm]}"}],
        ) from None

    variant = VARIANTS[algorithm]
    by_key = {_camel(f.name): f.name for f in dataclasses.fields(variant)}
    errors: list[dict[str, Any]] = []
    kwargs: dict[str, Any] = {}

    for key, raw in data.items():
        if key == "algorithm":
            continue
        name = by_key.get(key)
        if name is None:
            errors.append({"field": key, "message": "is not allowed"})
            continue
        if raw is None:
            continue
        enum_cls = _ENUM_FIELDS.get(name)
        if enum_cls is not None:
            try:
                kwargs[name] = enum_cls(raw)
            except ValueError:
                errors.append({"field": key, "message": f"must be one of {[m.value for m in enum_cls]}"})
        elif isinstance(raw, bool) or not isinstance(raw, int):
            errors.append({"field": key, "message": "must be an integer"})
        else:
            kwargs[name] = raw

    if not errors:
        preferences = variant(**kwargs)
        errors = [
            {"field": _camel(e["field"]), "message": e["message"]}
            for e in check_bounds(preferences)
        ]
        if not errors:
            return preferences
    raise InvalidPreferencesError(errors=errors, detail={"algorithm": algorithm.value})


def preferences_to_dict(preferences: HashPreferences) -> dict[str, Any]:
    """Return the JSON form; unset fields are omitted."""
    payload: dict[str, Any] = {"algorithm": preferences.algorithm.value}
    for f in dataclasses.fields(preferences):
        value = getattr(preferences, f.name)
        if value is None:
            continue
        payload[_camel(f.name)] = value.value if isinstance(value, Enum) else value
    return payload
