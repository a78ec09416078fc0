"""Rehash policy – has a stored hash fallen behind the desired preferences?

Every variant except Argon2 compares the stored (decoded or caller-supplied)
preferences field by field against the resolved desired preferences. Argon2
compares against what argon2-cffi's ``extract_parameters`` reads from the
encoded string, so for that variant the parameters written in the string win over any
``known_preferences`` the caller passes in.
"""
from __future__ import annotations

from argon2 import Parameters, extract_parameters
from argon2.exceptions import InvalidHashError

from mp_passhash import codec
from mp_passhash.hasher import ARGON2_TYPES
from mp_passhash.kernel.errors import InvalidHashFormatError
from mp_passhash.observability import get_logger
from mp_passhash.preferences import (
    DEFAULT_HASH_PREFERENCES,
    Algorithm,
    HashPreferences,
    resolve,
)

__all__ = ["COMPARED_FIELDS", "needs_rehash"]

log = get_logger(__name__)

COMPARED_FIELDS: dict[Algorithm, tuple[str, ...]] = {
    Algorithm.PLAIN_HASH: ("digest_algorithm",),
    Algorithm.PLAIN_HASH_SALT: ("digest_algorithm", "salt_length"),
    Algorithm.HMAC: ("digest_algorithm", "salt_length"),
    Algorithm.PBKDF2: ("digest_algorithm", "salt_length", "iterations", "hash_length"),
    Algorithm.BCRYPT: ("minor_version", "rounds"),
    Algorithm.SCRYPT: ("hash_length", "salt_length", "cost", "block_size", "parallelization"),
}


def needs_rehash(
    encoded: str,
    desired: HashPreferences = DEFAULT_HASH_PREFERENCES,
    known_preferences: HashPreferences | None = None,
) -> bool:
    """Return ``True`` when *encoded* should be regenerated under *desired*."""
    stored = codec.decode(encoded) if known_preferences is None else known_preferences
    if stored.algorithm is not desired.algorithm:
        log.debug(
            "rehash_required",
            reason="algorithm_changed",
            stored=stored.algorithm.value,
            desired=desired.algorithm.value,
        )
        return True

    wanted = resolve(desired)
    if wanted.algorithm is Algorithm.ARGON2:
        changed = _argon2_needs_rehash(encoded, wanted)
    else:
        changed = any(
            getattr(wanted, name) != getattr(stored, name)
            for name in COMPARED_FIELDS[wanted.algorithm]
        )
    if changed:
        log.debug("rehash_required", reason="parameters_changed", algorithm=wanted.algorithm.value)
    return changed


def _argon2_needs_rehash(encoded: str, wanted: HashPreferences) -> bool:
    # Whole-record comparison, version included.
    parameters = Parameters(
        type=ARGON2_TYPES[wanted.type],
        version=wanted.version.number,
        salt_len=wanted.salt_length,
        hash_len=wanted.hash_length,
        time_cost=wanted.time_cost,
        memory_cost=wanted.memory_cost,
        parallelism=wanted.parallelism,
    )
    try:
        return parameters != extract_parameters(encoded)
    except InvalidHashError as exc:
        raise InvalidHashFormatError("Invalid Argon2 hash", cause=exc) from exc
