"""
mp_passhash – multi-algorithm password hashing.

Import path convention::

    from mp_passhash import hash_password, verify_password, needs_rehash
    from mp_passhash.preferences import PBKDF2Preferences, DigestAlgorithm
    from mp_passhash.kernel.errors import InvalidHashFormatError
    from mp_passhash.scheduling import HashingPool
"""

from mp_passhash.facade import (
    DEFAULT_PREFERENCES,
    MultiAlgorithmPasswordHasher,
    decode_preferences,
    hash_password,
    needs_rehash,
    verify_and_rehash,
    verify_password,
)

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_PREFERENCES",
    "MultiAlgorithmPasswordHasher",
    "__version__",
    "decode_preferences",
    "hash_password",
    "needs_rehash",
    "verify_and_rehash",
    "verify_password",
]
