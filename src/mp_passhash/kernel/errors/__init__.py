"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── InvalidHashFormatError
    │   ├── UnknownAlgorithmError
    │   ├── InvalidDigestAlgorithmError
    │   └── InvalidPreferencesError
    ├── ApplicationError         (application.py)
    │   ├── ParameterLimitError
    │   └── HashingPoolFullError
    └── InfrastructureError      (infrastructure.py)
        └── PrimitiveFailureError
"""

from mp_passhash.kernel.errors.application import (
    ApplicationError,
    HashingPoolFullError,
    ParameterLimitError,
)
from mp_passhash.kernel.errors.base import BaseError
from mp_passhash.kernel.errors.domain import (
    DomainError,
    InvalidDigestAlgorithmError,
    InvalidHashFormatError,
    InvalidPreferencesError,
    UnknownAlgorithmError,
)
from mp_passhash.kernel.errors.infrastructure import (
    InfrastructureError,
    PrimitiveFailureError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "HashingPoolFullError",
    "InfrastructureError",
    "InvalidDigestAlgorithmError",
    "InvalidHashFormatError",
    "InvalidPreferencesError",
    "ParameterLimitError",
    "PrimitiveFailureError",
    "UnknownAlgorithmError",
]
