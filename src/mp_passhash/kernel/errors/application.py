"""Application-layer errors – resource limits and scheduling capacity."""

from __future__ import annotations

from typing import Any

from mp_passhash.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting concern raised before any primitive runs."""

    default_code = "application_error"


class ParameterLimitError(ApplicationError):
    """A length or memory parameter exceeds the configured cap."""

    default_code = "parameter_limit_exceeded"

    def __init__(self, parameter: str, value: int, limit: int, **kwargs: Any) -> None:
        super().__init__(
            f"Parameter '{parameter}' value {value} exceeds limit {limit}",
            detail={"parameter": parameter, "value": value, "limit": limit},
            **kwargs,
        )
        self.parameter = parameter
        self.value = value
        self.limit = limit


class HashingPoolFullError(ApplicationError):
    """Raised when the hashing pool has no room for another call."""

    default_code = "hashing_pool_full"


__all__ = ["ApplicationError", "HashingPoolFullError", "ParameterLimitError"]
