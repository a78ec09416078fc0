"""Infrastructure errors – failures inside cryptographic primitives."""

from __future__ import annotations

from typing import Any

from mp_passhash.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Raised by the primitive / OS layer."""

    default_code = "infrastructure_error"


class PrimitiveFailureError(InfrastructureError):
    """A hash primitive or the secure RNG failed. Not retried."""

    default_code = "primitive_failure"

    def __init__(
        self,
        primitive: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"{primitive} primitive failed", **kwargs)
        self.primitive = primitive
        self.detail.setdefault("primitive", primitive)


__all__ = ["InfrastructureError", "PrimitiveFailureError"]
