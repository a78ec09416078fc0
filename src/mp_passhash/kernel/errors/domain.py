"""Domain errors – malformed hashes, unknown identifiers, invalid preferences."""

from __future__ import annotations

from typing import Any

from mp_passhash.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when an input violates the hash format or preference rules."""

    default_code = "domain_error"


class InvalidHashFormatError(DomainError):
    """The encoded hash is structurally malformed.

    Missing leading ``$``, too few segments, bad base64 or an unparsable
    parameter segment.
    """

    default_code = "invalid_hash_format"

    def __init__(self, message: str = "Invalid password hash", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class UnknownAlgorithmError(DomainError):
    """The leading identifier matches no supported algorithm."""

    default_code = "unknown_algorithm"

    def __init__(self, identifier: str, **kwargs: Any) -> None:
        super().__init__(f"Unknown hash algorithm '{identifier}'", **kwargs)
        self.identifier = identifier


class InvalidDigestAlgorithmError(DomainError):
    """An ``hmac-``/``pbkdf2-`` identifier names an unsupported digest."""

    default_code = "invalid_digest_algorithm"

    def __init__(self, digest_name: str, **kwargs: Any) -> None:
        super().__init__(f"Invalid digest algorithm '{digest_name}'", **kwargs)
        self.digest_name = digest_name


class InvalidPreferencesError(DomainError):
    """A preferences object or its JSON form fails validation.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` entries.
    """

    default_code = "invalid_preferences"

    def __init__(
        self,
        message: str = "Invalid hash preferences",
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


__all__ = [
    "DomainError",
    "InvalidDigestAlgorithmError",
    "InvalidHashFormatError",
    "InvalidPreferencesError",
    "UnknownAlgorithmError",
]
