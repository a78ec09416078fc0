"""Kernel errors – BaseError, root of everything mp_passhash raises."""

from __future__ import annotations

from typing import Any, ClassVar


class BaseError(Exception):
    """Every error carries a stable ``code`` and a loggable ``detail`` dict.

    ``message`` and ``detail`` reach logs and API responses, so they hold
    algorithm tags, lengths and segment counts only. Never the password, the
    salt or the encoded hash.
    """

    default_code: ClassVar[str] = "passhash_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, detail={self.detail!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for structured logs and error responses.

        The cause is reduced to its type name; its message may quote input.
        """
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            payload["cause"] = type(self.cause).__name__
        return payload


__all__ = ["BaseError"]
