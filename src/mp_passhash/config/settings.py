"""Config – 12-factor settings for the hashing core.

Every field can be overridden with a ``PASSHASH_<FIELD>`` environment
variable::

    PASSHASH_MAX_WORKERS=8 PASSHASH_MAX_MEMORY_KIB=262144 python app.py
"""
from __future__ import annotations

import abc
import dataclasses
import functools
import os
from typing import Any, ClassVar, TypeVar

from mp_passhash.config.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = ["EnvSettingsLoader", "HashingSettings", "Settings", "SettingsLoader", "get_settings"]

T = TypeVar("T", bound="Settings")


@dataclasses.dataclass(frozen=True)
class Settings:
    """Base class for env-loadable settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass(frozen=True)
class HashingSettings(Settings):
    """Worker pool size and the caps applied before any buffer is allocated.

    ``max_memory_kib`` bounds both Argon2's ``memory_cost`` (KiB) and SCrypt's
    ``128 * cost * block_size`` working set.
    """

    _prefix: ClassVar[str] = "PASSHASH"

    max_workers: int = 4
    max_queue: int = 64
    max_salt_length: int = 1024
    max_hash_length: int = 1024
    max_memory_kib: int = 1024 * 1024

    def _validate(self) -> None:
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidSettingValueError(field.name, value, "must be an integer")
            minimum = 0 if field.name == "max_queue" else 1
            if value < minimum:
                raise InvalidSettingValueError(field.name, value, f"must be >= {minimum}")


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables (``<PREFIX>_<FIELD>``)."""

    def __init__(self, environ: dict[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)
            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue
            kwargs[field.name] = self._coerce(env_key, raw, field.type)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, key: str, value: str, type_hint: Any) -> Any:
        if type_hint is bool or type_hint == "bool":
            return value.strip().lower() in ("1", "true", "yes", "on")
        if type_hint is int or type_hint == "int":
            try:
                return int(value)
            except ValueError:
                raise InvalidSettingValueError(key, value, "not an integer") from None
        return value


@functools.lru_cache(maxsize=1)
def get_settings() -> HashingSettings:
    """Process-wide settings read once from the environment."""
    return EnvSettingsLoader().load(HashingSettings)
