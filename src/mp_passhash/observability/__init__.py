"""Observability – structured logging."""
from mp_passhash.observability.logging import (
    DEFAULT_SENSITIVE_FIELDS,
    SensitiveFieldsFilter,
    configure_logging,
    get_logger,
)

__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter", "configure_logging", "get_logger"]
