"""Kernel – error hierarchy and ports shared by every mp_passhash layer."""
from mp_passhash.kernel.ports import PasswordHasher

__all__ = ["PasswordHasher"]
