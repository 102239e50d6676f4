"""
treeguard exception classes.

This package provides the exception types raised for host-side failures and
configuration errors. Validation findings themselves are reported, not raised.
"""

from treeguard.exceptions.core import (
    SettingsError,
    TreeGuardError,
    TreeUnavailableError,
)

__all__ = [
    "TreeGuardError",
    "TreeUnavailableError",
    "SettingsError",
]
