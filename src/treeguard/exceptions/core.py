"""
Exception classes for treeguard.

Validation findings are never raised; they are collected as diagnostics in a
ValidationReport. The exceptions defined here cover host-side failures and
invalid configuration only.
"""


class TreeGuardError(Exception):
    """Base exception for all treeguard errors."""

    pass


class TreeUnavailableError(TreeGuardError):
    """Raised when a tree cannot be read, for example because it is not loaded."""

    def __init__(self, tree_name: str, reason: str):
        """
        Initialize the exception.

        Params:
            tree_name: Name of the tree that could not be read
            reason: Why the tree is unavailable
        """
        self.tree_name = tree_name
        self.reason = reason
        super().__init__(f"Tree '{tree_name or 'Unknown'}' is unavailable: {reason}")


class SettingsError(TreeGuardError):
    """Raised when validation settings contain an unknown or invalid option."""

    def __init__(self, key: str, reason: str):
        """
        Initialize the exception.

        Params:
            key: The offending settings key
            reason: Why the key was rejected
        """
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid validation setting '{key}': {reason}")
