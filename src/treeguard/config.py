"""
Configuration for tree validation runs.

Settings are plain values read at the start of each run (and, for the type
inclusion lists, on every policy check), so changing them takes effect on the
next validation without any invalidation step.
"""

from dataclasses import dataclass, fields

from treeguard.exceptions import SettingsError

LIST_DELIMITER = ","


def split_list_setting(value: str) -> list[str]:
    """Split a delimited settings string into trimmed, non-empty tokens."""
    tokens = (token.strip() for token in value.split(LIST_DELIMITER))
    return [token for token in tokens if token]


@dataclass
class ValidationSettings:
    """User-editable options controlling which trees, nodes and types are validated."""

    validate_before_entering_run_mode: bool = False
    validate_during_run_mode: bool = False
    validate_inactive_nodes: bool = True
    namespaces_to_validate: str = ""  # e.g. "Game, UI"
    modules_to_validate: str = ""  # full module names, e.g. "game.ui.widgets"

    @classmethod
    def from_dict(cls, config: dict | None = None) -> "ValidationSettings":
        """Factory method to create settings from a dict with defaults.

        Params:
            config: Mapping of option name to value. Missing options keep their defaults.

        Returns:
            New ValidationSettings instance.

        Raises:
            SettingsError: If the mapping contains an unknown option.
        """
        if config is None:
            config = {}
        known = {f.name for f in fields(cls)}
        for key in config:
            if key not in known:
                raise SettingsError(
                    key, f"unknown option (expected one of: {', '.join(sorted(known))})"
                )
        return cls(**config)

    def reset(self) -> None:
        """Restore every option to its default value in place."""
        defaults = type(self)()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))

    def namespace_tokens(self) -> list[str]:
        return split_list_setting(self.namespaces_to_validate)

    def module_tokens(self) -> list[str]:
        return split_list_setting(self.modules_to_validate)


def create_validation_settings(
    settings: ValidationSettings | dict | None = None,
) -> ValidationSettings:
    """
    Factory function for creating ValidationSettings with flexible input types.

    Args:
        settings: ValidationSettings instance, dict to override defaults, or None for defaults

    Returns:
        ValidationSettings instance
    """
    if isinstance(settings, ValidationSettings):
        return settings
    elif isinstance(settings, dict):
        return ValidationSettings.from_dict(settings)
    else:
        return ValidationSettings()
