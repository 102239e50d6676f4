"""
Type inclusion policy deciding which component types are validated.
"""

from typing import Any

from treeguard.config import ValidationSettings


class TypeInclusionPolicy:
    """Allow-list of types to validate, matched against their module path.

    A type is included when its full module name equals one of the configured
    `modules_to_validate`, or when any dot-separated segment of its module
    name equals one of the configured `namespaces_to_validate`. Segment
    matching is deliberately coarse: "ui" matches both `game.ui` and
    `vendor.ui`.

    Settings are read on every call; nothing is cached.
    """

    def __init__(self, settings: ValidationSettings):
        self.settings = settings

    def should_validate(self, cls: Any) -> bool:
        if not isinstance(cls, type):
            return False

        module = getattr(cls, "__module__", None)
        if not module:
            return False

        if module in self.settings.module_tokens():
            return True

        segments = module.split(".")
        for token in self.settings.namespace_tokens():
            if token in segments:
                return True
        return False
