"""
Validation report accumulating the diagnostics of one validation run.

Reporting is deferred: diagnostics are collected during the run and
dispatched afterwards, either to the default logging handler or to a
caller-supplied handler, filtered by a minimum severity.
"""

import logging
from collections.abc import Callable, Iterator
from enum import IntEnum
from typing import Any

from attrs import frozen

logger = logging.getLogger(__name__)

MISSING_REFERENCE_PREFIX = "Missing required reference"
MISSING_ARRAY_REFERENCE_PREFIX = "Missing required array reference"
UNKNOWN_TREE_LABEL = "Unknown"


class Severity(IntEnum):
    """Severity of a diagnostic. Higher values are more severe."""

    WARNING = 1  # A validation issue of medium severity
    ERROR = 2  # A validation issue indicating an error


@frozen
class Diagnostic:
    """One validation finding.

    Params:
        message: Human readable description of the issue
        context: The object the issue is attributed to
        severity: How severe the issue is
    """

    message: str
    context: Any
    severity: Severity = Severity.ERROR

    def __str__(self) -> str:
        return f"{self.severity.name.capitalize()}: {self.message}"


def tree_name_or_unknown(tree_name: str | None) -> str:
    return tree_name if tree_name else UNKNOWN_TREE_LABEL


class ValidationReport:
    """Ordered diagnostics of one validation run.

    A validator owns one report and clears it at the start of every run, so a
    report returned by a validator is only valid until that validator runs
    again. `has_errors` is true when any diagnostic exists, whatever its
    severity.
    """

    def __init__(self):
        self._errors: list[Diagnostic] = []

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._errors)

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(self._errors)

    @property
    def has_errors(self) -> bool:
        return len(self._errors) > 0

    def clear(self) -> None:
        self._errors.clear()

    def add_error(
        self, message: str, context: Any, severity: Severity = Severity.ERROR
    ) -> None:
        self._errors.append(Diagnostic(message, context, severity))

    def add_error_formatted(
        self,
        property_name: str,
        type_name: str,
        component: Any,
        prefix: str = MISSING_REFERENCE_PREFIX,
    ) -> None:
        """
        Add an error naming a property, its component type, owner and tree.

        Params:
            property_name: Display name of the offending property
            type_name: Name of the component's type
            component: The component owning the property; used as context
            prefix: Leading text describing the kind of issue
        """
        tree_name = tree_name_or_unknown(getattr(component, "tree_name", None))
        self.add_error(
            f"{prefix} '{property_name}' ({type_name}) on '{component.name}'. "
            f"Tree: {tree_name}",
            component,
        )

    def log_errors(self, min_severity: Severity = Severity.ERROR) -> None:
        """Log every diagnostic at or above `min_severity` through the module logger."""
        if not self._errors:
            return
        self.handle_errors(_log_diagnostic, min_severity)

    def handle_errors(
        self,
        handler: Callable[[Diagnostic], None],
        min_severity: Severity = Severity.ERROR,
    ) -> None:
        """
        Call `handler` for every diagnostic whose severity is at least `min_severity`.

        Diagnostics are passed in the order they were added.

        Params:
            handler: Callable receiving one Diagnostic per call
            min_severity: Lowest severity that is dispatched
        """
        for error in self._errors:
            if error.severity >= min_severity:
                handler(error)


def _log_diagnostic(error: Diagnostic) -> None:
    extra = {"context": error.context}
    if error.severity == Severity.ERROR:
        logger.error(error.message, extra=extra)
    elif error.severity == Severity.WARNING:
        logger.warning(error.message, extra=extra)
    else:
        logger.info(error.message, extra=extra)
