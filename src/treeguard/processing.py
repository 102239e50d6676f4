"""
Entry points that run validation around run-mode transitions.

These helpers only invoke the validator, log the results and report whether
the caller should proceed. Deciding what "aborting" means (cancelling a
transition, failing a build) stays with the caller.
"""

import logging
from collections.abc import Iterable
from enum import Enum

from treeguard.config import ValidationSettings, create_validation_settings
from treeguard.core.objects import Tree
from treeguard.validation.report import ValidationReport
from treeguard.validation.walker import TreeValidator

logger = logging.getLogger(__name__)


class RunModeStateChange(Enum):
    """Transitions between editing and running the host application."""

    EXITING_EDIT_MODE = "exiting_edit_mode"
    ENTERED_RUN_MODE = "entered_run_mode"
    EXITING_RUN_MODE = "exiting_run_mode"
    ENTERED_EDIT_MODE = "entered_edit_mode"


def validate_open_trees(
    trees: Iterable[Tree], validator: TreeValidator | None = None
) -> bool:
    """Validate and log every loaded tree.

    Params:
        trees: Trees currently open in the host
        validator: Validator to reuse; a default one is created if omitted

    Returns:
        True if any loaded tree produced diagnostics
    """
    validator = validator or TreeValidator()
    has_errors = False
    for tree in trees:
        if not tree.is_loaded:
            continue
        report = validator.create_validation_report(tree)
        report.log_errors()
        if report.has_errors:
            has_errors = True
    return has_errors


def validate_active_tree(
    tree: Tree, validator: TreeValidator | None = None
) -> ValidationReport:
    """Validate one tree, log its diagnostics and return the report."""
    validator = validator or TreeValidator()
    report = validator.create_validation_report(tree)
    report.log_errors()
    return report


class TreeValidationProcessor:
    """Validates trees when they are processed for, or before entering, run mode."""

    def __init__(self, settings: ValidationSettings | dict | None = None):
        self.settings = create_validation_settings(settings)
        self.validator = TreeValidator(self.settings)

    def on_process_tree(self, tree: Tree) -> ValidationReport | None:
        """Validate a tree being prepared for run mode, if enabled.

        Returns:
            The logged report, or None when validation during run mode is disabled
        """
        if not self.settings.validate_during_run_mode:
            return None
        return validate_active_tree(tree, self.validator)

    def on_run_mode_state_changed(
        self, change: RunModeStateChange, trees: Iterable[Tree]
    ) -> bool:
        """
        React to a run-mode transition.

        When validation before run mode is enabled and the host is leaving
        edit mode, every loaded tree is validated and logged.

        Params:
            change: The transition taking place
            trees: Trees currently open in the host

        Returns:
            False if the transition should be aborted because of validation errors
        """
        if not self.settings.validate_before_entering_run_mode:
            return True
        if change is not RunModeStateChange.EXITING_EDIT_MODE:
            return True

        if validate_open_trees(trees, self.validator):
            logger.warning("Run mode validation failed. See the log for details.")
            return False
        return True
