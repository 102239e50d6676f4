"""
Tests for the validation report and its deferred dispatch.
"""

import logging

import attrs
import pytest

from treeguard.core.objects import Component, Node, Tree
from treeguard.validation import Diagnostic, Severity, ValidationReport


class Holder(Component):
    pass


def make_report() -> ValidationReport:
    report = ValidationReport()
    report.add_error("first warning", "ctx-1", Severity.WARNING)
    report.add_error("an error", "ctx-2")
    report.add_error("second warning", "ctx-3", Severity.WARNING)
    return report


class TestDiagnostic:
    """Test the diagnostic record."""

    def test_default_severity_is_error(self):
        """Test that diagnostics default to error severity."""
        assert Diagnostic("message", None).severity is Severity.ERROR

    def test_severity_order(self):
        """Errors rank above warnings."""
        assert Severity.WARNING < Severity.ERROR
        assert int(Severity.WARNING) == 1
        assert int(Severity.ERROR) == 2

    def test_str_includes_severity(self):
        """Test that the string form is prefixed with the severity."""
        assert str(Diagnostic("broken", None, Severity.WARNING)) == "Warning: broken"

    def test_is_immutable(self):
        """Test that diagnostics cannot be modified."""
        diagnostic = Diagnostic("message", None)
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            diagnostic.message = "changed"


class TestReportState:
    """Test accumulation and clearing."""

    def test_new_report_has_no_errors(self):
        """A new report is empty."""
        assert not ValidationReport().has_errors

    def test_any_severity_counts_as_error(self):
        """Test that a warning alone makes has_errors true."""
        report = ValidationReport()
        report.add_error("just a warning", None, Severity.WARNING)
        assert report.has_errors

    def test_clear(self):
        """Test that clear removes every diagnostic."""
        report = make_report()
        report.clear()

        assert not report.has_errors
        assert len(report) == 0

    def test_errors_keep_insertion_order(self):
        """Test that diagnostics keep insertion order."""
        messages = [error.message for error in make_report()]
        assert messages == ["first warning", "an error", "second warning"]

    def test_errors_view_is_a_snapshot(self):
        """Test that the errors tuple does not change with the report."""
        report = make_report()
        snapshot = report.errors
        report.clear()

        assert len(snapshot) == 3


class TestFormattedErrors:
    """Test the formatted missing-reference message."""

    def test_message_names_property_type_owner_and_tree(self):
        """Test the formatted missing reference message."""
        tree = Tree("Level01")
        component = tree.add_root(Node("Player")).add_component(Holder())
        report = ValidationReport()

        report.add_error_formatted("Target", "Holder", component)

        (error,) = report.errors
        assert error.message == (
            "Missing required reference 'Target' (Holder) on 'Player'. Tree: Level01"
        )
        assert error.context is component
        assert error.severity is Severity.ERROR

    def test_unnamed_tree_uses_placeholder(self):
        """Test that an unnamed tree is formatted as Unknown."""
        component = Tree().add_root(Node("Player")).add_component(Holder())
        report = ValidationReport()

        report.add_error_formatted("Target", "Holder", component, "Custom prefix")

        assert report.errors[0].message.startswith("Custom prefix 'Target'")
        assert report.errors[0].message.endswith("Tree: Unknown")


class TestDispatch:
    """Test severity-filtered handling and logging."""

    def test_handle_errors_filters_by_severity(self):
        """Test that handlers only receive diagnostics at or above the threshold."""
        handled = []
        make_report().handle_errors(handled.append)

        assert [error.message for error in handled] == ["an error"]

    def test_handle_errors_with_warning_threshold(self):
        """Test that a warning threshold passes every diagnostic."""
        handled = []
        make_report().handle_errors(handled.append, Severity.WARNING)

        assert len(handled) == 3

    def test_log_errors_uses_logger_levels(self, caplog):
        """Test that each severity is logged at its matching level."""
        with caplog.at_level(logging.INFO, logger="treeguard.validation.report"):
            make_report().log_errors(Severity.WARNING)

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.WARNING, logging.ERROR, logging.WARNING]
        assert caplog.records[1].context == "ctx-2"

    def test_log_errors_default_threshold(self, caplog):
        """Test that only errors are logged by default."""
        with caplog.at_level(logging.INFO, logger="treeguard.validation.report"):
            make_report().log_errors()

        assert [record.getMessage() for record in caplog.records] == ["an error"]

    def test_log_errors_on_empty_report_logs_nothing(self, caplog):
        """An empty report logs nothing."""
        with caplog.at_level(logging.INFO, logger="treeguard.validation.report"):
            ValidationReport().log_errors()

        assert caplog.records == []
