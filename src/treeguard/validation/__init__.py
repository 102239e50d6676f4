"""
treeguard validation engine.

This package provides the type inclusion policy, the per-component
validator, the tree walker and the validation report.
"""

from treeguard.validation.component import ComponentValidator
from treeguard.validation.policy import TypeInclusionPolicy
from treeguard.validation.report import (
    MISSING_ARRAY_REFERENCE_PREFIX,
    MISSING_REFERENCE_PREFIX,
    Diagnostic,
    Severity,
    ValidationReport,
)
from treeguard.validation.walker import TreeValidator

__all__ = [
    "ComponentValidator",
    "TypeInclusionPolicy",
    "Diagnostic",
    "Severity",
    "ValidationReport",
    "MISSING_REFERENCE_PREFIX",
    "MISSING_ARRAY_REFERENCE_PREFIX",
    "TreeValidator",
]
