"""
treeguard - Detects unset required object references in trees of nodes

treeguard walks a tree of nodes, inspects the components attached to each
node and reports reference fields that are required but left unset.
"""

from importlib.metadata import version

from treeguard.config import ValidationSettings
from treeguard.core.objects import Component, Composite, Node, Tree
from treeguard.metadata.fields import OptionalRef
from treeguard.validation.report import Severity, ValidationReport
from treeguard.validation.walker import TreeValidator

__version__ = version("treeguard")

__all__ = [
    "__version__",
    "Component",
    "Composite",
    "Node",
    "Tree",
    "OptionalRef",
    "Severity",
    "TreeValidator",
    "ValidationReport",
    "ValidationSettings",
]
