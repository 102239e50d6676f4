"""
Tree traversal driving component validation.
"""

import logging

from treeguard.config import ValidationSettings, create_validation_settings
from treeguard.core.objects import Component, Node, Tree
from treeguard.exceptions import TreeUnavailableError
from treeguard.metadata.fields import TypeMetadataProvider
from treeguard.metadata.resolver import MAX_RESOLUTION_DEPTH
from treeguard.validation.component import ComponentValidator
from treeguard.validation.policy import TypeInclusionPolicy
from treeguard.validation.report import ValidationReport, tree_name_or_unknown

logger = logging.getLogger(__name__)


class TreeValidator:
    """Checks a tree for designer errors such as unassigned required references.

    The validator owns one ValidationReport and two scratch buffers that are
    cleared and refilled on every run. The returned report is therefore only
    valid until the next run, and one instance must not be used by
    concurrent runs; use one validator per concurrent run instead.
    """

    def __init__(
        self,
        settings: ValidationSettings | dict | None = None,
        metadata: TypeMetadataProvider | None = None,
        max_depth: int = MAX_RESOLUTION_DEPTH,
    ):
        self.settings = create_validation_settings(settings)
        self.policy = TypeInclusionPolicy(self.settings)
        self.component_validator = ComponentValidator(self.policy, metadata, max_depth)
        self._report = ValidationReport()
        self._root_nodes: list[Node] = []
        self._components: list[Component | None] = []

    def create_validation_report(self, tree: Tree) -> ValidationReport:
        """
        Validate every node of `tree` and return the populated report.

        Nodes are visited depth-first, each node before its children, with
        children taken in reverse index order. Destroyed nodes are skipped
        together with their subtree, as are inactive nodes unless inactive
        nodes are configured to be validated.

        Params:
            tree: The tree to validate

        Returns:
            The validator's report, cleared and refilled for this run

        Raises:
            TreeUnavailableError: If the tree is not loaded
        """
        if not tree.is_loaded:
            raise TreeUnavailableError(tree.name, "tree is not loaded")

        report = self._report
        report.clear()

        tree.get_root_nodes(self._root_nodes)
        validate_inactive_nodes = self.settings.validate_inactive_nodes

        for root in self._root_nodes:
            self._process_hierarchy(root, report, validate_inactive_nodes)

        logger.debug(
            "Validated tree %s: %d diagnostic(s)",
            tree_name_or_unknown(tree.name),
            len(report),
        )
        return report

    def _process_hierarchy(
        self, node: Node | None, report: ValidationReport, validate_inactive_nodes: bool
    ) -> None:
        # Nodes may be destroyed while the tree is being processed.
        if node is None or node.is_destroyed:
            return
        if not validate_inactive_nodes and not node.active_in_hierarchy:
            return

        self._process_node(node, report)

        for index in range(len(node.children) - 1, -1, -1):
            self._process_hierarchy(node.child_at(index), report, validate_inactive_nodes)

    def _process_node(self, node: Node, report: ValidationReport) -> None:
        node.get_components(self._components)
        for component in self._components:
            self.component_validator.validate_component(component, node, report)
