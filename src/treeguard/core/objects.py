"""
Host object model for treeguard.

This module contains the objects the validator reads: trees of nodes, the
components attached to nodes, and the composite value types components may
declare as fields. The validator never creates or destroys any of these; the
host (application or tests) owns their lifecycle.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr


class HostObject:
    """
    Base class for every object a reference field can point at.

    A host object may be destroyed while other objects still hold references
    to it. Destroyed objects compare as unset references during validation.
    """

    @property
    def is_destroyed(self) -> bool:
        return False


def is_alive(obj: Any) -> bool:
    """Return True if `obj` is set and has not been destroyed."""
    return obj is not None and not getattr(obj, "is_destroyed", False)


class Node(HostObject):
    """Entry in an object tree that owns child nodes and attached components.

    Children are owned by their parent; `parent` is a non-owning back
    reference used for hierarchy queries only. Entries in `components` may be
    `None` when a component failed to materialize.
    """

    def __init__(self, name: str, active: bool = True):
        self.name = name
        self.active = active
        self.parent: Node | None = None
        self.children: list[Node] = []
        self.components: list[Component | None] = []
        self._tree: Tree | None = None
        self._destroyed = False

    def __repr__(self) -> str:
        return f"Node({self.name!r})"

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def active_in_hierarchy(self) -> bool:
        """True if this node and all of its ancestors are active."""
        node = self
        while node is not None:
            if not node.active:
                return False
            node = node.parent
        return True

    @property
    def tree(self) -> "Tree | None":
        """The tree this node's hierarchy was added to, if any."""
        root = self
        while root.parent is not None:
            root = root.parent
        return root._tree

    def add_child(self, child: "Node") -> "Node":
        """Append `child` as the last child of this node and return it.

        Raises:
            ValueError: If `child` already has a parent.
        """
        if child.parent is not None:
            raise ValueError(
                f"Node '{child.name}' already has parent '{child.parent.name}'"
            )
        child.parent = self
        self.children.append(child)
        return child

    def child_at(self, index: int) -> "Node | None":
        """Return the child at `index`, or None if it no longer exists."""
        if 0 <= index < len(self.children):
            return self.children[index]
        return None

    def add_component(self, component: "Component") -> "Component":
        """Attach `component` to this node and return it."""
        component._node = self
        self.components.append(component)
        return component

    def add_missing_component(self) -> None:
        """Attach a placeholder for a component that failed to materialize."""
        self.components.append(None)

    def get_components(self, buffer: list) -> list:
        """Clear `buffer`, fill it with this node's components and return it."""
        buffer.clear()
        buffer.extend(self.components)
        return buffer

    def destroy(self) -> None:
        """Destroy this node and its whole subtree, detaching it from its parent."""
        if self.parent is not None:
            if self in self.parent.children:
                self.parent.children.remove(self)
            self.parent = None
        elif self._tree is not None:
            self._tree._remove_root(self)
        self._mark_destroyed()

    def _mark_destroyed(self) -> None:
        self._destroyed = True
        for child in self.children:
            child._mark_destroyed()


class Component(HostObject, BaseModel):
    """
    Unit of behaviour and data attached to a node.

    Subclasses declare their data as pydantic fields. Fields annotated with a
    HostObject subclass (a Node or another Component) are object references;
    fields annotated with a Composite (or dataclass/attrs class) are nested
    values whose own fields are serialized and validated in turn.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    _node: Node | None = PrivateAttr(default=None)
    _destroyed: bool = PrivateAttr(default=False)

    @property
    def node(self) -> Node | None:
        return self._node

    @property
    def name(self) -> str:
        """Components share the name of the node they are attached to."""
        return self._node.name if self._node is not None else ""

    @property
    def tree_name(self) -> str:
        tree = self._node.tree if self._node is not None else None
        return tree.name if tree is not None else ""

    @property
    def is_destroyed(self) -> bool:
        if self._destroyed:
            return True
        return self._node is not None and self._node.is_destroyed

    def destroy(self) -> None:
        """Destroy this component and detach it from its node."""
        if self._node is not None:
            # Identity match; pydantic equality compares field values.
            self._node.components[:] = [
                c for c in self._node.components if c is not self
            ]
        self._destroyed = True


class Composite(BaseModel):
    """Base class for nested value types declared as component fields."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


class Tree:
    """A named collection of root nodes, such as one loaded scene or document.

    An unnamed tree has an empty name. Trees that are not loaded cannot be
    validated.
    """

    def __init__(self, name: str = "", is_loaded: bool = True):
        self.name = name
        self.is_loaded = is_loaded
        self._roots: list[Node] = []

    def __repr__(self) -> str:
        return f"Tree({self.name!r})"

    @property
    def roots(self) -> tuple[Node, ...]:
        return tuple(self._roots)

    def add_root(self, node: Node) -> Node:
        """Add `node` as a root of this tree and return it.

        Raises:
            ValueError: If `node` has a parent.
        """
        if node.parent is not None:
            raise ValueError(f"Node '{node.name}' has a parent and cannot be a root")
        node._tree = self
        self._roots.append(node)
        return node

    def get_root_nodes(self, buffer: list) -> list:
        """Clear `buffer`, fill it with the root nodes and return it."""
        buffer.clear()
        buffer.extend(self._roots)
        return buffer

    def _remove_root(self, node: Node) -> None:
        if node in self._roots:
            self._roots.remove(node)
