"""The parent/child hierarchy of entities in a level."""

from __future__ import annotations

from collections.abc import Hashable

from rosegame.components import GUIDComponent
from rosegame.registry import Registry


class Node:
    """A tree node holding an entity, linked to its parent and children."""

    __slots__ = ("element", "parent", "_children")

    def __init__(self, element: Hashable | None, parent: Node | None = None) -> None:
        self.element = element
        self.parent: Node | None = None
        self._children: dict[Node, None] = {}
        if parent is not None:
            parent.add_child(self)

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    def add_child(self, node: Node) -> None:
        """Adopt a node, detaching it from its former parent."""
        if node.parent is not None and node.parent is not self:
            node.parent.remove_child(node)
        node.parent = self
        self._children[node] = None

    def remove_child(self, node: Node) -> None:
        if node in self._children:
            del self._children[node]
            node.parent = None

    def delete_children(self) -> None:
        """Drop the whole subtree below this node."""
        for child in list(self._children):
            child.delete_children()
            child.parent = None
        self._children.clear()

    def __repr__(self) -> str:
        return f"Node({self.element!r})"


class LevelTree:
    """Keeps entities arranged under a root, mirroring their GUID parent links."""

    def __init__(self, registry: Registry, root_entity: Hashable | None = None) -> None:
        self._registry = registry
        self.root = Node(root_entity)
        self._nodes: dict[Hashable | None, Node] = {self.root.element: self.root}

    def add_entity(self, entity: Hashable, parent: Node | None = None) -> Node:
        node = Node(entity, parent if parent is not None else self.root)
        self._nodes[entity] = node
        return node

    def remove_entity(self, entity: Hashable) -> None:
        node = self._nodes.pop(entity)
        if node.parent is not None:
            node.parent.remove_child(node)

    def remove_parent(self, entity: Hashable) -> None:
        """Move the entity back under the root and clear its parent link."""
        guid = self._registry.get(entity, GUIDComponent)
        if guid.parent is not None:
            guid.parent = None
            guid.parent_id = -1
            self.root.add_child(self._nodes[entity])
            self._registry.patch(entity, GUIDComponent)

    def try_set_parent(self, child: Hashable, parent: Hashable | None) -> bool:
        """Reparent child under parent; False if that would make a cycle."""
        if child == parent or self.is_child_of(child, parent):
            return False
        guid = self._registry.get(child, GUIDComponent)
        if guid.parent is not None:
            self.remove_parent(child)
        guid.parent = parent
        guid.parent_id = -1 if parent is None else self._registry.get(parent, GUIDComponent).id
        self._nodes[parent].add_child(self._nodes[child])
        self._registry.patch(child, GUIDComponent)
        return True

    def is_child_of(self, entity: Hashable | None, child: Hashable | None) -> bool:
        """Whether child lies anywhere below entity."""
        node = self._nodes[entity]
        child_node = self._nodes[child]
        stack = list(node.children)
        while stack:
            current = stack.pop()
            if current is child_node:
                return True
            stack.extend(current.children)
        return False

    def clear(self) -> None:
        self.root.delete_children()
        self._nodes = {self.root.element: self.root}

    def get_child(self, entity: Hashable, name: str) -> Hashable | None:
        """The direct child of entity with the given name, or None."""
        if not self._registry.valid(entity) or entity not in self._nodes:
            return None
        for child in self._nodes[entity].children:
            if not self._registry.valid(child.element):
                continue
            if self._registry.get(child.element, GUIDComponent).name == name:
                return child.element
        return None

    def find_entity(self, name: str) -> Hashable | None:
        """A top-level entity with the given name, or None."""
        for child in self.root.children:
            if self._registry.get(child.element, GUIDComponent).name == name:
                return child.element
        return None

    def get_node(self, entity: Hashable | None) -> Node | None:
        return self._nodes.get(entity)