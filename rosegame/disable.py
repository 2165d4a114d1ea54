"""Propagates disabling of entities down the hierarchy."""

from __future__ import annotations

from rosegame.components import DisableComponent, GUIDComponent
from rosegame.entity import EntitySystem
from rosegame.registry import Registry


class DisableSystem:
    """Keeps DisableComponent on an entity's descendants in step with the entity's own."""

    def __init__(self, entities: EntitySystem) -> None:
        self._registry = entities.registry
        self._tree = entities.level_tree
        self._registry.on_construct(DisableComponent).connect(self._disable_created)
        self._registry.on_destroy(DisableComponent).connect(self._disable_destroyed)
        self._registry.on_update(GUIDComponent).connect(self._parent_updated)

    def enable(self, entity: int) -> None:
        """Clear the entity's own disable; it stays disabled if an ancestor is."""
        disable = self._registry.try_get(entity, DisableComponent)
        if disable is not None:
            disable.self_disabled = False
            if not disable.parent_disabled:
                self._registry.remove(entity, DisableComponent)

    def disable(self, entity: int) -> None:
        self._registry.get_or_emplace(entity, DisableComponent).self_disabled = True

    def _disable_created(self, registry: Registry, entity: int) -> None:
        node = self._tree.get_node(entity)
        if node is not None:
            for child in node.children:
                self._disable_child(child.element)

    def _disable_destroyed(self, registry: Registry, entity: int) -> None:
        node = self._tree.get_node(entity)
        if node is None:
            return
        for child in node.children:
            disable = self._registry.try_get(child.element, DisableComponent)
            if disable is not None and not disable.self_disabled:
                self._registry.remove(child.element, DisableComponent)

    def _parent_updated(self, registry: Registry, entity: int) -> None:
        parent = registry.get(entity, GUIDComponent).parent
        if parent is not None and registry.has(parent, DisableComponent):
            self._disable_child(entity)
        else:
            disable = registry.try_get(entity, DisableComponent)
            if disable is not None and not disable.self_disabled:
                disable.parent_disabled = False
                self.enable(entity)

    def _disable_child(self, child: int) -> None:
        self._registry.get_or_emplace(child, DisableComponent, False, True).parent_disabled = True