import numpy as np
import pytest

from rosegame.components import GUIDComponent, HitBoxComponent, InputComponent
from rosegame.entity import EntitySystem, deserialize_components
from rosegame.inputkeys import InputKey
from rosegame.registry import Registry
from rosegame.transform import TransformComponent


@pytest.fixture
def entities():
    return EntitySystem()


def test_create_entity_round_trips_guid(entities):
    e = entities.create_entity()
    guid = entities.registry.get(e, GUIDComponent).id
    assert entities.get_entity(guid) == e
    assert entities.get_entity_guid(e) == guid
    assert entities.guid_exists(guid)
    assert entities.level_tree.get_node(e).parent is entities.level_tree.root


def test_no_entity_sentinels(entities):
    assert entities.get_entity(-1) is None
    assert entities.get_entity_guid(None) == -1
    assert not entities.guid_exists(-1)


def test_deserialize_entity_with_guid(entities):
    node = {
        "Type": "Entity",
        "Guid": {"name": "Player", "id": 42, "parentId": -1},
        "Transform": {"position": [1.5, -2.0], "scale": [1, 1], "rotation": 0},
    }
    e = entities.deserialize_entity(node)
    guid = entities.registry.get(e, GUIDComponent)
    assert guid.name == "Player"
    assert guid.id == 42
    assert entities.get_entity(42) == e
    trx = entities.registry.get(e, TransformComponent)
    assert np.allclose(trx.position, [1.5, -2.0])


def test_deserialize_entity_links_parent(entities):
    parent = entities.deserialize_entity({"Guid": {"name": "p", "id": 7}})
    child = entities.deserialize_entity({"Guid": {"name": "c", "id": 8, "parentId": 7}})
    guid = entities.registry.get(child, GUIDComponent)
    assert guid.parent == parent
    assert entities.level_tree.get_node(child).parent is entities.level_tree.get_node(parent)


def test_deserialize_entity_without_guid(entities):
    e = entities.deserialize_entity({"HitBox": {"faction": 2}})
    guid = entities.registry.get(e, GUIDComponent).id
    assert entities.get_entity(guid) == e
    assert entities.registry.get(e, HitBoxComponent).faction == 2


def test_deserialize_components_only_present():
    registry = Registry()
    e = registry.create()
    deserialize_components({"Input": {"inputKeys": [int(InputKey.W)]}}, registry, e)
    assert registry.get(e, InputComponent).input_keys == {InputKey.W}
    assert not registry.has(e, HitBoxComponent)
    assert not registry.has(e, TransformComponent)


def test_copy_entity_is_deep(entities):
    src = entities.create_entity()
    entities.registry.get(src, GUIDComponent).name = "orig"
    entities.registry.emplace(src, InputComponent(input_keys={InputKey.A}))
    dup = entities.copy_entity(src)
    assert dup != src
    assert entities.registry.get(dup, GUIDComponent).name == "orig"
    assert entities.registry.get(dup, GUIDComponent).id != entities.registry.get(src, GUIDComponent).id
    entities.registry.get(dup, InputComponent).input_keys.add(InputKey.D)
    assert entities.registry.get(src, InputComponent).input_keys == {InputKey.A}


def test_copy_entity_copies_children(entities):
    src = entities.create_entity()
    child = entities.create_entity()
    entities.registry.get(child, GUIDComponent).name = "kid"
    entities.level_tree.try_set_parent(child, src)
    dup = entities.copy_entity(src)
    copied = entities.level_tree.get_child(dup, "kid")
    assert copied is not None and copied != child
    assert entities.registry.get(copied, GUIDComponent).parent == dup


def test_destroy_entity_removes_subtree(entities):
    parent = entities.create_entity()
    child = entities.create_entity()
    entities.level_tree.try_set_parent(child, parent)
    child_guid = entities.get_entity_guid(child)
    entities.destroy_entity(parent)
    assert not entities.entity_exists(parent)
    assert not entities.entity_exists(child)
    assert not entities.guid_exists(child_guid)
    assert entities.level_tree.get_node(child) is None


def test_destroy_all_entities(entities):
    made = [entities.create_entity() for _ in range(3)]
    entities.destroy_all_entities()
    assert not any(entities.entity_exists(e) for e in made)
    assert entities.level_tree.root.children == ()