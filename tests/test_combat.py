import pytest

from rosegame.collision import Contact, ContactListener, PhysicsEvent
from rosegame.combat import CombatSystem
from rosegame.components import HitBoxComponent, HurtBoxComponent
from rosegame.events import EntityEventSystem
from rosegame.registry import Registry


@pytest.fixture
def world():
    registry = Registry()
    events = EntityEventSystem(registry)
    return registry, events


def fighters(registry, hit_faction, hurt_faction):
    attacker = registry.create()
    registry.emplace(attacker, HitBoxComponent(faction=hit_faction))
    victim = registry.create()
    registry.emplace(victim, HurtBoxComponent(faction=hurt_faction))
    return attacker, victim


def test_hit_on_other_faction(world):
    registry, events = world
    combat = CombatSystem(registry, events)
    attacker, victim = fighters(registry, 0, 1)
    combat.on_physics_event(PhysicsEvent(Contact(attacker, victim), True))
    assert [(e.entity, e.name) for e in events.pending] == [(victim, "Hit")]


def test_no_hit_on_same_faction(world):
    registry, events = world
    combat = CombatSystem(registry, events)
    attacker, victim = fighters(registry, 2, 2)
    combat.on_physics_event(PhysicsEvent(Contact(attacker, victim), True))
    assert list(events.pending) == []


def test_no_hit_when_contact_ends(world):
    registry, events = world
    combat = CombatSystem(registry, events)
    attacker, victim = fighters(registry, 0, 1)
    combat.on_physics_event(PhysicsEvent(Contact(attacker, victim), False))
    assert list(events.pending) == []


def test_hit_through_listener_either_order(world):
    registry, events = world
    listener = ContactListener(events)
    CombatSystem(registry, events, listener)
    attacker, victim = fighters(registry, 0, 1)
    listener.begin_contact(Contact(victim, attacker))
    assert [(e.entity, e.name) for e in events.pending] == [(victim, "Hit")]