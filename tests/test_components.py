import pytest

from rosegame.components import (
    AnimationClip,
    AnimationComponent,
    CameraComponent,
    DisableComponent,
    GUIDComponent,
    HitBoxComponent,
    HurtBoxComponent,
    InputComponent,
    PhysicsBodyComponent,
    ScriptComponent,
    SendEventsToParentComponent,
    SpriteComponent,
    new_guid,
)
from rosegame.inputkeys import InputKey, InputMouse


def test_new_guid_is_distinct_and_not_sentinel():
    ids = {new_guid() for _ in range(100)}
    assert len(ids) == 100
    assert -1 not in ids


def test_animation_event_fires_when_time_reached():
    clip = AnimationClip(frame_durations=(0.5, 0.5), events=[(0.2, "step")])
    anim = AnimationComponent("walk")
    anim.update(0.1, clip)
    assert not anim.is_event_queued()
    anim.update(0.15, clip)
    assert anim.is_event_queued()
    assert anim.pop_event() == "step"
    assert not anim.is_event_queued()


def test_pop_event_on_empty_queue_raises():
    with pytest.raises(IndexError):
        AnimationComponent("idle").pop_event()


def test_animation_advances_frames():
    clip = AnimationClip(frame_durations=(0.5, 0.5, 0.5))
    anim = AnimationComponent("walk")
    anim.update(0.6, clip)
    assert anim.current_frame == 1
    assert anim.current_frame_time == 0.0


def test_non_looping_animation_finishes_once():
    clip = AnimationClip(frame_durations=(0.5,), is_looping=False)
    anim = AnimationComponent("die")
    anim.update(0.6, clip)
    assert anim.just_finished and anim.is_over
    anim.update(0.6, clip)
    assert not anim.just_finished
    assert anim.is_over


def test_looping_animation_wraps():
    clip = AnimationClip(frame_durations=(0.5, 0.5), is_looping=True)
    anim = AnimationComponent("run")
    anim.update(0.6, clip)
    anim.update(0.6, clip)
    assert anim.just_finished
    assert anim.current_frame == 0
    assert not anim.is_over


def test_update_without_clip_changes_nothing():
    anim = AnimationComponent("missing")
    anim.update(1.0, None)
    assert anim.current_animation_time == 0.0


def test_play_resets_state():
    clip = AnimationClip(frame_durations=(0.5, 0.5), events=[(0.0, "start")])
    anim = AnimationComponent("walk")
    anim.update(0.6, clip)
    anim.play("jump")
    assert anim.animation == "jump"
    assert anim.current_frame == 0
    assert not anim.is_event_queued()


def test_animation_round_trip():
    anim = AnimationComponent.from_node(AnimationComponent("walk").serialize())
    assert anim.animation == "walk"
    assert AnimationComponent.from_node({}).animation == ""


def test_camera_defaults_and_serialize():
    cam = CameraComponent()
    assert cam.height == 10
    assert "startCamera" not in cam.serialize()


def test_camera_round_trip():
    cam = CameraComponent(height=7.5, start_camera=True)
    back = CameraComponent.from_node(cam.serialize())
    assert back.height == 7.5
    assert back.start_camera is True


def test_disable_defaults():
    assert DisableComponent().self_disabled is True
    loaded = DisableComponent.from_node({})
    assert (loaded.self_disabled, loaded.parent_disabled) == (False, False)
    assert loaded.serialize() == {}


def test_disable_round_trip():
    comp = DisableComponent(self_disabled=False, parent_disabled=True)
    assert DisableComponent.from_node(comp.serialize()) == comp


def test_guid_from_node_defaults():
    comp = GUIDComponent.from_node({})
    assert comp.name == "New Entity"
    assert comp.parent_id == -1


def test_guid_round_trip():
    comp = GUIDComponent(name="player", parent_id=42)
    back = GUIDComponent.from_node(comp.serialize())
    assert (back.name, back.id, back.parent_id) == ("player", comp.id, 42)


def test_hit_and_hurt_box_round_trip():
    assert HitBoxComponent.from_node(HitBoxComponent(3).serialize()).faction == 3
    assert HurtBoxComponent.from_node(HurtBoxComponent(2).serialize()).faction == 2
    assert HitBoxComponent.from_node({}).faction == 0


def test_input_round_trip():
    comp = InputComponent({InputKey.W, InputKey.A}, {InputMouse.RIGHT_BUTTON})
    node = comp.serialize()
    assert node["inputKeys"] == sorted([int(InputKey.W), int(InputKey.A)])
    assert InputComponent.from_node(node) == comp


def test_physics_body_defaults_and_round_trip():
    default = PhysicsBodyComponent.from_node({})
    assert default.size == (1.0, 1.0)
    assert default.use_gravity is True
    comp = PhysicsBodyComponent(size=(2, 3), is_static=True, use_gravity=False)
    back = PhysicsBodyComponent.from_node(comp.serialize())
    assert back.size == (2.0, 3.0)
    assert back.is_static and not back.use_gravity


def test_script_round_trip_and_non_sequence():
    comp = ScriptComponent({"orb", "spawner"})
    assert ScriptComponent.from_node(comp.serialize()).scripts == {"orb", "spawner"}
    assert ScriptComponent.from_node({"scripts": "orb"}).scripts == set()


def test_send_events_serializes_empty_sequence():
    assert SendEventsToParentComponent().serialize() == []
    assert SendEventsToParentComponent.from_node(None) == SendEventsToParentComponent()


def test_sprite_defaults_and_round_trip():
    assert SpriteComponent().sprite == "block"
    assert SpriteComponent.from_node({}).sprite == ""
    comp = SpriteComponent("hero", 2, (0.5, 0.25, 1, 1))
    back = SpriteComponent.from_node(comp.serialize())
    assert (back.sprite, back.layer, back.color) == ("hero", 2, (0.5, 0.25, 1.0, 1.0))
    assert back.source_rect is None