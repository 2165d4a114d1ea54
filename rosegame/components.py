"""Entity components and their level-file representation."""

from __future__ import annotations

import random
from collections import deque
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from rosegame.inputkeys import InputKey, InputMouse


def new_guid() -> int:
    """A fresh random entity identifier (never -1)."""
    return random.getrandbits(63)


def _mapping(node: Any) -> Mapping:
    return node if isinstance(node, Mapping) else {}


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def _vec2(value: Any) -> tuple[float, float]:
    x, y = value
    return (float(x), float(y))


@dataclass(frozen=True)
class AnimationClip:
    """Frame durations, timed events and looping flag of an animation."""

    frame_durations: tuple[float, ...]
    events: tuple[tuple[float, str], ...] = ()
    is_looping: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "frame_durations", tuple(float(d) for d in self.frame_durations))
        object.__setattr__(self, "events", tuple((float(t), str(n)) for t, n in self.events))


@dataclass
class AnimationComponent:
    """Playback state of an animation on an entity."""

    animation: str = ""
    current_frame_time: float = field(default=0.0, init=False)
    current_frame: int = field(default=0, init=False)
    just_finished: bool = field(default=False, init=False)
    is_over: bool = field(default=False, init=False)
    next_event_index: int = field(default=0, init=False)
    current_animation_time: float = field(default=0.0, init=False)
    event_queue: deque = field(default_factory=deque, init=False, repr=False)

    def reset(self) -> None:
        self.current_frame = 0
        self.current_frame_time = 0.0
        self.just_finished = False
        self.is_over = False
        self.next_event_index = 0
        self.current_animation_time = 0.0
        self.event_queue.clear()

    def _advance(self, frame_count: int) -> None:
        self.current_frame_time = 0.0
        self.current_frame = (self.current_frame + 1) % frame_count

    def update(self, dt: float, clip: AnimationClip | None) -> None:
        """Advance playback by dt seconds through the given clip."""
        if clip is None or not clip.frame_durations:
            return
        frames = clip.frame_durations
        if self.current_frame >= len(frames):
            self.reset()
        self.current_frame_time += dt
        self.current_animation_time += dt
        while self.next_event_index < len(clip.events):
            event_time, event_name = clip.events[self.next_event_index]
            if self.current_animation_time < event_time:
                break
            self.event_queue.append(event_name)
            self.next_event_index += 1

        self.just_finished = False
        if self.current_frame_time >= frames[self.current_frame]:
            if self.current_frame < len(frames) - 1:
                self._advance(len(frames))
            else:
                if not self.is_over:
                    self.just_finished = True
                if clip.is_looping:
                    self._advance(len(frames))
                else:
                    self.is_over = True

    def is_event_queued(self) -> bool:
        return bool(self.event_queue)

    def pop_event(self) -> str:
        if not self.event_queue:
            raise IndexError("no animation event queued")
        return self.event_queue.popleft()

    def play(self, animation: str) -> None:
        self.animation = animation
        self.reset()

    def serialize(self) -> dict:
        return {"animation": self.animation}

    @classmethod
    def from_node(cls, node: Any) -> AnimationComponent:
        node = _mapping(node)
        return cls(animation=str(node.get("animation", "")))


@dataclass(eq=False)
class CameraComponent:
    """A camera looking at the world with a given view height."""

    height: float = 10.0
    start_camera: bool = False
    world_to_screen: np.ndarray = field(default_factory=lambda: np.identity(3), init=False, repr=False)
    cam_to_screen: np.ndarray = field(default_factory=lambda: np.identity(3), init=False, repr=False)

    def serialize(self) -> dict:
        node: dict = {"height": self.height}
        if self.start_camera:
            node["startCamera"] = self.start_camera
        return node

    @classmethod
    def from_node(cls, node: Any) -> CameraComponent:
        camera = cls()
        if isinstance(node, Mapping):
            if "height" in node:
                camera.height = float(node["height"])
            if "startCamera" in node:
                camera.start_camera = _to_bool(node["startCamera"])
        return camera


@dataclass
class DisableComponent:
    """Marks an entity as disabled by itself or by an ancestor."""

    self_disabled: bool = True
    parent_disabled: bool = False

    def serialize(self) -> dict:
        node: dict = {}
        if self.self_disabled:
            node["selfDisabled"] = True
        if self.parent_disabled:
            node["parentDisabled"] = True
        return node

    @classmethod
    def from_node(cls, node: Any) -> DisableComponent:
        component = cls(self_disabled=False, parent_disabled=False)
        if isinstance(node, Mapping):
            if "selfDisabled" in node:
                component.self_disabled = _to_bool(node["selfDisabled"])
            if "parentDisabled" in node:
                component.parent_disabled = _to_bool(node["parentDisabled"])
        return component


@dataclass
class GUIDComponent:
    """Identity, name and parent link of an entity."""

    name: str = ""
    id: int = field(default_factory=new_guid)
    parent_id: int = -1
    parent: Hashable | None = None

    def serialize(self) -> dict:
        return {"name": self.name, "id": self.id, "parentId": self.parent_id}

    @classmethod
    def from_node(cls, node: Any) -> GUIDComponent:
        node = _mapping(node)
        component = cls(name="New Entity")
        if "name" in node:
            component.name = str(node["name"])
        if "id" in node:
            component.id = int(node["id"])
        if "parentId" in node:
            component.parent_id = int(node["parentId"])
        return component


@dataclass
class HitBoxComponent:
    """An area that deals hits to hurt boxes of other factions."""

    faction: int = 0

    def serialize(self) -> dict:
        return {"faction": self.faction}

    @classmethod
    def from_node(cls, node: Any) -> HitBoxComponent:
        return cls(faction=int(_mapping(node).get("faction", 0)))


@dataclass
class HurtBoxComponent:
    """An area that receives hits from hit boxes of other factions."""

    faction: int = 0

    def serialize(self) -> dict:
        return {"faction": self.faction}

    @classmethod
    def from_node(cls, node: Any) -> HurtBoxComponent:
        return cls(faction=int(_mapping(node).get("faction", 0)))


@dataclass
class InputComponent:
    """Keys and mouse buttons whose presses are sent to the entity."""

    input_keys: set[InputKey] = field(default_factory=set)
    input_mouse_buttons: set[InputMouse] = field(default_factory=set)

    def serialize(self) -> dict:
        return {
            "inputKeys": sorted(int(k) for k in self.input_keys),
            "inputMouseButtons": sorted(int(b) for b in self.input_mouse_buttons),
        }

    @classmethod
    def from_node(cls, node: Any) -> InputComponent:
        node = _mapping(node)
        keys = {InputKey(int(k)) for k in node.get("inputKeys") or ()}
        buttons = {InputMouse(int(b)) for b in node.get("inputMouseButtons") or ()}
        return cls(input_keys=keys, input_mouse_buttons=buttons)


@dataclass
class PhysicsBodyComponent:
    """A box-shaped physics body attached to an entity."""

    size: tuple[float, float] = (1.0, 1.0)
    is_static: bool = False
    is_sensor: bool = False
    use_gravity: bool = True
    global_size: tuple[float, float] = field(default=(0.0, 0.0), init=False)
    body: Any = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.size = _vec2(self.size)

    def serialize(self) -> dict:
        return {
            "size": list(self.size),
            "isStatic": self.is_static,
            "isSensor": self.is_sensor,
            "useGravity": self.use_gravity,
        }

    @classmethod
    def from_node(cls, node: Any) -> PhysicsBodyComponent:
        node = _mapping(node)
        component = cls()
        if "size" in node:
            component.size = _vec2(node["size"])
        if "isStatic" in node:
            component.is_static = _to_bool(node["isStatic"])
        if "isSensor" in node:
            component.is_sensor = _to_bool(node["isSensor"])
        if "useGravity" in node:
            component.use_gravity = _to_bool(node["useGravity"])
        return component


@dataclass
class ScriptComponent:
    """Names of the scripts run by an entity."""

    scripts: set[str] = field(default_factory=set)

    def serialize(self) -> dict:
        return {"scripts": sorted(self.scripts)}

    @classmethod
    def from_node(cls, node: Any) -> ScriptComponent:
        scripts = _mapping(node).get("scripts")
        if isinstance(scripts, (list, tuple)):
            return cls(scripts={str(s) for s in scripts})
        return cls()


@dataclass
class SendEventsToParentComponent:
    """Forwards an entity's events to its parent's scripts."""

    def serialize(self) -> list:
        return []

    @classmethod
    def from_node(cls, node: Any) -> SendEventsToParentComponent:
        return cls()


@dataclass
class SpriteComponent:
    """A textured sprite drawn on a layer with a tint colour."""

    sprite: str = "block"
    layer: int = 0
    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    source_rect: tuple[int, int, int, int] | None = field(default=None, init=False)
    dest_rect: tuple[float, float, float, float] = field(default=(0.0, 0.0, 0.0, 0.0), init=False)

    def __post_init__(self) -> None:
        self.color = tuple(float(c) for c in self.color)

    def serialize(self) -> dict:
        return {"sprite": self.sprite, "layer": self.layer, "color": list(self.color)}

    @classmethod
    def from_node(cls, node: Any) -> SpriteComponent:
        component = cls(sprite="")
        if isinstance(node, Mapping):
            if "sprite" in node:
                component.sprite = str(node["sprite"])
            if "layer" in node:
                component.layer = int(node["layer"])
            if "color" in node:
                color = node["color"]
                component.color = tuple(float(color[i]) for i in range(4))
        return component