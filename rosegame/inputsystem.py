"""Keyboard and mouse state tracking, turned into events for listening entities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

import numpy as np

from rosegame.components import DisableComponent, InputComponent
from rosegame.events import EntityEvent, EntityEventSystem
from rosegame.inputkeys import InputKey, InputMouse, key_name, mouse_button_name
from rosegame.registry import Registry


@dataclass
class KeyData:
    """Whether a key is held, and whether it changed this frame."""

    just_pressed: bool = False
    just_released: bool = False
    is_pressed: bool = False

    def advance(self, pressed: bool) -> None:
        """Move to the next frame given whether the key is down now."""
        if pressed:
            if self.is_pressed:
                self.just_pressed = False
            else:
                self.is_pressed = True
                self.just_pressed = True
                self.just_released = False
        elif self.is_pressed:
            self.is_pressed = False
            self.just_released = True
            self.just_pressed = False
        else:
            self.just_released = False


class InputSystem:
    """Tracks key and mouse state and queues press and release events."""

    def __init__(self, registry: Registry, events: EntityEventSystem) -> None:
        self._registry = registry
        self._events = events
        self._keys = {key: KeyData() for key in InputKey}
        self._mouse = {button: KeyData() for button in InputMouse}
        self.mouse_position = np.zeros(2)

    def update(
        self,
        pressed_keys: Iterable[int] = (),
        mouse_buttons: Iterable[int] = (),
        mouse_position=(0.0, 0.0),
    ) -> None:
        """Take this frame's input state and notify entities listening to it."""
        down_keys = {InputKey(k) for k in pressed_keys}
        down_buttons = {InputMouse(b) for b in mouse_buttons}
        for key, data in self._keys.items():
            data.advance(key in down_keys)
        for button, data in self._mouse.items():
            data.advance(button in down_buttons)
        self.mouse_position = np.array([float(mouse_position[0]), float(mouse_position[1])])

        for entity in self._registry.view(InputComponent, exclude=(DisableComponent,)):
            component = self._registry.get(entity, InputComponent)
            for key in sorted(component.input_keys):
                data = self._keys[key]
                if data.just_pressed:
                    self._queue(entity, "KeyPressed", key_name(key))
                if data.just_released:
                    self._queue(entity, "KeyReleased", key_name(key))
            for button in sorted(component.input_mouse_buttons):
                data = self._mouse[button]
                if data.just_pressed:
                    self._queue(entity, "MousePressed", mouse_button_name(button))
                if data.just_released:
                    self._queue(entity, "MouseReleased", mouse_button_name(button))

    def _queue(self, entity: int, name: str, input_key: str) -> None:
        self._events.queue_event(EntityEvent(entity, name, input_key=input_key))

    def get_key(self, key: int) -> KeyData:
        """State of a key; raises ValueError for an unknown key."""
        return replace(self._keys[InputKey(key)])

    def get_mouse_button(self, button: int) -> KeyData:
        """State of a mouse button; raises ValueError for an unknown button."""
        return replace(self._mouse[InputMouse(button)])