"""
Input handler with action-based abstraction.

Translates raw pygame keyboard events into semantic Actions.
The game is turn-driven, so the handler reports discrete key
presses in arrival order; each one is handled to completion
before the next is looked at.

Usage:
    for action in input.poll(pygame.event.get()):
        session.handle_action(action)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

import pygame

from engine.core.actions import Action, DEFAULT_KEY_BINDINGS
from engine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    ACTION_PRESSED = "input.action_pressed"


@dataclass
class InputState:
    """Keyboard state tracked between polls."""
    keys_pressed: set[int] = field(default_factory=set)
    actions_pressed: set[Action] = field(default_factory=set)


class InputHandler:
    """
    Handles keyboard input processing.

    Translates raw pygame events into semantic Actions.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus

        self._state = InputState()

        # Key bindings (action -> list of keys)
        self._key_bindings = {
            action: list(keys) for action, keys in DEFAULT_KEY_BINDINGS.items()
        }
        self._reverse_key_bindings: dict[int, list[Action]] = {}
        self._rebuild_reverse_bindings()

    def _rebuild_reverse_bindings(self) -> None:
        """Build reverse lookup: key -> actions."""
        self._reverse_key_bindings.clear()
        for action, keys in self._key_bindings.items():
            for key in keys:
                if key not in self._reverse_key_bindings:
                    self._reverse_key_bindings[key] = []
                self._reverse_key_bindings[key].append(action)

    # Public API

    def is_action_pressed(self, action: Action) -> bool:
        """Check if an action is currently held down."""
        return action in self._state.actions_pressed

    def actions_for_key(self, key: int) -> list[Action]:
        """Actions bound to a raw key, in binding order."""
        return list(self._reverse_key_bindings.get(key, []))

    # Key binding management

    def bind_key(self, action: Action, key: int) -> None:
        """Add a key binding for an action."""
        if action not in self._key_bindings:
            self._key_bindings[action] = []
        if key not in self._key_bindings[action]:
            self._key_bindings[action].append(key)
        self._rebuild_reverse_bindings()

    def unbind_key(self, action: Action, key: int) -> None:
        """Remove a key binding for an action."""
        if action in self._key_bindings:
            if key in self._key_bindings[action]:
                self._key_bindings[action].remove(key)
        self._rebuild_reverse_bindings()

    def get_bindings(self, action: Action) -> list[int]:
        """Get all key bindings for an action."""
        return self._key_bindings.get(action, []).copy()

    # Event processing

    def process_event(self, event: pygame.event.Event) -> list[Action]:
        """
        Process a pygame event.

        Returns:
            Actions newly pressed by this event (empty for anything
            other than a key press)
        """
        if event.type == pygame.KEYDOWN:
            return self._on_key_down(event.key)

        if event.type == pygame.KEYUP:
            self._on_key_up(event.key)

        return []

    def poll(self, events: Iterable[pygame.event.Event]) -> list[Action]:
        """Process a batch of events and return pressed actions in order."""
        pressed: list[Action] = []
        for event in events:
            pressed.extend(self.process_event(event))
        return pressed

    def _on_key_down(self, key: int) -> list[Action]:
        """Handle key press."""
        self._state.keys_pressed.add(key)

        actions = self.actions_for_key(key)
        for action in actions:
            self._state.actions_pressed.add(action)
            if self.event_bus:
                self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)
        return actions

    def _on_key_up(self, key: int) -> None:
        """Handle key release."""
        self._state.keys_pressed.discard(key)

        # Unmap from actions (only if no other keys for that action are pressed)
        for action in self._reverse_key_bindings.get(key, []):
            still_pressed = any(
                other_key != key and other_key in self._state.keys_pressed
                for other_key in self._key_bindings.get(action, [])
            )
            if not still_pressed:
                self._state.actions_pressed.discard(action)
