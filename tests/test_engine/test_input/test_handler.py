import pytest
from types import SimpleNamespace
from engine.input.handler import InputHandler, InputEvent
from engine.core.actions import Action
import pygame


def key_down(key):
    return SimpleNamespace(type=pygame.KEYDOWN, key=key)

def key_up(key):
    return SimpleNamespace(type=pygame.KEYUP, key=key)

def test_default_bindings(mock_pygame):
    handler = InputHandler()

    assert pygame.K_w in handler.get_bindings(Action.MOVE_UP)
    assert pygame.K_UP in handler.get_bindings(Action.MOVE_UP)
    assert handler.actions_for_key(pygame.K_1) == [Action.OPTION_1]

def test_action_state(mock_pygame):
    handler = InputHandler()
    # Manually inject state
    handler._state.actions_pressed.add(Action.MOVE_UP)

    assert handler.is_action_pressed(Action.MOVE_UP)
    assert not handler.is_action_pressed(Action.MOVE_DOWN)

def test_key_down_reports_actions(mock_pygame):
    handler = InputHandler()

    actions = handler.process_event(key_down(pygame.K_d))

    assert actions == [Action.MOVE_RIGHT]
    assert handler.is_action_pressed(Action.MOVE_RIGHT)

def test_shared_key_reports_all_actions_in_order(mock_pygame):
    handler = InputHandler()

    actions = handler.process_event(key_down(pygame.K_SPACE))

    assert actions == [Action.INTERACT, Action.CONFIRM]

def test_key_up_releases_action(mock_pygame):
    handler = InputHandler()
    handler.process_event(key_down(pygame.K_w))
    handler.process_event(key_down(pygame.K_UP))

    assert handler.process_event(key_up(pygame.K_w)) == []
    # Still held through the arrow key
    assert handler.is_action_pressed(Action.MOVE_UP)

    handler.process_event(key_up(pygame.K_UP))
    assert not handler.is_action_pressed(Action.MOVE_UP)

def test_poll_keeps_order(mock_pygame):
    handler = InputHandler()

    actions = handler.poll([key_down(pygame.K_a), key_up(pygame.K_a), key_down(pygame.K_4)])

    assert actions == [Action.MOVE_LEFT, Action.OPTION_4]

def test_rebind(mock_pygame):
    handler = InputHandler()
    handler.bind_key(Action.INTERACT, pygame.K_e)
    handler.unbind_key(Action.INTERACT, pygame.K_SPACE)

    assert handler.process_event(key_down(pygame.K_e)) == [Action.INTERACT]
    assert handler.process_event(key_down(pygame.K_SPACE)) == [Action.CONFIRM]

def test_publishes_pressed_actions(mock_pygame, event_bus):
    received = []
    event_bus.subscribe(InputEvent.ACTION_PRESSED, lambda e: received.append(e["action"]), weak=False)
    handler = InputHandler(event_bus)

    handler.process_event(key_down(pygame.K_ESCAPE))

    assert received == [Action.CANCEL]

def test_option_numbers():
    assert Action.OPTION_3.option_number == 3
    assert Action.CONFIRM.option_number is None
