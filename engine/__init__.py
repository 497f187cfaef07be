"""
Pixel Engine

The small, presentation-agnostic layer the one-pixel RPG is built on:
validated data components, a typed event bus, keyboard actions and
a schema-checked content database.

Quick Start:
    from engine import EventBus, InputHandler

    bus = EventBus()
    handler = InputHandler(bus)
    for action in handler.poll(pygame.event.get()):
        ...
"""

__version__ = "0.1.0"

from engine.core import (
    Component,
    register_component,
    EventBus,
    Event,
    EngineEvent,
    Action,
)

from engine.input import InputHandler
from engine.resources import Database

__all__ = [
    # Components
    "Component",
    "register_component",
    # Events
    "EventBus",
    "Event",
    "EngineEvent",
    # Input
    "InputHandler",
    "Action",
    # Data
    "Database",
]
