"""
Core engine module.

Exports:
- Component, register_component: Component base and registration
- EventBus, Event, EngineEvent: Event system
- Action: Input actions
"""

from engine.core.component import Component, register_component, get_component_type
from engine.core.events import EventBus, Event, EngineEvent
from engine.core.actions import Action

__all__ = [
    # Components
    "Component",
    "register_component",
    "get_component_type",
    # Events
    "EventBus",
    "Event",
    "EngineEvent",
    # Input
    "Action",
]
