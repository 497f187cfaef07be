"""
Component base class for data-only components.

Components are pure data containers validated by Pydantic.
Game rules live in the systems that mutate them, which keeps
the state model easy to inspect and test.

Usage:
    class Wallet(Component):
        gold: int = Field(default=0, ge=0)

    wallet = Wallet(gold=10)
    wallet.gold = -5  # raises pydantic.ValidationError
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Components are data-only containers using Pydantic for:
    - Automatic validation (also on assignment)
    - Type hints
    - Default values
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        # Invariants such as ge=0 hold after every mutation
        validate_assignment=True,
        extra='forbid',
    )

    # Class variable: component type name (used for debugging/registry)
    _type_name: ClassVar[str] = ""

    @classmethod
    def get_type_name(cls) -> str:
        """Get the component type name."""
        return cls._type_name or cls.__name__

    def clone(self) -> Component:
        """Create a deep copy of this component."""
        return self.model_copy(deep=True)


# Registry of component types
_component_registry: dict[str, type[Component]] = {}


def register_component(cls: type[Component]) -> type[Component]:
    """
    Decorator to register a component type.

    Usage:
        @register_component
        class Wallet(Component):
            gold: int = 0
    """
    type_name = cls.get_type_name()
    _component_registry[type_name] = cls
    return cls


def get_component_type(type_name: str) -> type[Component] | None:
    """Get component class by type name."""
    return _component_registry.get(type_name)
