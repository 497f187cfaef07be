import pytest
from pydantic import Field, ValidationError

from engine.core.component import Component, register_component, get_component_type


@register_component
class Wallet(Component):
    gold: int = Field(default=0, ge=0)


def test_register_component():
    assert get_component_type("Wallet") is Wallet
    assert get_component_type("Missing") is None

def test_validate_on_assignment():
    wallet = Wallet(gold=10)
    with pytest.raises(ValidationError):
        wallet.gold = -5
    assert wallet.gold == 10

def test_extra_fields_forbidden():
    with pytest.raises(ValidationError):
        Wallet(gold=1, silver=2)

def test_clone_is_independent():
    wallet = Wallet(gold=10)
    copy = wallet.clone()
    copy.gold = 20
    assert wallet.gold == 10
