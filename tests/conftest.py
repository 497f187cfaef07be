import os
import random
import sys

import pytest
from unittest.mock import MagicMock, patch

# Ensure engine and pixelrpg can be imported without installing
sys.path.append(os.getcwd())


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.time'), \
         patch('pygame.mixer'), \
         patch('pygame.key'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)

        yield


class FixedRandom(random.Random):
    """
    Random source with no damage variance and a fixed roll.

    randint(-r, r) always returns 0 and random() always returns
    ``roll``; randrange and choice still draw from the seeded stream,
    so world generation spreads its placements normally.
    """

    def __init__(self, roll: float = 0.5, seed: int = 0):
        super().__init__(seed)
        self.roll = roll

    def randint(self, a, b):
        return (a + b) // 2

    def random(self):
        return self.roll

    def getrandbits(self, k):
        # Overriding random() alone would route randrange through it
        return super().getrandbits(k)


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from engine.core.events import EventBus
    return EventBus()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fixed_rng():
    """Zero variance, flee roll of 0.5 (succeeds against the 0.7 chance)."""
    return FixedRandom()


@pytest.fixture
def config():
    from pixelrpg.config import GameConfig
    return GameConfig()


@pytest.fixture
def content(config):
    """Enemy and town records from the bundled database."""
    from pixelrpg.world.content import load_content
    return load_content(config.data_path)


@pytest.fixture
def player():
    from pixelrpg.components import Player
    return Player()


@pytest.fixture
def world_map(content, config):
    """A generated world from a fixed seed."""
    from pixelrpg.world.generator import WorldGenerator
    return WorldGenerator(content, random.Random(42), config).generate()


@pytest.fixture
def empty_state(config):
    """Game state on a blank world, for hand-placed scenarios."""
    from pixelrpg.state import GameState
    from pixelrpg.world.map import WorldMap
    return GameState.new(config, WorldMap(config.world_size))


@pytest.fixture
def game_state(config, world_map):
    from pixelrpg.state import GameState
    return GameState.new(config, world_map)


@pytest.fixture
def place_enemy(content):
    """Factory: put a copy of an enemy record on a world at (x, y)."""
    from pixelrpg.world.entities import WorldEntity
    from pixelrpg.world.tiles import Tile

    def _place(world, name, x, y):
        record = next(e for e in content.enemies if e.name == name)
        entity = WorldEntity.of(record.copy(), x, y)
        world.set_tile(x, y, Tile.BOSS if record.is_boss else Tile.ENEMY)
        return world.add_entity(entity)

    return _place


@pytest.fixture
def place_town(content):
    """Factory: put a town block with its entity on a world."""
    from pixelrpg.world.entities import WorldEntity
    from pixelrpg.world.tiles import Tile

    def _place(world, index, x, y):
        world.fill_rect(x - 1, y - 1, 3, 3, Tile.TOWN)
        return world.add_entity(WorldEntity.of(content.towns[index], x, y))

    return _place


@pytest.fixture
def recorder(event_bus):
    """Collects published events by type: recorder(EventType) -> list of Events."""
    received = {}

    def _record(event_type):
        events = received.setdefault(event_type, [])
        event_bus.subscribe(event_type, events.append, weak=False)
        return events

    return _record
