"""
Narrative text shown between game beats.

The core only picks lines; how they are revealed (typewriter
pacing, fades) is up to the presentation layer.
"""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class StoryLine:
    text: str
    narrator: bool = False


INTRO = [
    StoryLine("You descend into this world as a single point of light.", narrator=True),
    StoryLine("There is nothing around you... no, faint colors glimmer in the distance.", narrator=True),
    StoryLine("A cluster of green to the east. A town, perhaps.", narrator=True),
    StoryLine("Red dots squirm to the west. Enemies.", narrator=True),
    StoryLine("You start walking.", narrator=True),
]

ENEMY_ENCOUNTER = [
    "A red light has locked onto you.",
    "A blinking like a heartbeat. It draws closer.",
    "Two points of light face each other. The fight is unavoidable.",
]

TOWN_ENTER = [
    "A green glow gently surrounds you.",
    "There is peace here. You can almost hear the travelers breathing.",
    "Time to rest. You can recover here.",
]

VICTORY = [
    "The red light has faded.",
    "Silence returns. You feel a little stronger.",
]

LEVEL_UP = [
    "Your light flares brightly for a moment.",
]

DEFEAT = [
    "Your light dims... and goes out.",
    "But the world does not forget you.",
    "Become light once more and continue the journey.",
]

GAME_CLEAR = [
    "The light of darkness has vanished...",
    "Peace has returned to the world.",
    "You have become a legend.",
    "- CONGRATULATIONS -",
]


def pick(lines: list[str], rng: random.Random) -> str:
    """Pick one line uniformly at random."""
    return lines[rng.randrange(len(lines))]
