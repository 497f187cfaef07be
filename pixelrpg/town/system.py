"""
Town system - inn, shop, townsfolk and leaving.

A town visit starts with ``enter_town`` and ends with ``leave``.
Everything in between acts on the town bound in ``GameState.town``.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Optional

from engine.core.events import EventBus
from pixelrpg import story
from pixelrpg.events import AudioEvent, BattleSound, GameEvent, UISound
from pixelrpg.results import Outcome, Rejection
from pixelrpg.state import GameState, TownContext
from pixelrpg.world.entities import EntityType, ShopEffect, ShopItem, TownData, WorldEntity

logger = logging.getLogger(__name__)


@dataclass
class TownResult(Outcome):
    """
    Result of a town action.

    Attributes:
        hp_restored: HP gained from the inn or an item
        mp_restored: MP gained from the inn or an item
        gold_spent: Gold paid
        item: Item bought, if any
    """
    hp_restored: int = 0
    mp_restored: int = 0
    gold_spent: int = 0
    item: Optional[ShopItem] = None


@dataclass(frozen=True)
class ShopListing:
    """One shop line as the player sees it."""
    index: int
    item: ShopItem
    affordable: bool


@dataclass
class TownVisit(TownResult):
    """Result of entering a town."""
    town: Optional[TownData] = None
    lines: list[str] = field(default_factory=list)


class TownSystem:
    """
    Town interaction controller.

    Manages:
    - Entering and leaving towns
    - Inn stays and shop purchases
    - Random townsfolk dialogue
    """

    def __init__(
        self,
        state: GameState,
        events: EventBus,
        rng: Optional[random.Random] = None,
    ):
        self.state = state
        self.events = events
        self.rng = rng or random.Random()

    @property
    def current(self) -> Optional[TownContext]:
        return self.state.town

    @property
    def shop_open(self) -> bool:
        return self.state.town is not None and self.state.town.shop_open

    def enter_town(self, entity: WorldEntity) -> TownVisit:
        """Bind the town context to a town entity's payload."""
        if entity.entity_type != EntityType.TOWN:
            return TownVisit.rejected(Rejection.NOT_A_TOWN, "There is no town here.")

        town = entity.payload
        self.state.town = TownContext(entity=entity, town=town)

        line = story.pick(story.TOWN_ENTER, self.rng)
        logger.info("Entered %s at (%d, %d)", town.name, entity.x, entity.y)
        self.events.publish(GameEvent.TOWN_ENTERED, town=town.name, x=entity.x, y=entity.y)
        return TownVisit(message=town.description, town=town, lines=[line])

    def rest(self) -> TownResult:
        """
        Stay at the inn.

        Restores ``inn_heal_percent`` of max HP/MP for ``inn_cost`` gold.
        """
        context = self.state.town
        if context is None:
            return TownResult.rejected(Rejection.NOT_IN_TOWN)

        self._ui_sound(UISound.SELECT)
        town = context.town
        player = self.state.player
        if not player.spend_gold(town.inn_cost):
            self._ui_sound(UISound.CANCEL)
            return TownResult.rejected(
                Rejection.INSUFFICIENT_GOLD,
                f"Not enough gold... ({town.inn_cost}G needed)",
            )

        hp = player.heal(math.floor(player.max_hp * town.inn_heal_percent / 100))
        mp = player.restore_mp(math.floor(player.max_mp * town.inn_heal_percent / 100))
        self.events.publish(AudioEvent.BATTLE_SOUND, kind=BattleSound.HEAL)
        self._player_changed()

        if town.inn_heal_percent >= 100:
            message = f"You stayed the night for {town.inn_cost}G. HP and MP fully restored!"
        else:
            message = f"You stayed the night for {town.inn_cost}G. HP +{hp}, MP +{mp}"
        logger.debug("Inn at %s: -%dG, +%d hp, +%d mp", town.name, town.inn_cost, hp, mp)
        return TownResult(message=message, hp_restored=hp, mp_restored=mp, gold_spent=town.inn_cost)

    def shop_listing(self) -> list[ShopListing]:
        """The current town's items with affordability for the player's gold."""
        context = self.state.town
        if context is None:
            return []
        gold = self.state.player.gold
        return [
            ShopListing(index=i, item=item, affordable=gold >= item.price)
            for i, item in enumerate(context.town.shop_items)
        ]

    def open_shop(self) -> TownResult:
        context = self.state.town
        if context is None:
            return TownResult.rejected(Rejection.NOT_IN_TOWN)
        self._ui_sound(UISound.SELECT)
        context.shop_open = True
        return TownResult(message=f"Gold: {self.state.player.gold} G")

    def close_shop(self) -> TownResult:
        context = self.state.town
        if context is None:
            return TownResult.rejected(Rejection.NOT_IN_TOWN)
        context.shop_open = False
        return TownResult()

    def buy(self, item_index: int) -> TownResult:
        """
        Buy a shop item and apply its effect immediately.

        Args:
            item_index: Index into the town's shop items

        Returns:
            The purchase result; rejected with no state change on a bad
            index or insufficient gold
        """
        context = self.state.town
        if context is None:
            return TownResult.rejected(Rejection.NOT_IN_TOWN)

        items = context.town.shop_items
        if not 0 <= item_index < len(items):
            return TownResult.rejected(Rejection.INVALID_ITEM, "No such item.")

        item = items[item_index]
        player = self.state.player
        if not player.spend_gold(item.price):
            return TownResult.rejected(
                Rejection.INSUFFICIENT_GOLD,
                f"Not enough gold for {item.name}.",
                item=item,
            )

        result = TownResult(gold_spent=item.price, item=item)
        if item.effect == ShopEffect.HEAL:
            result.hp_restored = player.heal(item.value)
            result.message = f"Used {item.name}! HP +{result.hp_restored}"
            sound = BattleSound.HEAL
        elif item.effect == ShopEffect.MP:
            result.mp_restored = player.restore_mp(item.value)
            result.message = f"Used {item.name}! MP +{result.mp_restored}"
            sound = BattleSound.MAGIC
        elif item.effect == ShopEffect.BUFF_ATTACK:
            player.attack += item.value
            result.message = f"Used {item.name}! Attack +{item.value} (permanent)"
            sound = BattleSound.MAGIC
        elif item.effect == ShopEffect.BUFF_DEFENSE:
            player.defense += item.value
            result.message = f"Used {item.name}! Defense +{item.value} (permanent)"
            sound = BattleSound.MAGIC
        else:
            raise ValueError(f"Unhandled shop effect: {item.effect}")

        self.events.publish(AudioEvent.BATTLE_SOUND, kind=sound)
        self._player_changed()
        logger.debug("Bought %s for %dG at %s", item.name, item.price, context.town.name)
        return result

    def talk(self) -> TownResult:
        """A random line from the townsfolk. Changes nothing."""
        context = self.state.town
        if context is None:
            return TownResult.rejected(Rejection.NOT_IN_TOWN)

        self._ui_sound(UISound.SELECT)
        dialogue = context.town.dialogue
        if not dialogue:
            return TownResult(message="Nobody has anything to say.")
        return TownResult(message=story.pick(dialogue, self.rng))

    def leave(self) -> TownResult:
        """Clear the town context."""
        context = self.state.town
        if context is None:
            return TownResult.rejected(Rejection.NOT_IN_TOWN)

        self.state.town = None
        logger.info("Left %s", context.town.name)
        self.events.publish(GameEvent.TOWN_LEFT, town=context.town.name)
        return TownResult(message="You left the town...")

    def _player_changed(self) -> None:
        player = self.state.player
        self.events.publish(
            GameEvent.PLAYER_CHANGED,
            hp=player.hp,
            mp=player.mp,
            gold=player.gold,
        )

    def _ui_sound(self, kind: UISound) -> None:
        self.events.publish(AudioEvent.UI_SOUND, kind=kind)
