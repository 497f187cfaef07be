import pytest

from conftest import FixedRandom
from pixelrpg import story
from pixelrpg.battle import ActionType, BattleState, BattleSystem
from pixelrpg.components import Player, StatusType
from pixelrpg.events import AudioEvent, BattleSound, GameEvent
from pixelrpg.results import Rejection
from pixelrpg.world import Tile


@pytest.fixture
def battle(empty_state, event_bus, fixed_rng):
    return BattleSystem(empty_state, event_bus, fixed_rng)

@pytest.fixture
def slime(empty_state, place_enemy):
    return place_enemy(empty_state.world, "Slime", 10, 10)

@pytest.fixture
def boss(empty_state, place_enemy):
    return place_enemy(empty_state.world, "Dark Lord", 29, 3)

def test_start_battle(battle, slime, empty_state):
    turn = battle.start_battle(slime)

    context = empty_state.battle
    assert turn.success
    assert turn.messages
    assert context.current_hp == 30
    assert context.is_player_turn
    assert not context.battle_ended
    assert not context.is_boss_battle
    assert context.state == BattleState.PLAYER_TURN

def test_context_is_a_snapshot(battle, slime, empty_state):
    battle.start_battle(slime)
    battle.handle_action(ActionType.ATTACK)

    assert slime.payload.hp == 30
    assert empty_state.battle.current_hp == 22

def test_start_battle_twice_rejected(battle, slime, empty_state, place_enemy):
    other = place_enemy(empty_state.world, "Goblin", 12, 12)
    battle.start_battle(slime)

    turn = battle.start_battle(other)

    assert not turn.success
    assert turn.reason == Rejection.ALREADY_IN_BATTLE
    assert empty_state.battle.entity is slime

def test_start_battle_with_town_rejected(battle, empty_state, place_town):
    town = place_town(empty_state.world, 0, 5, 5)

    turn = battle.start_battle(town)

    assert turn.reason == Rejection.NOT_AN_ENEMY
    assert empty_state.battle is None

def test_slime_scenario(battle, slime, empty_state):
    player = empty_state.player
    battle.start_battle(slime)

    hp_trace = []
    for _ in range(3):
        turn = battle.handle_action(ActionType.ATTACK)
        assert turn.player_action.damage == 8
        hp_trace.append(empty_state.battle.current_hp)

    assert hp_trace == [22, 14, 6]
    # Slime hits for the minimum of 5 each turn
    assert player.hp == 85

    turn = battle.handle_action(ActionType.ATTACK)

    assert turn.state == BattleState.VICTORY
    assert turn.enemy_action is None
    assert turn.rewards.exp == 20
    assert player.exp == 20
    assert player.gold == 115
    assert player.hp == 85
    assert empty_state.battle.current_hp == 0
    assert empty_state.battle.battle_ended

def test_victory_removes_enemy(battle, slime, empty_state):
    battle.start_battle(slime)
    for _ in range(4):
        battle.handle_action(ActionType.ATTACK)

    world = empty_state.world
    assert world.tile_at(10, 10) == Tile.EMPTY
    assert slime not in world.entities
    assert world.consistency_errors() == []

def test_low_mp_magic_scenario(battle, slime, empty_state):
    player = empty_state.player
    player.mp = 5
    battle.start_battle(slime)

    turn = battle.handle_action(ActionType.MAGIC)

    assert not turn.success
    assert turn.reason == Rejection.INSUFFICIENT_MP
    assert turn.enemy_action is None
    assert player.mp == 5
    assert player.hp == 100
    assert empty_state.battle.current_hp == 30
    assert empty_state.battle.is_player_turn
    assert empty_state.battle.state == BattleState.PLAYER_TURN

def test_magic_damage_and_cost(battle, slime, empty_state):
    battle.start_battle(slime)

    turn = battle.handle_action(ActionType.MAGIC)

    assert turn.player_action.damage == 15
    assert turn.player_action.mp_cost == 10
    assert empty_state.player.mp == 40
    assert empty_state.battle.current_hp == 15

def test_boss_flee_always_fails(empty_state, event_bus, boss):
    # Even a roll that would always escape a normal battle
    battle = BattleSystem(empty_state, event_bus, FixedRandom(roll=0.0))
    battle.start_battle(boss)

    turn = battle.handle_action(ActionType.RUN)

    assert not turn.success
    assert turn.reason == Rejection.CANNOT_FLEE_BOSS
    assert turn.enemy_action is None
    assert empty_state.player.hp == 100
    assert empty_state.battle.is_player_turn
    assert not empty_state.battle.battle_ended

def test_flee_success(battle, slime, empty_state):
    battle.start_battle(slime)

    turn = battle.handle_action(ActionType.RUN)

    assert turn.state == BattleState.FLED
    assert turn.enemy_action is None
    assert empty_state.battle.battle_ended
    # The enemy stays on the map
    assert empty_state.world.entity_at(10, 10) is slime

def test_failed_flee_gives_enemy_a_turn(empty_state, event_bus, slime):
    battle = BattleSystem(empty_state, event_bus, FixedRandom(roll=0.9))
    battle.start_battle(slime)

    turn = battle.handle_action(ActionType.RUN)

    assert turn.state == BattleState.PLAYER_TURN
    assert turn.enemy_action.damage == 5
    assert empty_state.player.hp == 95

def test_defend_halves_next_hit(battle, empty_state, place_enemy):
    orc = place_enemy(empty_state.world, "Orc", 3, 3)
    battle.start_battle(orc)

    turn = battle.handle_action(ActionType.DEFEND)

    # Orc: 12 + 0 - 5 = 7, halved to 3
    assert turn.enemy_action.defended
    assert turn.enemy_action.damage == 3
    assert empty_state.player.hp == 97
    assert StatusType.DEFENDING not in empty_state.player.statuses

    turn = battle.handle_action(ActionType.ATTACK)
    assert not turn.enemy_action.defended
    assert turn.enemy_action.damage == 7

def test_defend_halving_has_floor(battle, slime, empty_state):
    battle.start_battle(slime)

    turn = battle.handle_action(ActionType.DEFEND)

    # Slime minimum of 5 halves to 2
    assert turn.enemy_action.damage == 2

def test_defeat_revives_at_start(battle, slime, empty_state):
    empty_state.player = Player(x=10, y=11, hp=3, level=3, exp=40, gold=77, max_hp=140)
    battle.start_battle(slime)

    turn = battle.handle_action(ActionType.DEFEND)
    assert turn.state == BattleState.PLAYER_TURN

    turn = battle.handle_action(ActionType.ATTACK)

    player = empty_state.player
    assert turn.state == BattleState.DEFEAT
    assert player.hp == player.max_hp == 140
    assert player.mp == player.max_mp
    assert player.position == (16, 16)
    assert player.level == 3
    assert player.exp == 40
    assert player.gold == 77
    # Defeat leaves the enemy in place
    assert empty_state.world.entity_at(10, 10) is slime
    assert turn.messages[-3:] == story.DEFEAT
    assert empty_state.battle.log[-3:] == story.DEFEAT

def test_actions_rejected_after_battle_end(battle, slime, empty_state):
    battle.start_battle(slime)
    battle.handle_action(ActionType.RUN)

    turn = battle.handle_action(ActionType.ATTACK)

    assert turn.reason == Rejection.BATTLE_ENDED
    assert empty_state.battle.current_hp == 30

def test_actions_rejected_out_of_turn(battle, slime, empty_state):
    battle.start_battle(slime)
    empty_state.battle.is_player_turn = False

    turn = battle.handle_action(ActionType.ATTACK)

    assert turn.reason == Rejection.NOT_PLAYER_TURN
    assert empty_state.battle.current_hp == 30
    assert empty_state.player.hp == 100

def test_action_without_battle(battle):
    assert battle.handle_action(ActionType.ATTACK).reason == Rejection.NO_BATTLE

def test_dismiss_requires_terminal_state(battle, slime, empty_state):
    battle.start_battle(slime)

    outcome = battle.dismiss()

    assert outcome.reason == Rejection.BATTLE_NOT_ENDED
    assert empty_state.battle is not None

def test_dismiss_clears_context(battle, slime, empty_state):
    battle.start_battle(slime)
    battle.handle_action(ActionType.RUN)

    outcome = battle.dismiss()

    assert outcome.success
    assert outcome.result == BattleState.FLED
    assert not outcome.game_clear
    assert empty_state.battle is None
    assert len(empty_state.player.statuses) == 0

def test_boss_victory_is_game_clear(battle, boss, empty_state):
    battle.start_battle(boss)
    empty_state.battle.current_hp = 1

    turn = battle.handle_action(ActionType.ATTACK)

    assert turn.state == BattleState.VICTORY
    assert turn.game_clear
    assert battle.dismiss().game_clear
    assert empty_state.world.tile_at(29, 3) == Tile.EMPTY

def test_victory_levels_up(battle, slime, empty_state):
    player = empty_state.player
    player.exp = 90
    battle.start_battle(slime)
    empty_state.battle.current_hp = 1

    turn = battle.handle_action(ActionType.ATTACK)

    assert [l.level for l in turn.rewards.level_ups] == [2]
    assert player.level == 2
    assert player.exp == 10
    assert player.exp_to_next == 150
    assert player.hp == player.max_hp == 120
    assert turn.messages[-3:] == story.LEVEL_UP + story.VICTORY

def test_battle_events(battle, slime, recorder):
    started = recorder(GameEvent.BATTLE_STARTED)
    ended = recorder(GameEvent.BATTLE_ENDED)
    sounds = recorder(AudioEvent.BATTLE_SOUND)

    battle.start_battle(slime)
    for _ in range(4):
        battle.handle_action(ActionType.ATTACK)

    assert started[0]["enemy"] == "Slime"
    assert ended[0]["result"] == "VICTORY"
    kinds = [e["kind"] for e in sounds]
    assert kinds[:2] == [BattleSound.ATTACK, BattleSound.HIT]
    assert kinds[-1] == BattleSound.VICTORY

def test_victory_without_level_up_narration(battle, slime, empty_state):
    battle.start_battle(slime)
    empty_state.battle.current_hp = 1

    turn = battle.handle_action(ActionType.ATTACK)

    assert turn.rewards.level_ups == []
    assert turn.messages[-2:] == story.VICTORY
    assert not set(story.LEVEL_UP) & set(turn.messages)

def test_encounter_growl(battle, boss, recorder):
    growls = recorder(AudioEvent.ENEMY_PROXIMITY)

    battle.start_battle(boss)

    assert len(growls) == 1
    assert growls[0]["enemy"] is boss
    assert growls[0]["intensity"] == 1.0
    assert growls[0]["is_boss"]
