"""
Tests for battle resolution: player effects, monster turns, rerolls and rewards.
"""

import random

import pytest

from dicecrawler.character.monster import Monster, MonsterStats
from dicecrawler.character.player import Player
from dicecrawler.combat.battle_manager import (
    ActionType,
    BattleManager,
    BattleState,
    MagicOutcome,
    apply_equipment_bonuses,
)
from dicecrawler.core.constants import CharacterClassType, DiceType, EffectKind
from dicecrawler.dice.dice_manager import DiceEffects
from dicecrawler.items.item import Item, ItemEffect

A = DiceType.ATTACK
D = DiceType.DEFENSE
M = DiceType.MAGIC
H = DiceType.HEALTH


@pytest.fixture
def player():
    return Player(CharacterClassType.KNIGHT, max_hp=20, max_mp=10)


@pytest.fixture
def slime_stats():
    return MonsterStats(
        name="Slime",
        hp=6,
        min_attack=2,
        max_attack=2,
        experience_reward=25,
        gold_reward=10,
    )


@pytest.fixture
def battle(player, slime_stats):
    return BattleManager(player, Monster(slime_stats), random.Random(99))


def item_with(kind: EffectKind, value: int) -> Item:
    return Item(
        id=f"TEST_{kind.name}",
        name=f"Test {kind.display_name}",
        effects=[ItemEffect(kind=kind, value=value)],
    )


def test_battle_starts_ready(battle: BattleManager):
    assert battle.state == BattleState.AWAITING_PLAY
    assert battle.turn_number == 1
    assert battle.next_monster_attack == 2
    assert battle.context.dice.is_rolled
    assert battle.rerolls_left == 2


def test_full_heal_restores_the_gap(battle: BattleManager, player: Player):
    player.take_damage(8)
    result = battle.process_player_turn(DiceEffects(healing=-1))
    assert player.hp == 20
    assert result.get_value(ActionType.HEALING) == 8


def test_heal_is_capped_at_max(battle: BattleManager, player: Player):
    player.take_damage(1)
    result = battle.process_player_turn(DiceEffects(healing=6))
    assert player.hp == 20
    assert result.get_value(ActionType.HEALING) == 1


def test_immune_defense_blocks_everything(battle: BattleManager, player: Player):
    battle.process_player_turn(DiceEffects())
    result = battle.process_monster_turn(999, 50)
    assert result.damage_dealt == 0
    assert player.hp == 20


def test_defense_reduces_attack(battle: BattleManager, player: Player):
    battle.process_player_turn(DiceEffects())
    result = battle.process_monster_turn(3, 5)
    assert result.damage_dealt == 2
    assert player.hp == 18
    assert battle.state == BattleState.AWAITING_PLAY
    assert battle.turn_number == 2


def test_magic_without_mp_is_skipped(battle: BattleManager, player: Player):
    player.use_mp(9)
    hp_before = battle.monster.hp
    result = battle.process_player_turn(DiceEffects(magic_damage=3, magic_cost=2))
    assert result.magic_outcome == MagicOutcome.SKIPPED
    assert player.mp == 1
    assert battle.monster.hp == hp_before


def test_magic_with_mp_is_cast(battle: BattleManager, player: Player):
    result = battle.process_player_turn(DiceEffects(magic_damage=3, magic_cost=2))
    assert result.magic_outcome == MagicOutcome.CAST
    assert player.mp == 8
    assert battle.monster.hp == 3
    assert result.get_value(ActionType.MAGIC_DAMAGE) == 3


def test_lethal_damage_defeats_monster(battle: BattleManager):
    result = battle.process_player_turn(DiceEffects(damage=8))
    assert result.monster_defeated
    assert battle.monster.hp == 0
    assert battle.state == BattleState.MONSTER_DEFEATED
    assert battle.process_monster_turn(0, 10) is None
    assert battle.process_player_turn(DiceEffects(damage=1)) is None


def test_player_defeat(battle: BattleManager, player: Player):
    battle.process_player_turn(DiceEffects())
    result = battle.process_monster_turn(0, 25)
    assert result.player_defeated
    assert player.hp == 0
    assert battle.state == BattleState.PLAYER_DEFEATED
    assert battle.is_over


def test_reroll_budget(battle: BattleManager):
    assert battle.reroll()
    assert battle.reroll()
    assert not battle.reroll()
    assert battle.rerolls_left == 0


def test_reroll_budget_includes_equipment(player: Player, slime_stats):
    player.add_item(item_with(EffectKind.REROLL, 1))
    battle = BattleManager(player, Monster(slime_stats), random.Random(3))
    assert battle.rerolls_left == 3


def test_toggle_lock_ignored_without_rerolls(battle: BattleManager):
    assert battle.toggle_lock(0)
    assert battle.context.dice.is_locked(0)
    battle.reroll()
    battle.reroll()
    assert not battle.toggle_lock(1)
    assert not battle.context.dice.is_locked(1)


def test_locked_dice_survive_reroll(battle: BattleManager):
    before = battle.context.dice.get_dice()
    battle.toggle_lock(0)
    battle.toggle_lock(4)
    battle.reroll()
    after = battle.context.dice.get_dice()
    assert after[0] == before[0]
    assert after[4] == before[4]


def test_locks_and_rerolls_reset_each_round(battle: BattleManager):
    battle.toggle_lock(2)
    battle.reroll()
    battle.context.dice.set_dice([M, H, M, D, A])
    battle.play_hand()
    assert battle.state == BattleState.AWAITING_PLAY
    assert battle.context.dice.get_locks() == [False] * 5
    assert battle.rerolls_left == 2


def test_play_hand_round(battle: BattleManager, player: Player):
    battle.context.dice.set_dice([D, D, D, A, A])
    result = battle.play_hand()
    assert result.effects.defense == 3
    assert result.monster_turn is not None
    assert result.monster_turn.damage_dealt == 0
    assert result.rewards is None
    assert player.hp == 20


def test_play_hand_victory_grants_rewards_once(battle: BattleManager, player: Player):
    battle.context.dice.set_dice([A, A, A, A, A])
    result = battle.play_hand()
    assert result.state == BattleState.MONSTER_DEFEATED
    assert result.monster_turn is None
    assert result.rewards.gold == 10
    assert result.rewards.experience == 25
    assert player.gold == 10
    assert player.experience == 25

    assert battle.get_rewards() == result.rewards
    assert player.gold == 10
    assert battle.play_hand() is None


def test_rewards_before_victory(battle: BattleManager):
    assert battle.get_rewards() is None


def test_monster_attack_uses_the_preview(battle: BattleManager, mocker):
    battle.context.next_monster_attack = 7
    spy = mocker.spy(battle.monster, "calculate_attack")
    battle.context.dice.set_dice([A, D, M, H, A])
    result = battle.play_hand()
    assert result.monster_turn.damage_dealt == 7
    # Only the preview for the next round is drawn.
    assert spy.call_count == 1


def test_equipment_bonuses_need_a_triggered_effect(player: Player):
    player.add_item(item_with(EffectKind.DAMAGE, 3))
    player.add_item(item_with(EffectKind.DEFENSE, 1))

    assert apply_equipment_bonuses(DiceEffects(damage=5, defense=3), player) == DiceEffects(
        damage=8, defense=4
    )
    assert apply_equipment_bonuses(DiceEffects(), player) == DiceEffects()
    assert apply_equipment_bonuses(DiceEffects(defense=999), player).defense == 999


def test_turns_must_alternate(player: Player):
    stats = MonsterStats(
        name="Golem",
        hp=20,
        min_attack=1,
        max_attack=1,
        experience_reward=10,
        gold_reward=5,
    )
    battle = BattleManager(player, Monster(stats), random.Random(4))

    # The monster cannot attack before the player has played.
    assert battle.process_monster_turn(0, 10) is None
    assert player.hp == 20

    assert battle.process_player_turn(DiceEffects(damage=8)) is not None
    assert battle.state == BattleState.RESOLVING_MONSTER_TURN
    # A second hand is refused until the monster has answered.
    assert battle.process_player_turn(DiceEffects(damage=8)) is None
    assert battle.monster.hp == 12

    assert battle.process_monster_turn(0, 1) is not None
    assert battle.state == BattleState.AWAITING_PLAY
    assert battle.process_player_turn(DiceEffects(damage=8)) is not None
    assert battle.monster.hp == 4
