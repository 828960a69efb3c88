"""
Tests for the player's resource pools, leveling, gold and inventory.
"""

import pytest

from dicecrawler.character.player import Player, experience_for_level
from dicecrawler.core.constants import CharacterClassType, EffectKind
from dicecrawler.items.item import Item, ItemEffect


@pytest.fixture
def player():
    return Player(CharacterClassType.SORCERER, max_hp=20, max_mp=10, gold=50)


@pytest.fixture
def amulet():
    return Item(
        id="VITALITY_AMULET",
        name="Vitality Amulet",
        cost=130,
        effects=[ItemEffect(kind=EffectKind.MAX_HP, value=10)],
    )


@pytest.fixture
def sword():
    return Item(
        id="SHARP_SWORD",
        name="Sharp Sword",
        cost=100,
        effects=[ItemEffect(kind=EffectKind.DAMAGE, value=2)],
    )


@pytest.fixture
def potion():
    return Item(
        id="HEALTH_POTION",
        name="Health Potion",
        cost=10,
        consumable=True,
        effects=[ItemEffect(kind=EffectKind.HEALING, value=10)],
    )


def test_new_player_starts_full(player: Player):
    assert player.hp == 20
    assert player.mp == 10
    assert player.level == 1
    assert player.experience == 0
    assert player.is_alive()


def test_heal_is_capped(player: Player):
    player.take_damage(5)
    assert player.heal(100) == 5
    assert player.hp == player.max_hp


def test_take_damage_floors_at_zero(player: Player):
    assert player.take_damage(50) == 20
    assert player.hp == 0
    assert player.is_dead()


def test_use_mp_is_all_or_nothing(player: Player):
    assert player.use_mp(4)
    assert player.mp == 6
    assert not player.use_mp(7)
    assert player.mp == 6


def test_restore_mp_is_capped(player: Player):
    player.use_mp(3)
    assert player.restore_mp(10) == 3
    assert player.mp == 10


def test_spend_gold(player: Player):
    assert player.spend_gold(50)
    assert player.gold == 0
    assert not player.spend_gold(1)
    assert player.gold == 0


@pytest.mark.parametrize("level, expected", [(1, 100), (2, 150), (3, 225), (4, 337)])
def test_experience_curve(level, expected):
    assert experience_for_level(level) == expected


def test_level_up(player: Player):
    player.take_damage(7)
    player.use_mp(5)

    assert player.gain_experience(100)

    assert player.level == 2
    assert player.max_hp == 25
    assert player.max_mp == 12
    assert player.hp == 25
    assert player.mp == 12
    assert player.experience == 100
    assert player.experience_for_next_level == 150


def test_below_threshold_does_not_level(player: Player):
    assert not player.gain_experience(99)
    assert player.level == 1


def test_one_level_per_gain(player: Player):
    assert player.gain_experience(1000)
    assert player.level == 2
    # The overshoot still counts towards the following threshold.
    assert player.gain_experience(0)
    assert player.level == 3


def test_equip_raises_and_unequip_restores_max_hp(player: Player, amulet: Item):
    player.add_item(amulet)
    assert player.max_hp == 30
    assert player.hp == 30
    assert len(player.equipped_items) == 1

    assert player.unequip_item("VITALITY_AMULET")
    assert player.max_hp == 20
    assert player.hp == 20

    assert player.equip_item("VITALITY_AMULET")
    assert player.max_hp == 30


def test_unequip_clamps_hp(player: Player, amulet: Item):
    player.add_item(amulet)
    player.take_damage(5)
    assert player.hp == 25
    player.unequip_item("VITALITY_AMULET")
    assert player.hp == 20


def test_equip_item_refuses_invalid_targets(player: Player, potion: Item, sword: Item):
    player.add_item(potion)
    player.add_item(sword)
    assert not player.equip_item("HEALTH_POTION")
    assert not player.equip_item("SHARP_SWORD")  # already equipped
    assert not player.equip_item("MISSING")
    assert not player.unequip_item("HEALTH_POTION")


def test_passive_bonuses_follow_equipment(player: Player, sword: Item):
    player.add_item(sword)
    player.add_item(sword)
    assert player.get_bonus_for_type(EffectKind.DAMAGE) == 4
    assert player.get_bonus_for_type(EffectKind.DEFENSE) == 0

    player.unequip_item("SHARP_SWORD")
    assert player.get_bonus_for_type(EffectKind.DAMAGE) == 2


def test_added_items_are_independent_copies(player: Player, sword: Item):
    instance = player.add_item(sword)
    assert instance is not sword
    assert instance.equipped
    assert not sword.equipped


def test_use_item_consumes_one(player: Player, potion: Item):
    player.add_item(potion)
    player.add_item(potion)
    player.take_damage(15)

    assert player.use_item("HEALTH_POTION")
    assert player.hp == 15
    assert player.inventory.count("HEALTH_POTION") == 1


def test_use_item_refuses_equipment(player: Player, sword: Item):
    player.add_item(sword)
    assert not player.use_item("SHARP_SWORD")
    assert player.inventory.count("SHARP_SWORD") == 1


def test_consumable_never_equipped(potion: Item):
    with pytest.raises(ValueError):
        Item(id="BAD", name="Bad", consumable=True, equipped=True)
    assert not potion.equipped
