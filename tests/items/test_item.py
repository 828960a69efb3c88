"""
Tests for items and monsters.
"""

import random

import pytest

from dicecrawler.character.monster import Monster, MonsterStats
from dicecrawler.core.constants import EffectKind
from dicecrawler.items.item import Item, ItemEffect


def test_effect_totals():
    item = Item(
        id="ODD_RELIC",
        name="Odd Relic",
        effects=[
            ItemEffect(kind=EffectKind.DAMAGE, value=1),
            ItemEffect(kind=EffectKind.DAMAGE, value=2),
            ItemEffect(kind=EffectKind.MAX_MP, value=4),
        ],
    )
    assert item.get_effect_total(EffectKind.DAMAGE) == 3
    assert item.get_effect_total(EffectKind.MAX_MP) == 4
    assert item.get_effect_total(EffectKind.REROLL) == 0


def test_effect_kind_parses_catalog_names():
    effect = ItemEffect(kind="maxHp", value=10)
    assert effect.kind == EffectKind.MAX_HP
    assert effect.kind.is_reversible
    assert EffectKind.REROLL.is_passive


def test_instantiate_is_independent():
    item = Item(id="RING", name="Ring", effects=[ItemEffect(kind=EffectKind.MAX_MP, value=5)])
    copy = item.instantiate()
    copy.equipped = True
    copy.effects[0].value = 1
    assert not item.equipped
    assert item.effects[0].value == 5


def test_item_requires_id_and_name():
    with pytest.raises(ValueError):
        Item(id="", name="Nameless")
    with pytest.raises(ValueError):
        Item(id="X", name="X", cost=-1)


@pytest.fixture
def skeleton():
    return Monster(
        MonsterStats(
            name="Skeleton",
            hp=10,
            min_attack=1,
            max_attack=3,
            experience_reward=35,
            gold_reward=15,
        )
    )


def test_monster_attack_in_range(skeleton: Monster):
    rng = random.Random(0)
    attacks = {skeleton.calculate_attack(rng) for _ in range(200)}
    assert attacks == {1, 2, 3}


def test_monster_damage_floors_at_zero(skeleton: Monster):
    assert skeleton.take_damage(4) == 4
    assert skeleton.take_damage(20) == 6
    assert skeleton.hp == 0
    assert skeleton.is_dead()


def test_monster_stats_validation():
    with pytest.raises(ValueError):
        MonsterStats(
            name="Broken",
            hp=5,
            min_attack=4,
            max_attack=2,
            experience_reward=0,
            gold_reward=0,
        )
