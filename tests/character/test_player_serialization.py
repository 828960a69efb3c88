"""
Tests for player creation and save files.
"""

import pytest

from dicecrawler.character.player_serialization import (
    create_player,
    load_player,
    player_from_dict,
    player_to_dict,
    save_player,
)
from dicecrawler.core.constants import CharacterClassType, EffectKind
from dicecrawler.core.content import ContentRepository


@pytest.fixture
def repo():
    return ContentRepository()


@pytest.mark.parametrize(
    "class_type, hp, mp, gold, items",
    [
        (CharacterClassType.KNIGHT, 25, 5, 10, ["HEALTH_POTION"]),
        (CharacterClassType.MAGE, 15, 15, 10, ["MAGIC_SCROLL"]),
        (CharacterClassType.SORCERER, 20, 10, 20, ["HEALTH_POTION", "MAGIC_SCROLL"]),
    ],
)
def test_create_player(repo, class_type, hp, mp, gold, items):
    player = create_player(repo.get_character_class(class_type))
    assert player.character_class == class_type
    assert (player.hp, player.max_hp) == (hp, hp)
    assert (player.mp, player.max_mp) == (mp, mp)
    assert player.gold == gold
    assert player.level == 1
    assert [item.id for item in player.inventory.items] == items


def test_roundtrip_keeps_equipment_without_reapplying(repo):
    player = create_player(repo.get_character_class(CharacterClassType.KNIGHT))
    player.add_item(repo.get_item("VITALITY_AMULET"))
    player.add_item(repo.get_item("SHARP_SWORD"))
    player.unequip_item("SHARP_SWORD")
    player.take_damage(8)
    player.add_gold(15)

    restored = player_from_dict(player_to_dict(player))

    assert restored.max_hp == 35
    assert restored.hp == 27
    assert restored.gold == 25
    assert [(item.id, item.equipped) for item in restored.inventory.items] == [
        ("HEALTH_POTION", False),
        ("VITALITY_AMULET", True),
        ("SHARP_SWORD", False),
    ]
    assert restored.get_bonus_for_type(EffectKind.DAMAGE) == 0


def test_unknown_inventory_item_is_rejected(repo):
    data = player_to_dict(create_player(repo.get_character_class(CharacterClassType.MAGE)))
    data["inventory"].append({"id": "NOT_AN_ITEM", "equipped": False})
    with pytest.raises(ValueError):
        player_from_dict(data)


def test_save_and_load(tmp_path, repo):
    player = create_player(repo.get_character_class(CharacterClassType.SORCERER))
    player.gain_experience(120)
    path = tmp_path / "player.json"

    save_player(player, path)
    loaded = load_player(path)

    assert loaded is not None
    assert player_to_dict(loaded) == player_to_dict(player)


def test_load_missing_file(tmp_path):
    assert load_player(tmp_path / "missing.json") is None


def test_load_corrupt_file(tmp_path):
    path = tmp_path / "player.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_player(path) is None
