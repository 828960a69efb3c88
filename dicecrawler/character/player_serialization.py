"""
Player creation, serialization and deserialization functions.

This module creates players from class definitions and converts Player
instances to and from plain dictionaries and JSON files.
"""

import json
from pathlib import Path
from typing import Any

from dicecrawler.core.constants import CharacterClassType
from dicecrawler.core.logging import log_debug, log_error

from .character_class import CharacterClass
from .player import Player


def create_player(character_class: CharacterClass) -> Player:
    """
    Creates a fresh level-1 player for the given class.

    Args:
        character_class (CharacterClass):
            The class definition providing base stats and starting items.

    Returns:
        Player:
            The new player, with starting gold and inventory.

    """
    from dicecrawler.core.content import ContentRepository

    repo = ContentRepository()

    player = Player(
        character_class=character_class.class_type,
        max_hp=character_class.base_hp,
        max_mp=character_class.base_mp,
        gold=character_class.starting_gold,
    )
    for item_id in character_class.starting_items:
        item = repo.get_item(item_id)
        if item is None:
            raise ValueError(f"Starting item '{item_id}' not found.")
        player.add_item(item)
    log_debug(
        f"Created {character_class.name}",
        {"hp": player.max_hp, "mp": player.max_mp, "gold": player.gold},
    )
    return player


def player_to_dict(player: Player) -> dict[str, Any]:
    """
    Converts a Player into a dictionary of its plain-data fields.

    Args:
        player (Player):
            The player to serialize.

    Returns:
        dict[str, Any]:
            The serialized player.

    """
    return {
        "character_class": player.character_class.value,
        "hp": player.hp,
        "max_hp": player.max_hp,
        "mp": player.mp,
        "max_mp": player.max_mp,
        "level": player.level,
        "experience": player.experience,
        "gold": player.gold,
        "inventory": [
            {"id": item.id, "equipped": item.equipped}
            for item in player.inventory.items
        ],
    }


def player_from_dict(data: dict[str, Any]) -> Player:
    """
    Creates a Player instance from a dictionary of data.

    The stored pools already include the effects of equipped items, so items
    are restored with their equipped flag and their effects are not applied
    again.

    Args:
        data (dict[str, Any]):
            The dictionary containing player data.

    Returns:
        Player:
            The restored Player instance.

    Raises:
        ValueError: If an inventory entry references an unknown item.

    """
    from dicecrawler.core.content import ContentRepository

    repo = ContentRepository()

    player = Player(
        character_class=CharacterClassType(data["character_class"]),
        max_hp=data["max_hp"],
        max_mp=data["max_mp"],
        hp=data.get("hp"),
        mp=data.get("mp"),
        level=data.get("level", 1),
        experience=data.get("experience", 0),
        gold=data.get("gold", 0),
    )
    for entry in data.get("inventory", []):
        item = repo.get_item(entry["id"])
        if item is None:
            raise ValueError(f"Inventory item '{entry['id']}' not found.")
        instance = item.instantiate()
        instance.equipped = bool(entry.get("equipped", False)) and not item.consumable
        player.inventory.items.append(instance)
    return player


def save_player(player: Player, filename: Path) -> None:
    """
    Writes a player to a JSON file.

    Args:
        player (Player): The player to save.
        filename (Path): The destination file.

    """
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(player_to_dict(player), f, indent=4)


def load_player(filename: Path) -> Player | None:
    """
    Loads a player from a JSON file.

    Args:
        filename (Path):
            The path to the JSON file containing the player data.

    Returns:
        Player | None:
            The loaded player, or None if the file is missing or not valid
            JSON.

    """
    try:
        with open(filename, encoding="utf-8") as f:
            return player_from_dict(json.load(f))
    except (FileNotFoundError, json.JSONDecodeError) as e:
        log_error(
            f"Failed to load player from {filename}: {e}",
            {"filename": str(filename), "error": str(e)},
        )
        return None
