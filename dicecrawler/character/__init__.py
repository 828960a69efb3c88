"""
Character system module for the dice crawler.

This module handles the player and monster models, character classes,
the player's inventory and player serialization.
"""

from .character_class import CharacterClass
from .monster import Monster, MonsterStats
from .player import Player, experience_for_level
from .player_inventory import PlayerInventory
from .player_serialization import (
    create_player,
    load_player,
    player_from_dict,
    player_to_dict,
    save_player,
)

__all__ = [
    # Import from character_class.py
    "CharacterClass",
    # Import from monster.py
    "Monster",
    "MonsterStats",
    # Import from player.py
    "Player",
    "experience_for_level",
    # Import from player_inventory.py
    "PlayerInventory",
    # Import from player_serialization.py
    "create_player",
    "load_player",
    "player_from_dict",
    "player_to_dict",
    "save_player",
]
