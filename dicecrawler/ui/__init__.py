"""
User interface module for the dice crawler.

This module provides the terminal front end used to play a dungeon run.
"""

# Import from cli_interface.py
from .cli_interface import (
    PlayerInterface,
    dice_table,
    monster_status_line,
    player_status_line,
)

__all__ = [
    # From cli_interface.py
    "PlayerInterface",
    "dice_table",
    "monster_status_line",
    "player_status_line",
]
