"""
Core system module for the dice crawler.

This module contains the fundamental components shared by the rest of the
game: constants and enumerations, logging, console utilities and the content
repository (imported from ``dicecrawler.core.content``).
"""

from .constants import (
    BASE_REROLLS,
    DICE_COUNT,
    DUNGEON_LENGTH,
    FULL_HEAL,
    IMMUNE_DEFENSE,
    CharacterClassType,
    DiceType,
    EffectKind,
    RoomKind,
)
from .logging import get_logger, setup_logging
from .utils import Singleton, ccapture, cprint, crule, make_bar, weighted_choice

__all__ = [
    # Import from constants.py
    "BASE_REROLLS",
    "DICE_COUNT",
    "DUNGEON_LENGTH",
    "FULL_HEAL",
    "IMMUNE_DEFENSE",
    "CharacterClassType",
    "DiceType",
    "EffectKind",
    "RoomKind",
    # Import from logging.py
    "get_logger",
    "setup_logging",
    # Import from utils.py
    "Singleton",
    "ccapture",
    "cprint",
    "crule",
    "make_bar",
    "weighted_choice",
]
