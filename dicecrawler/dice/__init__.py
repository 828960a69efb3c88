"""
Dice system module for the dice crawler.

This module contains the dice hand, its lock flags and the combination rules
that turn a hand into combat effects.
"""

from .dice_manager import DiceEffects, DiceManager, effects_from_counts

__all__ = [
    "DiceEffects",
    "DiceManager",
    "effects_from_counts",
]
