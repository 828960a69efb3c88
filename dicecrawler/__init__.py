"""
Dice Crawler package.

A turn-based dungeon crawler where every action is resolved by a hand of five
typed dice. This package contains the dice rules, battles, the character
model, dungeon generation and a terminal front end.
"""

__version__ = "0.1.0"
