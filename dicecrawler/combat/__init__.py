"""
Combat system module for the dice crawler.

This module handles battles: the per-battle dice context, the resolution of
the player's hand and the monster's counter-attack, and victory rewards.
"""
