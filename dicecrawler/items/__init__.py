"""
Items module for the dice crawler.

This module contains the item model and its tagged effect descriptors.
"""

from .item import Item, ItemEffect

__all__ = [
    "Item",
    "ItemEffect",
]
