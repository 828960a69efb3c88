"""
Dungeon system module for the dice crawler.

This module handles room-sequence generation, chest, merchant and encounter
rooms, and the orchestration of a whole dungeon run.
"""
