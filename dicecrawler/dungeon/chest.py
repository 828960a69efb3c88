"""
Chest room module for the dice crawler.
"""

import random

from dicecrawler.character.player import Player

from .rewards import Reward, apply_reward, choose_reward


class ChestRoom:
    """
    A treasure chest holding one reward drawn from a weighted table.

    The chest can only be opened once.
    """

    def __init__(self, rewards: list[Reward], player: Player, rng: random.Random) -> None:
        self.rewards = rewards
        self.player = player
        self.rng = rng
        self.opened = False

    def open(self) -> str | None:
        """
        Open the chest and grant its reward.

        Returns:
            str | None: The description of the reward, or None if the chest
            was already opened.

        """
        if self.opened:
            return None
        reward = choose_reward(self.rewards, self.rng)
        text = apply_reward(self.player, reward, self.rng)
        self.opened = True
        return text
