"""
Battle context module for the dice crawler.

Holds the per-battle mutable state that is not part of the characters: the
dice hand with its locks, the reroll budget of the current round and the
monster attack previewed to the player.
"""

import random

from dicecrawler.core.constants import BASE_REROLLS
from dicecrawler.dice.dice_manager import DiceManager


class BattleContext:
    """
    Per-battle state for the dice and the reroll budget.

    Attributes:
        dice (DiceManager):
            The hand of the current round.
        reroll_bonus (int):
            Extra rerolls per round granted by equipment.
        rerolls_left (int):
            Rerolls still available this round.
        next_monster_attack (int | None):
            The monster attack that will resolve after the next hand.

    """

    dice: DiceManager
    reroll_bonus: int
    rerolls_left: int
    next_monster_attack: int | None

    def __init__(self, rng: random.Random, reroll_bonus: int = 0) -> None:
        self.dice = DiceManager(rng)
        self.reroll_bonus = max(0, reroll_bonus)
        self.rerolls_left = 0
        self.next_monster_attack = None
        self.reset_rerolls()

    @property
    def reroll_budget(self) -> int:
        """Returns the number of rerolls granted each round."""
        return BASE_REROLLS + self.reroll_bonus

    def reset_rerolls(self) -> None:
        self.rerolls_left = self.reroll_budget

    def can_reroll(self) -> bool:
        return self.rerolls_left > 0

    def consume_reroll(self) -> bool:
        """
        Spend one reroll of the round.

        Returns:
            bool: True if a reroll was available.

        """
        if not self.can_reroll():
            return False
        self.rerolls_left -= 1
        return True
