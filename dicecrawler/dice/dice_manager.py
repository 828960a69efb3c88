"""
Dice manager module for the dice crawler.

Owns the five typed dice of a hand and their lock flags, rolls the unlocked
dice and turns the current hand into a bundle of combat effects through
fixed combination thresholds.
"""

import random
from collections import Counter

from pydantic import BaseModel, Field

from dicecrawler.core.constants import DICE_COUNT, FULL_HEAL, IMMUNE_DEFENSE, DiceType

# Effect tables, keyed by the number of dice of the matching type.
ATTACK_DAMAGE: dict[int, int] = {3: 3, 4: 5, 5: 8}
DEFENSE_VALUE: dict[int, int] = {3: 3, 4: 5, 5: IMMUNE_DEFENSE}
# (cost, damage) pairs.
MAGIC_EFFECT: dict[int, tuple[int, int]] = {2: (2, 3), 3: (3, 5), 4: (5, 8), 5: (8, 12)}
HEALING_VALUE: dict[int, int] = {2: 2, 3: 4, 4: 6, 5: FULL_HEAL}


class DiceEffects(BaseModel):
    """The effects produced by playing a hand."""

    damage: int = Field(
        default=0,
        description="Physical damage dealt to the monster.",
    )
    defense: int = Field(
        default=0,
        description="Damage blocked from the monster's next attack (999 = immune).",
    )
    magic_damage: int = Field(
        default=0,
        description="Magic damage dealt to the monster if the MP can be paid.",
    )
    magic_cost: int = Field(
        default=0,
        description="MP required for the magic damage.",
    )
    healing: int = Field(
        default=0,
        description="HP restored to the player (-1 = heal to full).",
    )

    @property
    def is_immune(self) -> bool:
        return self.defense >= IMMUNE_DEFENSE

    @property
    def is_full_heal(self) -> bool:
        return self.healing == FULL_HEAL

    def is_empty(self) -> bool:
        """True if the hand triggers no effect at all."""
        return not (self.damage or self.defense or self.magic_damage or self.healing)

    def preview(self) -> str:
        """
        Describe the effects in a human-readable form.

        Returns:
            str: One line per active effect.

        """
        messages: list[str] = []
        if self.damage > 0:
            messages.append(f"Attack: {self.damage} damage")
        if self.defense > 0:
            messages.append(f"Defense: {'Immune' if self.is_immune else self.defense}")
        if self.magic_damage > 0:
            messages.append(f"Magic: {self.magic_damage} damage ({self.magic_cost} MP)")
        if self.healing != 0:
            messages.append(f"Heal: {'Full' if self.is_full_heal else self.healing}")
        return "\n".join(messages)


def effects_from_counts(counts: Counter[DiceType]) -> DiceEffects:
    """
    Compute the effects of a hand from the number of dice of each type.

    Args:
        counts (Counter[DiceType]): How many dice show each type.

    Returns:
        DiceEffects: The effects of the hand.

    """
    magic_cost, magic_damage = MAGIC_EFFECT.get(counts[DiceType.MAGIC], (0, 0))
    return DiceEffects(
        damage=ATTACK_DAMAGE.get(counts[DiceType.ATTACK], 0),
        defense=DEFENSE_VALUE.get(counts[DiceType.DEFENSE], 0),
        magic_damage=magic_damage,
        magic_cost=magic_cost,
        healing=HEALING_VALUE.get(counts[DiceType.HEALTH], 0),
    )


class DiceManager:
    """
    Holds the dice of a hand and their lock flags.

    Locked dice keep their face when the hand is rolled. Budget rules for
    rerolls and locks belong to the battle, not to the dice.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self._dice: list[DiceType] = []
        self._locks: list[bool] = [False] * DICE_COUNT

    @property
    def is_rolled(self) -> bool:
        return len(self._dice) == DICE_COUNT

    def get_dice(self) -> list[DiceType]:
        return list(self._dice)

    def get_locks(self) -> list[bool]:
        return list(self._locks)

    def is_locked(self, index: int) -> bool:
        return 0 <= index < DICE_COUNT and self._locks[index]

    def set_dice(self, dice: list[DiceType]) -> None:
        """
        Force the faces of the hand.

        Args:
            dice (list[DiceType]): Exactly five faces.

        Raises:
            ValueError: If the hand does not have five dice.

        """
        if len(dice) != DICE_COUNT:
            raise ValueError(f"A hand has {DICE_COUNT} dice, got {len(dice)}.")
        self._dice = list(dice)

    def toggle_lock(self, index: int) -> None:
        """Flip the lock on a die. Out-of-range indices are ignored."""
        if 0 <= index < DICE_COUNT:
            self._locks[index] = not self._locks[index]

    def reset_locks(self) -> None:
        self._locks = [False] * DICE_COUNT

    def roll(self) -> None:
        """
        Roll every unlocked die. On the first roll every die is filled,
        whatever the lock flags say.
        """
        if not self.is_rolled:
            self._dice = [self._random_face() for _ in range(DICE_COUNT)]
            return
        for index in range(DICE_COUNT):
            if not self._locks[index]:
                self._dice[index] = self._random_face()

    def get_type_count(self, dice_type: DiceType) -> int:
        return sum(1 for face in self._dice if face == dice_type)

    def calculate_effects(self) -> DiceEffects:
        """
        Compute the effects of the current hand.

        Returns:
            DiceEffects: The effects; all zero before the first roll.

        """
        return effects_from_counts(Counter(self._dice))

    def _random_face(self) -> DiceType:
        return self.rng.choice(list(DiceType))
