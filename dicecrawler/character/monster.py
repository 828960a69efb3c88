"""
Monster module for the dice crawler.

Defines the static MonsterStats template and the Monster fought in a battle
room.
"""

import random
from typing import Any

from pydantic import BaseModel, Field


class MonsterStats(BaseModel):
    """The static template a monster is created from."""

    name: str = Field(
        description="The name of the monster.",
    )
    emoji: str = Field(
        "👾",
        description="The emoji shown for the monster.",
    )
    hp: int = Field(
        description="The maximum HP of the monster.",
        gt=0,
    )
    min_attack: int = Field(
        description="The lowest attack value the monster can roll.",
        ge=0,
    )
    max_attack: int = Field(
        description="The highest attack value the monster can roll.",
        ge=0,
    )
    experience_reward: int = Field(
        default=0,
        description="The experience granted when the monster is defeated.",
        ge=0,
    )
    gold_reward: int = Field(
        default=0,
        description="The gold granted when the monster is defeated.",
        ge=0,
    )

    def model_post_init(self, _: Any) -> None:
        if self.min_attack > self.max_attack:
            raise ValueError(
                f"Monster '{self.name}' has min_attack greater than max_attack."
            )


class Monster:
    """
    A monster instance fought in a single battle.

    Only the current HP changes over the monster's lifetime.
    """

    def __init__(self, stats: MonsterStats) -> None:
        self._stats = stats
        self._hp = stats.hp

    @property
    def name(self) -> str:
        return self._stats.name

    @property
    def emoji(self) -> str:
        return self._stats.emoji

    @property
    def hp(self) -> int:
        return self._hp

    @property
    def max_hp(self) -> int:
        return self._stats.hp

    @property
    def min_attack(self) -> int:
        return self._stats.min_attack

    @property
    def max_attack(self) -> int:
        return self._stats.max_attack

    @property
    def experience_reward(self) -> int:
        return self._stats.experience_reward

    @property
    def gold_reward(self) -> int:
        return self._stats.gold_reward

    @property
    def colored_name(self) -> str:
        return f"[bold red]{self.emoji} {self.name}[/]"

    def take_damage(self, amount: int) -> int:
        """
        Reduce HP, never below zero.

        Args:
            amount (int): The damage to take.

        Returns:
            int: The HP actually lost.

        """
        before = self._hp
        self._hp = max(0, self._hp - max(0, amount))
        return before - self._hp

    def calculate_attack(self, rng: random.Random) -> int:
        """
        Roll the monster's next attack value.

        Args:
            rng (random.Random): The random source.

        Returns:
            int: A uniform integer in [min_attack, max_attack].

        """
        return rng.randint(self._stats.min_attack, self._stats.max_attack)

    def is_dead(self) -> bool:
        return self._hp <= 0

    def __repr__(self) -> str:
        return f"Monster({self.name}, hp={self._hp}/{self.max_hp})"
