"""
Encounter room module for the dice crawler.

An encounter is a one-off room (shrine, strange potion, fallen adventurer,
...) that offers the player a few options. Each option owns a weighted
outcome table resolved with the same reward logic chests use.
"""

import random
from typing import Any

from pydantic import BaseModel, Field

from dicecrawler.character.player import Player
from dicecrawler.core.logging import log_debug

from .rewards import Reward, apply_reward, choose_reward


class EncounterOption(BaseModel):
    """A choice offered by an encounter."""

    label: str = Field(
        description="The text shown for the option.",
    )
    cost: int = Field(
        default=0,
        description="Gold paid up front to take this option.",
        ge=0,
    )
    outcomes: list[Reward] = Field(
        description="The weighted outcomes of the option.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.outcomes:
            raise ValueError(f"Encounter option '{self.label}' has no outcomes.")


class Encounter(BaseModel):
    """The static definition of an encounter."""

    id: str = Field(
        description="The unique key of the encounter.",
    )
    name: str = Field(
        description="The display name of the encounter.",
    )
    emoji: str = Field(
        "❓",
        description="The emoji shown for the encounter.",
    )
    description: str = Field(
        "",
        description="The text shown when the encounter starts.",
    )
    options: list[EncounterOption] = Field(
        description="The options offered to the player.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.options:
            raise ValueError(f"Encounter '{self.id}' has no options.")


class EncounterRoom:
    """
    Resolves one encounter for the player. Only one option can be taken.
    """

    def __init__(self, encounter: Encounter, player: Player, rng: random.Random) -> None:
        self.encounter = encounter
        self.player = player
        self.rng = rng
        self.resolved = False

    @property
    def options(self) -> list[EncounterOption]:
        return self.encounter.options

    def can_choose(self, index: int) -> bool:
        """True if the option exists, the room is unresolved and it is affordable."""
        if self.resolved or not 0 <= index < len(self.options):
            return False
        return self.player.gold >= self.options[index].cost

    def choose(self, index: int) -> str | None:
        """
        Take an option, paying its cost and applying one weighted outcome.

        Args:
            index (int): The index of the chosen option.

        Returns:
            str | None: The outcome description, or None if the option cannot
            be taken.

        """
        if not self.can_choose(index):
            log_debug(
                "Encounter option unavailable",
                {"encounter": self.encounter.id, "index": index},
            )
            return None
        option = self.options[index]
        if option.cost and not self.player.spend_gold(option.cost):
            return None
        outcome = choose_reward(option.outcomes, self.rng)
        self.resolved = True
        return apply_reward(self.player, outcome, self.rng)
