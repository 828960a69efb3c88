"""
Rewards module for the dice crawler.

Defines the weighted reward entries used by chest and encounter rooms and
the logic that applies a reward to the player. Applying a reward always
mutates the player and produces its description together.
"""

import random
from typing import Any

from pydantic import BaseModel, Field

from dicecrawler.character.player import Player
from dicecrawler.core.constants import NiceEnum
from dicecrawler.core.logging import log_debug
from dicecrawler.core.utils import weighted_choice


class RewardKind(NiceEnum):
    """The kinds of outcome a reward entry can produce."""

    GOLD = "GOLD"
    ITEM = "ITEM"
    HEAL = "HEAL"
    RESTORE_MP = "RESTORE_MP"
    FULL_RESTORE = "FULL_RESTORE"
    MAX_HP = "MAX_HP"
    MAX_MP = "MAX_MP"
    DAMAGE = "DAMAGE"
    NOTHING = "NOTHING"


class Reward(BaseModel):
    """A single weighted entry of a reward table."""

    kind: RewardKind = Field(
        description="The kind of outcome.",
    )
    weight: float = Field(
        default=1.0,
        description="The relative weight of this entry in its table.",
        ge=0,
    )
    amount: int = Field(
        default=0,
        description="The fixed amount, used when no range is given.",
        ge=0,
    )
    min_amount: int | None = Field(
        default=None,
        description="The lower bound of a random amount (inclusive).",
        ge=0,
    )
    max_amount: int | None = Field(
        default=None,
        description="The upper bound of a random amount (inclusive).",
        ge=0,
    )
    item_id: str | None = Field(
        default=None,
        description="The catalog id of the granted item, for ITEM rewards.",
    )
    message: str | None = Field(
        default=None,
        description="Optional flavour text shown before the outcome.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.kind == RewardKind.ITEM and not self.item_id:
            raise ValueError("ITEM rewards must name an item_id.")
        if (self.min_amount is None) != (self.max_amount is None):
            raise ValueError("min_amount and max_amount must be given together.")
        if (
            self.min_amount is not None
            and self.max_amount is not None
            and self.min_amount > self.max_amount
        ):
            raise ValueError("min_amount cannot be greater than max_amount.")

    def roll_amount(self, rng: random.Random) -> int:
        """
        Returns the amount for this reward.

        Args:
            rng (random.Random): The random source.

        Returns:
            int: A uniform draw in [min_amount, max_amount], or the fixed
            amount when no range is set.

        """
        if self.min_amount is not None and self.max_amount is not None:
            return rng.randint(self.min_amount, self.max_amount)
        return self.amount


def choose_reward(rewards: list[Reward], rng: random.Random) -> Reward:
    """
    Pick one entry of a reward table by cumulative weight.

    Args:
        rewards (list[Reward]): The reward table.
        rng (random.Random): The random source.

    Returns:
        Reward: The selected entry.

    """
    return weighted_choice(rng, rewards, lambda reward: reward.weight)


def apply_reward(player: Player, reward: Reward, rng: random.Random) -> str:
    """
    Apply a reward to the player and describe what happened.

    Args:
        player (Player): The player receiving the reward.
        reward (Reward): The reward to apply.
        rng (random.Random): The random source for ranged amounts.

    Returns:
        str: The description of the applied reward.

    """
    from dicecrawler.core.content import ContentRepository

    amount = reward.roll_amount(rng)

    if reward.kind == RewardKind.GOLD:
        player.add_gold(amount)
        text = f"💰 Found {amount} gold!"
    elif reward.kind == RewardKind.ITEM:
        assert reward.item_id is not None
        item = ContentRepository().get_item(reward.item_id)
        if item is None:
            raise ValueError(f"Unknown item '{reward.item_id}' in reward table.")
        player.add_item(item)
        text = f"{item.emoji} Found a {item.name}!"
    elif reward.kind == RewardKind.HEAL:
        healed = player.heal(amount)
        text = f"💝 Recovered {healed} HP."
    elif reward.kind == RewardKind.RESTORE_MP:
        restored = player.restore_mp(amount)
        text = f"✨ Recovered {restored} MP."
    elif reward.kind == RewardKind.FULL_RESTORE:
        player.full_restore()
        text = "🌟 HP and MP fully restored!"
    elif reward.kind == RewardKind.MAX_HP:
        player.change_max_hp(amount)
        text = f"❤️ Max HP increased by {amount}!"
    elif reward.kind == RewardKind.MAX_MP:
        player.change_max_mp(amount)
        text = f"🔷 Max MP increased by {amount}!"
    elif reward.kind == RewardKind.DAMAGE:
        lost = player.take_damage(amount)
        text = f"💥 Lost {lost} HP!"
    else:
        text = "Nothing happens."

    if reward.message:
        text = f"{reward.message}\n{text}"

    log_debug(
        "Applied reward",
        {"kind": reward.kind, "amount": amount, "item": reward.item_id},
    )
    return text
