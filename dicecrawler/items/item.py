"""
Item module for the dice crawler.

Defines the Item model and its effect descriptors. Catalog entries are
read-only templates; every item granted to a player is an independent copy
carrying its own equipped flag.
"""

from typing import Any

from pydantic import BaseModel, Field

from dicecrawler.core.constants import EffectKind


class ItemEffect(BaseModel):
    """A single tagged effect carried by an item."""

    kind: EffectKind = Field(
        description="The kind of effect (e.g., damage, maxHp, reroll).",
    )
    value: int = Field(
        description="The numeric payload of the effect.",
    )

    def __str__(self) -> str:
        sign = "+" if self.value >= 0 else ""
        return f"{self.kind.value} {sign}{self.value}"


class Item(BaseModel):
    """
    Represents an item that can be bought, found or granted to the player.

    Consumable items are used up when used; the others are equipment that
    stays active while equipped.
    """

    id: str = Field(
        description="The unique catalog key of the item.",
    )
    name: str = Field(
        description="The display name of the item.",
    )
    description: str = Field(
        "",
        description="A brief description of the item.",
    )
    emoji: str = Field(
        "❔",
        description="The emoji shown next to the item.",
    )
    cost: int = Field(
        default=0,
        description="The price of the item at the merchant.",
        ge=0,
    )
    effects: list[ItemEffect] = Field(
        default_factory=list,
        description="The effects applied when the item is equipped or used.",
    )
    consumable: bool = Field(
        default=False,
        description="Whether the item is used up after use.",
    )
    equipped: bool = Field(
        default=False,
        description="Whether this instance is currently equipped.",
    )

    def model_post_init(self, _: Any) -> None:
        """
        Validate the item's properties.

        Raises:
            ValueError: If any item property is invalid.

        """
        if not self.id or not self.name:
            raise ValueError("Item id and name must not be empty.")
        if self.consumable and self.equipped:
            raise ValueError(f"Consumable item '{self.id}' cannot be equipped.")

    @property
    def colored_name(self) -> str:
        """Returns the item name with rich markup for terminal display."""
        color = "bold cyan" if self.consumable else "bold yellow"
        return f"[{color}]{self.emoji} {self.name}[/]"

    def get_effect_total(self, kind: EffectKind) -> int:
        """
        Sums the values of all the item's effects of the given kind.

        Args:
            kind (EffectKind): The effect kind to sum.

        Returns:
            int: The total value for that kind.

        """
        return sum(effect.value for effect in self.effects if effect.kind == kind)

    def instantiate(self) -> "Item":
        """
        Returns an independent, unequipped copy of this item.

        Returns:
            Item: The new item instance.

        """
        return self.model_copy(update={"equipped": False}, deep=True)
