"""
Player module for the dice crawler.

Defines the Player class: resource pools, the leveling curve, gold and the
inventory of owned and equipped items.
"""

import math

from dicecrawler.core.constants import (
    LEVEL_UP_HP,
    LEVEL_UP_MP,
    CharacterClassType,
    EffectKind,
)
from dicecrawler.core.logging import log_debug, log_info
from dicecrawler.items.item import Item

from .player_inventory import PlayerInventory


def experience_for_level(level: int) -> int:
    """
    Returns the cumulative experience needed to advance past a level.

    Args:
        level (int): The current level (>= 1).

    Returns:
        int: floor(100 * 1.5 ** (level - 1)).

    """
    return math.floor(100 * math.pow(1.5, level - 1))


class Player:
    """
    Represents the player character during a dungeon run.

    Attributes:
        character_class (CharacterClassType):
            The class chosen at creation. Never changes.
        inventory (PlayerInventory):
            The owned and equipped items.

    """

    character_class: CharacterClassType
    inventory: PlayerInventory

    def __init__(
        self,
        character_class: CharacterClassType,
        max_hp: int,
        max_mp: int,
        hp: int | None = None,
        mp: int | None = None,
        level: int = 1,
        experience: int = 0,
        gold: int = 0,
    ) -> None:
        self.character_class = character_class
        self._max_hp = max(0, max_hp)
        self._max_mp = max(0, max_mp)
        self._hp = self._max_hp if hp is None else min(max(0, hp), self._max_hp)
        self._mp = self._max_mp if mp is None else min(max(0, mp), self._max_mp)
        self._level = max(1, level)
        self._experience = max(0, experience)
        self._gold = max(0, gold)

        self.inventory = PlayerInventory(owner=self)

    # ============================================================================
    # ACCESSORS
    # ============================================================================

    @property
    def hp(self) -> int:
        return self._hp

    @property
    def max_hp(self) -> int:
        return self._max_hp

    @property
    def mp(self) -> int:
        return self._mp

    @property
    def max_mp(self) -> int:
        return self._max_mp

    @property
    def level(self) -> int:
        return self._level

    @property
    def experience(self) -> int:
        return self._experience

    @property
    def gold(self) -> int:
        return self._gold

    @property
    def experience_for_next_level(self) -> int:
        """Returns the cumulative experience needed for the next level."""
        return experience_for_level(self._level)

    @property
    def equipped_items(self) -> list[Item]:
        return self.inventory.equipped_items

    @property
    def colored_name(self) -> str:
        return f"[bold blue]{self.character_class.display_name}[/]"

    def is_dead(self) -> bool:
        return self._hp <= 0

    def is_alive(self) -> bool:
        return self._hp > 0

    # ============================================================================
    # HEALTH & MAGIC
    # ============================================================================

    def heal(self, amount: int) -> int:
        """
        Heal the player without exceeding max HP.

        Args:
            amount (int): The amount to heal.

        Returns:
            int: The HP actually restored.

        """
        before = self._hp
        self._hp = min(self._max_hp, self._hp + max(0, amount))
        return self._hp - before

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

    def use_mp(self, amount: int) -> bool:
        """
        Spend MP if enough is available; otherwise leave MP untouched.

        Args:
            amount (int): The MP to spend.

        Returns:
            bool: True if the MP was spent.

        """
        if amount < 0 or self._mp < amount:
            return False
        self._mp -= amount
        return True

    def restore_mp(self, amount: int) -> int:
        """
        Restore MP without exceeding max MP.

        Args:
            amount (int): The MP to restore.

        Returns:
            int: The MP actually restored.

        """
        before = self._mp
        self._mp = min(self._max_mp, self._mp + max(0, amount))
        return self._mp - before

    def change_max_hp(self, delta: int) -> None:
        """
        Raise or lower max HP.

        A raise grows current HP by the same amount; a drop clamps current HP
        to the new maximum.

        Args:
            delta (int): The change to apply.

        """
        self._max_hp = max(0, self._max_hp + delta)
        if delta > 0:
            self._hp += delta
        self._hp = min(self._hp, self._max_hp)

    def change_max_mp(self, delta: int) -> None:
        """
        Raise or lower max MP, with the same rules as change_max_hp.

        Args:
            delta (int): The change to apply.

        """
        self._max_mp = max(0, self._max_mp + delta)
        if delta > 0:
            self._mp += delta
        self._mp = min(self._mp, self._max_mp)

    def full_restore(self) -> None:
        """Restore HP and MP to their maxima."""
        self._hp = self._max_hp
        self._mp = self._max_mp

    # ============================================================================
    # EXPERIENCE & LEVELING
    # ============================================================================

    def gain_experience(self, amount: int) -> bool:
        """
        Add experience and level up if the next threshold is reached.

        At most one level is gained per call, however far the threshold is
        overshot.

        Args:
            amount (int): The experience gained.

        Returns:
            bool: True if the player leveled up.

        """
        self._experience += max(0, amount)
        if self._experience >= self.experience_for_next_level:
            self._level_up()
            return True
        return False

    def _level_up(self) -> None:
        self._level += 1
        self._max_hp += LEVEL_UP_HP
        self._max_mp += LEVEL_UP_MP
        self.full_restore()
        log_info(
            f"Level up! Now level {self._level}",
            {"max_hp": self._max_hp, "max_mp": self._max_mp},
        )

    # ============================================================================
    # GOLD
    # ============================================================================

    def add_gold(self, amount: int) -> None:
        self._gold += max(0, amount)

    def spend_gold(self, amount: int) -> bool:
        """
        Spend gold if enough is available; otherwise leave gold untouched.

        Args:
            amount (int): The gold to spend.

        Returns:
            bool: True if the gold was spent.

        """
        if amount < 0 or self._gold < amount:
            log_debug(
                "Not enough gold",
                {"gold": self._gold, "requested": amount},
            )
            return False
        self._gold -= amount
        return True

    # ============================================================================
    # DELEGATED INVENTORY METHODS
    # ============================================================================

    def add_item(self, item: Item) -> Item:
        return self.inventory.add_item(item)

    def equip_item(self, item_id: str) -> bool:
        return self.inventory.equip_item(item_id)

    def unequip_item(self, item_id: str) -> bool:
        return self.inventory.unequip_item(item_id)

    def use_item(self, item_id: str) -> bool:
        return self.inventory.use_item(item_id)

    def get_bonus_for_type(self, kind: EffectKind) -> int:
        return self.inventory.get_bonus_for_type(kind)

    def __repr__(self) -> str:
        return (
            f"Player({self.character_class}, lvl={self._level}, "
            f"hp={self._hp}/{self._max_hp}, mp={self._mp}/{self._max_mp}, "
            f"gold={self._gold})"
        )
