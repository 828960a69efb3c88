"""
Player inventory management module for the dice crawler.

Handles adding, equipping, unequipping and consuming items for the player,
keeping the equipped items' effects reflected in the owner's resource pools.
"""

from typing import Any

from dicecrawler.core.constants import EffectKind
from dicecrawler.core.logging import log_debug
from dicecrawler.items.item import Item, ItemEffect


class PlayerInventory:
    """
    Manages the player's owned items and which of them are equipped.

    Attributes:
        items (list[Item]):
            The owned item instances, in acquisition order. Duplicates are
            allowed.

    """

    items: list[Item]

    def __init__(self, owner: Any) -> None:
        """
        Initialize the PlayerInventory with the owning player.

        Args:
            owner (Any):
                The Player instance this inventory belongs to.

        """
        self._owner = owner
        self.items = []

    @property
    def equipped_items(self) -> list[Item]:
        """Returns the currently equipped items."""
        return [item for item in self.items if item.equipped]

    def count(self, item_id: str) -> int:
        """Return how many instances of an item the player owns."""
        return sum(1 for item in self.items if item.id == item_id)

    def add_item(self, item: Item) -> Item:
        """
        Add a copy of an item to the inventory, equipping it right away if it
        is not consumable.

        Args:
            item (Item):
                The item to add. The inventory keeps its own copy.

        Returns:
            Item:
                The instance stored in the inventory.

        """
        instance = item.instantiate()
        self.items.append(instance)
        log_debug(
            f"Added {item.name} to inventory",
            {"item": item.id, "consumable": item.consumable},
        )
        if not instance.consumable:
            self._equip(instance)
        return instance

    def equip_item(self, item_id: str) -> bool:
        """
        Equip an owned, unequipped, non-consumable item.

        Args:
            item_id (str):
                The catalog id of the item to equip.

        Returns:
            bool:
                True if an item was equipped, False otherwise.

        """
        candidate = next(
            (
                item
                for item in self.items
                if item.id == item_id and not item.consumable and not item.equipped
            ),
            None,
        )
        if candidate is None:
            log_debug(
                f"Cannot equip {item_id}: not owned, consumable or already equipped",
                {"item": item_id},
            )
            return False
        self._equip(candidate)
        return True

    def unequip_item(self, item_id: str) -> bool:
        """
        Unequip an equipped item, reversing its reversible effects.

        Args:
            item_id (str):
                The catalog id of the item to unequip.

        Returns:
            bool:
                True if an item was unequipped, False otherwise.

        """
        candidate = next(
            (item for item in self.items if item.id == item_id and item.equipped),
            None,
        )
        if candidate is None:
            log_debug(f"Cannot unequip {item_id}: not equipped", {"item": item_id})
            return False
        candidate.equipped = False
        for effect in candidate.effects:
            if effect.kind.is_reversible:
                self._apply_effect(effect, sign=-1)
        log_debug(f"Unequipped {candidate.name}", {"item": candidate.id})
        return True

    def use_item(self, item_id: str) -> bool:
        """
        Consume one instance of a consumable item, applying its effects once.

        Args:
            item_id (str):
                The catalog id of the item to use.

        Returns:
            bool:
                True if the item was used, False if it is missing or not
                consumable.

        """
        candidate = next(
            (item for item in self.items if item.id == item_id and item.consumable),
            None,
        )
        if candidate is None:
            log_debug(
                f"Cannot use {item_id}: not owned or not consumable",
                {"item": item_id},
            )
            return False
        for effect in candidate.effects:
            self._apply_effect(effect)
        self.items.remove(candidate)
        log_debug(f"Used {candidate.name}", {"item": candidate.id})
        return True

    def get_bonus_for_type(self, kind: EffectKind) -> int:
        """
        Sum the value of the given effect kind across all equipped items.

        Args:
            kind (EffectKind):
                The effect kind to sum.

        Returns:
            int:
                The total bonus.

        """
        return sum(item.get_effect_total(kind) for item in self.equipped_items)

    def _equip(self, item: Item) -> None:
        item.equipped = True
        for effect in item.effects:
            self._apply_effect(effect)
        log_debug(f"Equipped {item.name}", {"item": item.id})

    def _apply_effect(self, effect: ItemEffect, sign: int = 1) -> None:
        """
        Apply a single effect to the owner.

        Passive kinds (damage, defense, reroll) have no immediate effect: they
        are read through get_bonus_for_type while the item is equipped.

        Args:
            effect (ItemEffect):
                The effect to apply.
            sign (int):
                1 to apply the effect, -1 to reverse it.

        """
        if effect.kind.is_passive:
            return
        value = effect.value * sign
        if effect.kind == EffectKind.HEALING:
            self._owner.heal(value)
        elif effect.kind == EffectKind.MP:
            self._owner.restore_mp(value)
        elif effect.kind == EffectKind.MAX_HP:
            self._owner.change_max_hp(value)
        elif effect.kind == EffectKind.MAX_MP:
            self._owner.change_max_mp(value)
