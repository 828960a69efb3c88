"""
Merchant room module for the dice crawler.

The merchant offers three items drawn from a fixed pool. The player can buy
offered items or pay an escalating fee to see a new selection.
"""

import random

from dicecrawler.character.player import Player
from dicecrawler.core.logging import log_debug
from dicecrawler.items.item import Item

# Number of items on offer at once.
MERCHANT_OFFER_SIZE = 3

# Fees for the first rerolls, then REROLL_COST_STEP more each time, up to the cap.
REROLL_COSTS = (10, 25, 50)
REROLL_COST_STEP = 25
REROLL_COST_CAP = 100


def reroll_cost(uses: int) -> int:
    """
    Returns the fee for rerolling the offer after `uses` previous rerolls.

    Args:
        uses (int): How many rerolls were already bought in this room.

    Returns:
        int: 10, 25, 50, 75, 100, 100, ...

    """
    if uses < len(REROLL_COSTS):
        return REROLL_COSTS[uses]
    extra = (uses - len(REROLL_COSTS) + 1) * REROLL_COST_STEP
    return min(REROLL_COST_CAP, REROLL_COSTS[-1] + extra)


class MerchantRoom:
    """
    A merchant selling a rotating selection of items.

    Attributes:
        offers (list[Item]):
            The items currently for sale.
        reroll_count (int):
            How many times the offer was rerolled in this room.

    """

    offers: list[Item]
    reroll_count: int

    def __init__(self, pool: list[Item], player: Player, rng: random.Random) -> None:
        self.pool = list(pool)
        self.player = player
        self.rng = rng
        self.reroll_count = 0
        self.offers = []
        self._draw_offers()

    @property
    def current_reroll_cost(self) -> int:
        return reroll_cost(self.reroll_count)

    def can_afford(self, item: Item) -> bool:
        return self.player.gold >= item.cost

    def can_reroll(self) -> bool:
        return self.player.gold >= self.current_reroll_cost

    def buy(self, item_id: str) -> Item | None:
        """
        Buy an offered item: the gold is paid and the item granted together.

        Args:
            item_id (str): The catalog id of the offered item.

        Returns:
            Item | None: The instance added to the inventory, or None if the
            item is not on offer or the player cannot afford it.

        """
        item = next((offer for offer in self.offers if offer.id == item_id), None)
        if item is None:
            log_debug(f"{item_id} is not on offer", {"item": item_id})
            return None
        if not self.player.spend_gold(item.cost):
            return None
        self.offers.remove(item)
        log_debug(f"Bought {item.name}", {"cost": item.cost, "gold": self.player.gold})
        return self.player.add_item(item)

    def reroll_offers(self) -> bool:
        """
        Pay the current fee and draw a new selection of items.

        Returns:
            bool: True if the offer was rerolled.

        """
        cost = self.current_reroll_cost
        if not self.player.spend_gold(cost):
            return False
        self.reroll_count += 1
        self._draw_offers()
        log_debug(
            "Merchant offer rerolled",
            {"cost": cost, "next_cost": self.current_reroll_cost},
        )
        return True

    def _draw_offers(self) -> None:
        """Shuffle the pool and put the first items on offer."""
        shuffled = list(self.pool)
        self.rng.shuffle(shuffled)
        self.offers = shuffled[:MERCHANT_OFFER_SIZE]
