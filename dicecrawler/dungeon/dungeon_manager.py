"""
Dungeon manager module for the dice crawler.

Generates the ordered room sequence of a dungeon run and maps each room kind
to the static descriptor shown to the player.
"""

import random

from pydantic import BaseModel, Field

from dicecrawler.core.constants import DUNGEON_LENGTH, RoomKind
from dicecrawler.core.logging import log_debug

# Weighted roll thresholds over [0, 100).
CHEST_THRESHOLD = 35
MONSTER_THRESHOLD = 85


class RoomInfo(BaseModel):
    """The static descriptor of a room kind."""

    title: str = Field(description="The title of the room.")
    emoji: str = Field(description="The emoji shown for the room.")
    description: str = Field(description="The text shown when entering the room.")


ROOM_INFO: dict[RoomKind, RoomInfo] = {
    RoomKind.MONSTER: RoomInfo(
        title="Monster Room",
        emoji="👾",
        description="A fearsome monster blocks your path!",
    ),
    RoomKind.CHEST: RoomInfo(
        title="Treasure Room",
        emoji="💎",
        description="You found a treasure chest!",
    ),
    RoomKind.MERCHANT: RoomInfo(
        title="Merchant Room",
        emoji="🏪",
        description="A friendly merchant offers their wares.",
    ),
    RoomKind.BOSS: RoomInfo(
        title="Boss Room",
        emoji="👑",
        description="The dungeon boss awaits...",
    ),
    RoomKind.ENCOUNTER: RoomInfo(
        title="Mysterious Room",
        emoji="❓",
        description="A strange situation presents itself...",
    ),
}


def describe_room(kind: RoomKind) -> RoomInfo:
    """
    Returns the descriptor of a room kind.

    Args:
        kind (RoomKind): The room kind.

    Returns:
        RoomInfo: Its title, emoji and description.

    """
    return ROOM_INFO[kind]


class DungeonManager:
    """Generates room sequences for dungeon runs."""

    def __init__(
        self, rng: random.Random | None = None, dungeon_length: int = DUNGEON_LENGTH
    ) -> None:
        if dungeon_length < 4:
            raise ValueError("A dungeon needs at least 4 rooms.")
        self.rng = rng or random.Random()
        self.dungeon_length = dungeon_length

    def generate_dungeon(self) -> list[RoomKind]:
        """
        Generate the room sequence of one run.

        The rooms before the final Merchant and Boss pair follow three rules:
        exactly one Encounter placed at the first index past the halfway
        point (and before the last three rooms), a Monster room forced after
        every Chest or Merchant, and a weighted roll otherwise.

        Returns:
            list[RoomKind]: The rooms, in order.

        """
        rooms: list[RoomKind] = []
        has_encounter = False
        # Encounters may not be placed at or after this index.
        encounter_limit = self.dungeon_length - 3

        for index in range(self.dungeon_length - 2):
            last_room = rooms[-1] if rooms else None
            roll = self.rng.random() * 100

            if (
                not has_encounter
                and index >= self.dungeon_length / 2
                and index < encounter_limit
            ):
                rooms.append(RoomKind.ENCOUNTER)
                has_encounter = True
                continue

            if last_room in (RoomKind.CHEST, RoomKind.MERCHANT):
                rooms.append(RoomKind.MONSTER)
                continue

            if roll < CHEST_THRESHOLD:
                rooms.append(RoomKind.CHEST)
            elif roll < MONSTER_THRESHOLD:
                rooms.append(RoomKind.MONSTER)
            else:
                rooms.append(RoomKind.MERCHANT)

        if not has_encounter:
            rooms[self.rng.randrange(encounter_limit)] = RoomKind.ENCOUNTER

        rooms.append(RoomKind.MERCHANT)
        rooms.append(RoomKind.BOSS)

        log_debug("Generated dungeon", {"rooms": [str(room) for room in rooms]})
        return rooms
