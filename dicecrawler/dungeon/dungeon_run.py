"""
Dungeon run module for the dice crawler.

Ties a player to one generated room sequence and builds the resolver for the
room the player is currently in.
"""

import random

from dicecrawler.character.monster import Monster
from dicecrawler.character.player import Player
from dicecrawler.combat.battle_manager import BattleManager
from dicecrawler.core.constants import RoomKind
from dicecrawler.core.content import ContentRepository
from dicecrawler.core.logging import log_debug

from .chest import ChestRoom
from .dungeon_manager import DungeonManager, RoomInfo, describe_room
from .encounter import EncounterRoom
from .merchant import MerchantRoom


class DungeonRun:
    """
    A single run through a generated dungeon.

    Attributes:
        player (Player):
            The player exploring the dungeon.
        rooms (tuple[RoomKind, ...]):
            The room sequence, fixed for the whole run.
        current_index (int):
            The index of the room the player is in.

    """

    player: Player
    rooms: tuple[RoomKind, ...]
    current_index: int

    def __init__(
        self,
        player: Player,
        rng: random.Random | None = None,
        repo: ContentRepository | None = None,
        rooms: list[RoomKind] | None = None,
    ) -> None:
        """
        Initialize the DungeonRun.

        Args:
            player (Player): The player exploring the dungeon.
            rng (random.Random | None): The random source shared by every
                room of the run.
            repo (ContentRepository | None): The content tables to use.
            rooms (list[RoomKind] | None): A fixed room sequence; a new one is
                generated when omitted.

        """
        self.player = player
        self.rng = rng or random.Random()
        self.repo = repo or ContentRepository()
        if rooms is None:
            rooms = DungeonManager(self.rng).generate_dungeon()
        self.rooms = tuple(rooms)
        self.current_index = 0

    @property
    def current_room(self) -> RoomKind | None:
        """Returns the current room kind, or None once the run is complete."""
        if self.is_complete:
            return None
        return self.rooms[self.current_index]

    @property
    def is_complete(self) -> bool:
        return self.current_index >= len(self.rooms)

    @property
    def is_over(self) -> bool:
        return self.is_complete or self.player.is_dead()

    def room_info(self) -> RoomInfo | None:
        room = self.current_room
        return describe_room(room) if room else None

    def advance(self) -> bool:
        """
        Move to the next room.

        Returns:
            bool: True if there is a room left to enter.

        """
        if not self.is_complete:
            self.current_index += 1
        log_debug("Advanced to room", {"index": self.current_index})
        return not self.is_complete

    # ============================================================================
    # ROOM BUILDERS
    # ============================================================================

    def create_monster(self) -> Monster:
        """
        Create the monster for the current room, picked uniformly from the
        boss table in the boss room and from the monster table elsewhere.

        Returns:
            Monster: A fresh monster.

        """
        table = self.repo.bosses if self.current_room == RoomKind.BOSS else self.repo.monsters
        return Monster(self.rng.choice(table))

    def start_battle(self) -> BattleManager:
        """Start a battle against a fresh monster for the current room."""
        return BattleManager(self.player, self.create_monster(), self.rng)

    def open_chest(self) -> ChestRoom:
        return ChestRoom(self.repo.chest_rewards, self.player, self.rng)

    def open_merchant(self) -> MerchantRoom:
        pool = [self.repo.items[item_id] for item_id in self.repo.merchant_pool]
        return MerchantRoom(pool, self.player, self.rng)

    def start_encounter(self) -> EncounterRoom:
        """Start an encounter picked uniformly from the encounter table."""
        return EncounterRoom(self.rng.choice(self.repo.encounters), self.player, self.rng)
