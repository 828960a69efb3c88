"""
Tests for dungeon generation and the dungeon run.
"""

import random

import pytest

from dicecrawler.character.player import Player
from dicecrawler.combat.battle_manager import BattleState
from dicecrawler.core.constants import CharacterClassType, RoomKind
from dicecrawler.core.content import ContentRepository
from dicecrawler.dungeon.dungeon_manager import DungeonManager, describe_room
from dicecrawler.dungeon.dungeon_run import DungeonRun


@pytest.fixture
def generated():
    rng = random.Random(2024)
    manager = DungeonManager(rng)
    return [manager.generate_dungeon() for _ in range(1000)]


def test_layout_invariants(generated):
    for rooms in generated:
        assert len(rooms) == 10
        assert rooms[8] == RoomKind.MERCHANT
        assert rooms[9] == RoomKind.BOSS
        assert rooms[:8].count(RoomKind.ENCOUNTER) == 1
        assert RoomKind.BOSS not in rooms[:9]


def test_monster_follows_chest_or_merchant(generated):
    for rooms in generated:
        for index in range(1, 8):
            if rooms[index - 1] in (RoomKind.CHEST, RoomKind.MERCHANT):
                assert rooms[index] in (RoomKind.MONSTER, RoomKind.ENCOUNTER)


def test_encounter_is_placed_past_the_middle(generated):
    for rooms in generated:
        assert rooms.index(RoomKind.ENCOUNTER) == 5


def test_every_normal_kind_appears(generated):
    kinds = {room for rooms in generated for room in rooms[:8]}
    assert kinds == {
        RoomKind.MONSTER,
        RoomKind.CHEST,
        RoomKind.MERCHANT,
        RoomKind.ENCOUNTER,
    }


def test_same_seed_same_dungeon():
    first = DungeonManager(random.Random(5)).generate_dungeon()
    second = DungeonManager(random.Random(5)).generate_dungeon()
    assert first == second


def test_short_dungeon_uses_fallback_encounter():
    rng = random.Random(11)
    for _ in range(200):
        rooms = DungeonManager(rng, dungeon_length=4).generate_dungeon()
        assert rooms[0] == RoomKind.ENCOUNTER
        assert rooms[2:] == [RoomKind.MERCHANT, RoomKind.BOSS]


def test_too_short_dungeon():
    with pytest.raises(ValueError):
        DungeonManager(dungeon_length=3)


def test_describe_room():
    assert describe_room(RoomKind.BOSS).title == "Boss Room"
    assert describe_room(RoomKind.ENCOUNTER).emoji == "❓"


@pytest.fixture
def player():
    return Player(CharacterClassType.KNIGHT, max_hp=25, max_mp=5, gold=10)


def test_run_walks_every_room(player):
    run = DungeonRun(player, random.Random(1))
    visited = []
    while not run.is_complete:
        visited.append(run.current_room)
        run.advance()
    assert tuple(visited) == run.rooms
    assert run.current_room is None
    assert run.room_info() is None
    assert not run.advance()


def test_run_boss_room_spawns_a_boss(player):
    rooms = [RoomKind.MONSTER, RoomKind.ENCOUNTER, RoomKind.MERCHANT, RoomKind.BOSS]
    run = DungeonRun(player, random.Random(1), rooms=rooms)
    boss_names = {stats.name for stats in ContentRepository().bosses}
    monster_names = {stats.name for stats in ContentRepository().monsters}

    assert run.create_monster().name in monster_names
    for _ in range(3):
        run.advance()
    assert run.current_room == RoomKind.BOSS
    battle = run.start_battle()
    assert battle.monster.name in boss_names
    assert battle.state == BattleState.AWAITING_PLAY


def test_run_builds_room_resolvers(player):
    rooms = [RoomKind.CHEST, RoomKind.ENCOUNTER, RoomKind.MERCHANT, RoomKind.BOSS]
    run = DungeonRun(player, random.Random(8), rooms=rooms)

    assert run.open_chest().open() is not None
    run.advance()
    encounter = run.start_encounter()
    assert encounter.options
    run.advance()
    assert len(run.open_merchant().offers) == 3


def test_run_is_over_when_player_dies(player):
    run = DungeonRun(player, random.Random(1))
    player.take_damage(100)
    assert run.is_over
    assert not run.is_complete
