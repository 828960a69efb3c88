"""
Constants and enumerations for the dice crawler.

Defines global gameplay constants and the enumerations for dice faces, item
effect kinds, room kinds and character classes used throughout the game.
"""

from enum import Enum

# Number of dice in a hand.
DICE_COUNT = 5

# Rerolls granted every round before equipment bonuses.
BASE_REROLLS = 2

# Total number of rooms in a dungeon run.
DUNGEON_LENGTH = 10

# Healing value meaning "heal the gap to full HP".
FULL_HEAL = -1

# Defense value meaning "immune to the incoming attack".
IMMUNE_DEFENSE = 999

# Level-up gains.
LEVEL_UP_HP = 5
LEVEL_UP_MP = 2


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class DiceType(NiceEnum):
    """The four faces a die can land on."""

    ATTACK = "ATTACK"
    DEFENSE = "DEFENSE"
    MAGIC = "MAGIC"
    HEALTH = "HEALTH"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this die face."""
        return {
            DiceType.ATTACK: "⚔️",
            DiceType.DEFENSE: "🛡️",
            DiceType.MAGIC: "✨",
            DiceType.HEALTH: "💝",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this die face."""
        return {
            DiceType.ATTACK: "bold red",
            DiceType.DEFENSE: "bold blue",
            DiceType.MAGIC: "bold magenta",
            DiceType.HEALTH: "bold green",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies die face color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class EffectKind(NiceEnum):
    """The closed set of effects an item can carry."""

    DAMAGE = "damage"
    DEFENSE = "defense"
    HEALING = "healing"
    MP = "mp"
    MAX_HP = "maxHp"
    MAX_MP = "maxMp"
    REROLL = "reroll"

    @property
    def is_reversible(self) -> bool:
        """True for kinds whose equip-time change is undone on unequip."""
        return self in (EffectKind.MAX_HP, EffectKind.MAX_MP)

    @property
    def is_passive(self) -> bool:
        """True for kinds only read as bonuses while equipped."""
        return self in (EffectKind.DAMAGE, EffectKind.DEFENSE, EffectKind.REROLL)


class RoomKind(NiceEnum):
    """Defines the kinds of rooms a dungeon is made of."""

    MONSTER = "monster"
    CHEST = "chest"
    MERCHANT = "merchant"
    BOSS = "boss"
    ENCOUNTER = "encounter"

    @property
    def is_battle(self) -> bool:
        return self in (RoomKind.MONSTER, RoomKind.BOSS)


class CharacterClassType(NiceEnum):
    """The playable character classes."""

    KNIGHT = "KNIGHT"
    MAGE = "MAGE"
    SORCERER = "SORCERER"
