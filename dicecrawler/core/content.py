"""
Content repository module for the dice crawler.

Loads the static game tables (character classes, item catalog, monsters,
bosses, chest rewards, encounters and the merchant pool) from the JSON files
shipped in the ``dicecrawler/data`` directory.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from catchery import log_warning

from dicecrawler.character.character_class import CharacterClass
from dicecrawler.character.monster import MonsterStats
from dicecrawler.core.constants import CharacterClassType
from dicecrawler.core.logging import log_debug
from dicecrawler.core.utils import Singleton
from dicecrawler.dungeon.encounter import Encounter
from dicecrawler.dungeon.rewards import Reward, RewardKind
from dicecrawler.items.item import Item

# The data directory bundled with the package.
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class ContentRepository(metaclass=Singleton):
    """
    One-stop registry for every static game table that needs fast access.
    """

    classes: dict[CharacterClassType, CharacterClass]
    items: dict[str, Item]
    monsters: list[MonsterStats]
    bosses: list[MonsterStats]
    chest_rewards: list[Reward]
    encounters: list[Encounter]
    merchant_pool: list[str]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing the data files. The bundled data is
                loaded on first use when none is given.

        """
        if data_dir:
            self.reload(data_dir)
        elif not getattr(self, "loaded", False):
            self.reload(DEFAULT_DATA_DIR)

    def reload(self, root: Path) -> None:
        """
        (Re)load all JSON assets from disk.

        Args:
            root (Path):
                The directory containing data files to load.

        Raises:
            ValueError: If a file is missing, malformed, or references an
            unknown item.

        """
        tables: dict[str, Any] = {}
        tables["items"] = _load_json_file(root / "items.json", self._load_items, "items")
        tables["classes"] = _load_json_file(
            root / "classes.json", self._load_classes, "character classes"
        )
        tables["monsters"] = _load_json_file(
            root / "monsters.json", self._load_monsters, "monsters"
        )
        tables["bosses"] = _load_json_file(
            root / "bosses.json", self._load_monsters, "bosses"
        )
        tables["chest_rewards"] = _load_json_file(
            root / "chest_rewards.json", self._load_rewards, "chest rewards"
        )
        tables["encounters"] = _load_json_file(
            root / "encounters.json", self._load_encounters, "encounters"
        )
        tables["merchant_pool"] = _load_json_file(
            root / "merchant_pool.json", self._load_merchant_pool, "merchant pool"
        )
        # Nothing is replaced unless every table loads and validates.
        self._check_item_references(tables)
        self.__dict__.update(tables)
        self.loaded = True

    def get_item(self, item_id: str) -> Item | None:
        """Get a catalog item by id, or None if not found."""
        item = self.items.get(item_id)
        if item is None:
            log_warning(
                f"Item '{item_id}' not found in the catalog.",
                {"item_id": item_id, "available": list(self.items.keys())},
            )
        return item

    def get_character_class(self, class_type: CharacterClassType) -> CharacterClass:
        """Get a character class definition by type."""
        return self.classes[class_type]

    @staticmethod
    def _check_item_references(tables: dict[str, Any]) -> None:
        """Make sure every table only references catalog items."""
        referenced: list[tuple[str, str]] = []
        for character_class in tables["classes"].values():
            referenced.extend(
                (f"class {character_class.name}", item_id)
                for item_id in character_class.starting_items
            )
        referenced.extend(("merchant pool", item_id) for item_id in tables["merchant_pool"])
        for reward in tables["chest_rewards"]:
            if reward.kind == RewardKind.ITEM and reward.item_id:
                referenced.append(("chest rewards", reward.item_id))
        for encounter in tables["encounters"]:
            for option in encounter.options:
                for reward in option.outcomes:
                    if reward.kind == RewardKind.ITEM and reward.item_id:
                        referenced.append((f"encounter {encounter.id}", reward.item_id))
        for source, item_id in referenced:
            if item_id not in tables["items"]:
                raise ValueError(f"Unknown item '{item_id}' referenced by {source}.")

    @staticmethod
    def _load_items(data: list[dict]) -> dict[str, Item]:
        """
        Load the item catalog from JSON data.

        Args:
            data (list[dict]): List of item data dictionaries.

        Returns:
            dict[str, Item]: Dictionary mapping item ids to Item objects.

        Raises:
            ValueError: If duplicate item ids are found.

        """
        items: dict[str, Item] = {}
        for item_data in data:
            item = Item(**item_data)
            if item.id in items:
                raise ValueError(f"Duplicate item id: {item.id}")
            items[item.id] = item
        return items

    @staticmethod
    def _load_classes(data: list[dict]) -> dict[CharacterClassType, CharacterClass]:
        """
        Load character classes from JSON data.

        Raises:
            ValueError: If duplicate classes are found.

        """
        classes: dict[CharacterClassType, CharacterClass] = {}
        for class_data in data:
            character_class = CharacterClass(**class_data)
            if character_class.class_type in classes:
                raise ValueError(f"Duplicate class: {character_class.class_type}")
            classes[character_class.class_type] = character_class
        return classes

    @staticmethod
    def _load_monsters(data: list[dict]) -> list[MonsterStats]:
        return [MonsterStats(**monster_data) for monster_data in data]

    @staticmethod
    def _load_rewards(data: list[dict]) -> list[Reward]:
        return [Reward(**reward_data) for reward_data in data]

    @staticmethod
    def _load_encounters(data: list[dict]) -> list[Encounter]:
        """
        Load encounters from JSON data.

        Raises:
            ValueError: If duplicate encounter ids are found.

        """
        encounters: list[Encounter] = []
        seen: set[str] = set()
        for encounter_data in data:
            encounter = Encounter(**encounter_data)
            if encounter.id in seen:
                raise ValueError(f"Duplicate encounter id: {encounter.id}")
            seen.add(encounter.id)
            encounters.append(encounter)
        return encounters

    @staticmethod
    def _load_merchant_pool(data: list[Any]) -> list[str]:
        if not all(isinstance(item_id, str) for item_id in data):
            raise ValueError("Merchant pool must be a list of item ids.")
        return list(data)


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[Any]], Any],
    description: str,
) -> Any:
    """Helper to load and validate JSON files"""
    try:
        log_debug(f"Loading {description} using {loader_func.__name__}...")
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not data:
            raise ValueError(f"Empty data list in {filepath}")
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}") from e
