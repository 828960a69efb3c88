"""
User interface module for the dice crawler.

Provides console-based user interface components for playing the game:
status lines, dice display, and prompts for battle commands, room options and
the merchant's shop.
"""

from typing import Any

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from dicecrawler.character.character_class import CharacterClass
from dicecrawler.character.monster import Monster
from dicecrawler.character.player import Player
from dicecrawler.combat.battle_manager import BattleManager
from dicecrawler.core.utils import ccapture, make_bar
from dicecrawler.dungeon.merchant import MerchantRoom
from dicecrawler.items.item import Item


def player_status_line(player: Player) -> str:
    """
    Returns a one-line summary of the player's resources.

    Args:
        player (Player): The player to describe.

    Returns:
        str: The status line with rich markup.

    """
    return (
        f"{player.colored_name} Lv.{player.level}  "
        f"❤️ {player.hp:>3}/{player.max_hp:<3} {make_bar(player.hp, player.max_hp, color='red')}  "
        f"✨ {player.mp:>3}/{player.max_mp:<3} {make_bar(player.mp, player.max_mp, color='blue')}  "
        f"💰 {player.gold}  ⭐ {player.experience}/{player.experience_for_next_level}"
    )


def monster_status_line(monster: Monster) -> str:
    """Returns a one-line summary of the monster's health."""
    return (
        f"{monster.colored_name}  "
        f"❤️ {monster.hp:>3}/{monster.max_hp:<3} "
        f"{make_bar(monster.hp, monster.max_hp, color='red')}"
    )


def dice_table(battle: BattleManager) -> Table:
    """Renders the current hand, with locks, as a table."""
    table = Table(title="Dice", pad_edge=False)
    dice = battle.context.dice.get_dice()
    locks = battle.context.dice.get_locks()
    for index in range(len(dice)):
        table.add_column(str(index + 1), justify="center")
    table.add_row(*(f"{face.emoji} {face.colored_name}" for face in dice))
    table.add_row(*("🔒" if locked else "" for locked in locks))
    return table


class PlayerInterface:
    """
    Command-line interface for player interactions.

    Uses rich tables for menus and prompt_toolkit for input with numeric and
    alphabetic shortcuts.
    """

    def __init__(self) -> None:
        self._session: PromptSession | None = None

    @property
    def session(self) -> PromptSession:
        """One session keeps history; it is created on first prompt."""
        if self._session is None:
            self._session = PromptSession(erase_when_done=True)
        return self._session

    def ask(self, prompt: str) -> str:
        """Prompt until the user types something, and return it stripped."""
        while True:
            answer = self.session.prompt(ANSI(prompt))
            if answer and answer.strip():
                return answer.strip()

    def choose_class(self, classes: list[CharacterClass]) -> CharacterClass:
        """
        Choose a character class.

        Args:
            classes (list[CharacterClass]): The playable classes.

        Returns:
            CharacterClass: The selected class.

        """
        table = Table(title="Choose your character", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Class", style="bold")
        table.add_column("HP", justify="right")
        table.add_column("MP", justify="right")
        table.add_column("Description")
        for i, character_class in enumerate(classes, 1):
            table.add_row(
                str(i),
                f"{character_class.emoji} {character_class.name}",
                str(character_class.base_hp),
                str(character_class.base_mp),
                character_class.description,
            )
        prompt = "\n" + ccapture(table) + "\nClass > "
        while True:
            index = self.get_digit_choice(self.ask(prompt)) - 1
            if 0 <= index < len(classes):
                return classes[index]

    def choose_battle_command(self, battle: BattleManager) -> str:
        """
        Ask for the next battle command.

        Returns:
            str: "p" to play the hand, "r" to reroll, "1"-"5" to toggle a
            lock, "i" to use an item.

        """
        effects = battle.current_effects()
        prompt = (
            "\n"
            + ccapture(monster_status_line(battle.monster))
            + f"\nNext attack: {battle.next_monster_attack}\n"
            + ccapture(player_status_line(battle.player))
            + "\n"
            + ccapture(dice_table(battle))
            + "\n"
            + (effects.preview() or "No combination")
            + f"\n\n[p] Play hand  [r] Reroll ({battle.rerolls_left} left)"
            + "  [1-5] Lock/unlock  [i] Use item\nCommand > "
        )
        while True:
            answer = self.ask(prompt).lower()
            if answer in ("p", "r", "i") or self.get_digit_choice(answer) in range(1, 6):
                return answer

    def choose_item(self, items: list[Item], title: str = "Items") -> Item | None:
        """
        Choose an item from a list.

        Returns:
            Item | None: The chosen item, or None to go back.

        """
        if not items:
            return None
        table = Table(title=title, pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Item", style="bold")
        table.add_column("Description")
        for i, item in enumerate(items, 1):
            table.add_row(str(i), f"{item.emoji} {item.name}", item.description)
        table.add_row()
        table.add_row("q", "Back", "")
        prompt = "\n" + ccapture(table) + "\nItem > "
        while True:
            answer = self.ask(prompt)
            if answer.lower() == "q":
                return None
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(items):
                return items[index]

    def choose_option(self, title: str, labels: list[str]) -> int:
        """
        Choose one of several labelled options.

        Returns:
            int: The 0-based index of the chosen option.

        """
        table = Table(title=title, pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Option", style="bold")
        for i, label in enumerate(labels, 1):
            table.add_row(str(i), label)
        prompt = "\n" + ccapture(table) + "\nChoice > "
        while True:
            index = self.get_digit_choice(self.ask(prompt)) - 1
            if 0 <= index < len(labels):
                return index

    def choose_merchant_action(self, merchant: MerchantRoom) -> Item | str:
        """
        Show the merchant's offer and ask what to do.

        Returns:
            Item | str: The item to buy, "r" to reroll the offer, or "q" to
            leave.

        """
        table = Table(title=f"Merchant  💰 {merchant.player.gold} gold", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Item", style="bold")
        table.add_column("Cost", justify="right", style="yellow")
        table.add_column("Description")
        for i, item in enumerate(merchant.offers, 1):
            cost_style = "" if merchant.can_afford(item) else "[dim]"
            table.add_row(
                str(i),
                f"{item.emoji} {item.name}",
                f"{cost_style}{item.cost}",
                item.description,
            )
        table.add_row()
        if merchant.can_reroll():
            table.add_row("r", f"Reroll offer ({merchant.current_reroll_cost} gold)", "", "")
        table.add_row("q", "Leave", "", "")
        prompt = "\n" + ccapture(table) + "\nShop > "
        while True:
            answer = self.ask(prompt).lower()
            if answer == "q" or (answer == "r" and merchant.can_reroll()):
                return answer
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(merchant.offers):
                return merchant.offers[index]

    def confirm(self, message: str) -> None:
        """Show a message and wait for the user to press enter."""
        self.session.prompt(ANSI(ccapture(message) + "\n[enter] "))

    @staticmethod
    def get_digit_choice(answer: Any) -> int:
        """
        Convert a single digit string input to its integer value.

        Args:
            answer (Any): User input string to parse.

        Returns:
            int: The integer value of the digit (0-9), or -1 if invalid input.

        """
        if isinstance(answer, str) and len(answer) == 1 and answer.isdigit():
            return int(answer)
        return -1
