"""
Main entry point for the dice crawler.

Lets the player pick a class, generates a dungeon and walks through its rooms:
battles are fought with the dice hand, chests and encounters resolve on the
spot and the merchant sells items until the player leaves.
"""

import argparse
import logging
import random
from pathlib import Path

from dicecrawler.character.player import Player
from dicecrawler.character.player_serialization import create_player, save_player
from dicecrawler.combat.battle_manager import BattleManager, BattleRoundResult, MagicOutcome
from dicecrawler.core.constants import RoomKind
from dicecrawler.core.content import ContentRepository
from dicecrawler.core.logging import setup_logging
from dicecrawler.core.utils import cprint, crule
from dicecrawler.dungeon.dungeon_run import DungeonRun
from dicecrawler.ui.cli_interface import PlayerInterface, player_status_line


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dicecrawler",
        description="A dungeon crawler where every action is a roll of five dice.",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Show debug log messages."
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for a reproducible run."
    )
    parser.add_argument(
        "--data-dir", type=Path, default=None, help="Directory with the game tables."
    )
    parser.add_argument(
        "--save", type=Path, default=None, help="Save the player here when the run ends."
    )
    return parser.parse_args(argv)


def describe_round(result: BattleRoundResult, battle: BattleManager) -> None:
    """Print what happened when a hand was played."""
    for action in result.player_turn.applied_actions:
        cprint(f"  {action.action_type.name.replace('_', ' ').title()}: {action.value}")
    if result.player_turn.magic_outcome == MagicOutcome.SKIPPED:
        cprint("  Not enough MP to cast the spell.", style="blue")
    if result.monster_turn is not None:
        if result.effects.is_immune:
            cprint(f"  {battle.monster.colored_name} cannot hurt you this turn!")
        else:
            cprint(
                f"  {battle.monster.colored_name} deals "
                f"{result.monster_turn.damage_dealt} damage."
            )
    if result.rewards is not None:
        cprint(
            f"  Victory! +{result.rewards.experience} XP, +{result.rewards.gold} gold.",
            style="bold green",
        )
        if result.rewards.leveled_up:
            cprint("  Level up! 🎉", style="bold yellow")


def run_battle(run: DungeonRun, ui: PlayerInterface) -> None:
    battle = run.start_battle()
    cprint(f"A wild {battle.monster.colored_name} appears!")
    while not battle.is_over:
        command = ui.choose_battle_command(battle)
        if command == "p":
            result = battle.play_hand()
            if result is not None:
                describe_round(result, battle)
        elif command == "r":
            if not battle.reroll():
                cprint("No rerolls left.", style="yellow")
        elif command == "i":
            consumables = [item for item in battle.player.inventory.items if item.consumable]
            item = ui.choose_item(consumables, title="Use an item")
            if item is not None:
                battle.player.use_item(item.id)
        else:
            battle.toggle_lock(ui.get_digit_choice(command) - 1)


def run_merchant(run: DungeonRun, ui: PlayerInterface) -> None:
    merchant = run.open_merchant()
    while True:
        choice = ui.choose_merchant_action(merchant)
        if choice == "q":
            return
        if choice == "r":
            merchant.reroll_offers()
        elif merchant.buy(choice.id) is None:
            cprint("You cannot afford that.", style="yellow")
        else:
            cprint(f"Bought {choice.colored_name}.")


def run_encounter(run: DungeonRun, ui: PlayerInterface) -> None:
    room = run.start_encounter()
    cprint(f"{room.encounter.emoji} {room.encounter.name}", style="bold")
    cprint(room.encounter.description)
    labels = [
        f"{option.label} ({option.cost} gold)" if option.cost else option.label
        for option in room.options
    ]
    while not room.resolved:
        text = room.choose(ui.choose_option("What do you do?", labels))
        if text is None:
            cprint("You cannot afford that.", style="yellow")
        else:
            cprint(text)


def play(run: DungeonRun, ui: PlayerInterface) -> bool:
    """
    Play every room of the run.

    Returns:
        bool: True if the player cleared the dungeon.

    """
    while not run.is_over:
        info = run.room_info()
        assert info is not None
        crule(
            f"Room {run.current_index + 1}/{len(run.rooms)}: {info.emoji} {info.title}",
            style="bold green",
        )
        cprint(info.description)
        cprint(player_status_line(run.player))

        room = run.current_room
        if room is not None and room.is_battle:
            run_battle(run, ui)
        elif room == RoomKind.CHEST:
            cprint(run.open_chest().open())
        elif room == RoomKind.MERCHANT:
            run_merchant(run, ui)
        elif room == RoomKind.ENCOUNTER:
            run_encounter(run, ui)

        if run.player.is_dead():
            return False
        ui.confirm("Onward...")
        run.advance()
    return True


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.WARNING)

    repo = ContentRepository(args.data_dir)
    rng = random.Random(args.seed)
    ui = PlayerInterface()

    crule("Dice Crawler", style="bold green")
    try:
        character_class = ui.choose_class(list(repo.classes.values()))
        player: Player = create_player(character_class)
        run = DungeonRun(player, rng, repo)
        if play(run, ui):
            crule("Victory! The dungeon is cleared.", style="bold green")
        else:
            crule("You have fallen...", style="bold red")
        cprint(player_status_line(player))
        if args.save:
            save_player(player, args.save)
            cprint(f"Player saved to {args.save}.")
    except (KeyboardInterrupt, EOFError):
        cprint("\nGoodbye!", style="bold yellow")


if __name__ == "__main__":
    main()
