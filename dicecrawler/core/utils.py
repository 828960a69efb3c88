"""
Utilities module for the dice crawler.

Provides common utility functions and helpers, including console printing
with rich formatting, the singleton pattern and weighted random selection.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import Any, Generic

from rich.console import Console
from rich.rule import Rule
from typing_extensions import TypeVar

# Initialize the rich console.
_console = Console(markup=True, width=120)


def cprint(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output.

    Args:
        *args: Arguments to pass to the console print function.
        **kwargs: Keyword arguments to pass to the console print function.

    """
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output with a rule.

    Args:
        *args: Arguments to pass to the Rule constructor.
        **kwargs: Keyword arguments to pass to the Rule constructor.

    """
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Captures console output as a string.

    Args:
        content (Any): The content to capture.

    Returns:
        str: The captured output as a string.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


# ---- Singleton Metaclass ----


_T = TypeVar("_T")


class Singleton(type, Generic[_T]):
    """Metaclass that returns the same instance every time."""

    _instances: dict[Singleton[_T], _T] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> _T:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]


# ---- Weighted Selection ----

_W = TypeVar("_W")


def weighted_choice(
    rng: random.Random,
    entries: Sequence[_W],
    weight_of: Callable[[_W], float],
) -> _W:
    """
    Picks one entry using cumulative-weight selection.

    A single uniform draw in [0, total) is compared against the running sum
    of weights; the first entry whose cumulative weight meets or exceeds the
    draw wins.

    Args:
        rng (random.Random): The random source.
        entries (Sequence): The candidate entries, in table order.
        weight_of (Callable): Returns the relative weight of an entry.

    Returns:
        The selected entry.

    Raises:
        ValueError: If there are no entries or all weights are zero.

    """
    total = sum(max(0.0, weight_of(entry)) for entry in entries)
    if not entries or total <= 0:
        raise ValueError("Cannot pick from an empty or zero-weight table.")
    draw = rng.random() * total
    cumulative = 0.0
    for entry in entries:
        weight = max(0.0, weight_of(entry))
        if weight <= 0:
            continue
        cumulative += weight
        if cumulative >= draw:
            return entry
    # Only reachable through float rounding on the last entry.
    return entries[-1]


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Creates a visual progress bar representation.

    Args:
        current (int): The current value.
        maximum (int): The maximum value.
        length (int): The length of the bar in characters. Defaults to 10.
        color (str): The color for the filled portion. Defaults to "white".

    Returns:
        str: A formatted progress bar string.

    """
    filled = int((current / maximum) * length) if maximum > 0 else 0
    empty = length - filled
    bar = f"[{color}]" + "▮" * filled
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar
