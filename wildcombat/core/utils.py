"""
Utilities module for the simulator.

Provides console printing with rich formatting and small display helpers.
"""

from typing import Any

from rich.console import Console
from rich.rule import Rule

# Initialize the rich console.
_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)


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
    if maximum <= 0:
        filled = 0
    else:
        filled = int((max(0, min(current, maximum)) / maximum) * length)
    empty = length - filled
    bar = f"[{color}]" + "▮" * filled
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar


def format_rolls(rolls: list[int]) -> str:
    """Formats a die pool the way the combat log shows it."""
    return ", ".join(str(roll) for roll in rolls)
