"""
Logging configuration module for the simulator.

Provides centralized logging setup with colored output using rich.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.INFO) -> None:
    """
    Sets up logging configuration with rich colored output.

    Args:
        level (int): The logging level to set. Defaults to logging.INFO.

    """
    console = Console(width=120, force_terminal=True, force_jupyter=False)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=True,
    )
    rich_handler.setFormatter(
        logging.Formatter("%(name)s - %(message)s", datefmt="[%X]")
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
    )


def get_logger(name: str) -> logging.Logger:
    """
    Gets a logger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        logging.Logger: The configured logger instance.

    """
    return logging.getLogger(name)


# Default logger for the engine.
logger = get_logger("wildcombat")


def _with_context(message: str, context: dict[str, Any] | None) -> str:
    if not context:
        return message
    context_str = " ".join(f"{k}={v}" for k, v in context.items())
    return f"{message} [{context_str}]"


def log_warning(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs a warning message with optional context."""
    logger.warning(_with_context(message, context))


def log_info(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs an info message with optional context."""
    logger.info(_with_context(message, context))


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Logs a debug message with optional context.

    Args:
        message (str): The debug message.
        context (Dict[str, Any] | None): Optional context dictionary.

    """
    logger.debug(_with_context(message, context))
