"""Logging for resolvergen with Rich console output and CLI helpers."""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class ResolvergenLogger(logging.Logger):
    """
    Logger that combines Python logging with a few CLI formatting methods.

    Standard levels (debug, info, warning, error, critical) go through a RichHandler,
    while the helpers below print directly to the console.
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        """
        Initialize the logger.

        Args:
            name: Logger name
            level: Initial log level
        """
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)
        self.propagate = False

    def print(self, message: str) -> None:
        """Print a plain message (with Rich markup support)."""
        self.console.print(message)

    def colored(self, message: str, style: str = "bold cyan") -> None:
        """
        Print a message with a specific style/color.

        Args:
            message: Message to display
            style: Rich style string (e.g., "green", "red", "bold cyan", "dim")
        """
        self.print(f"[{style}]{message}[/{style}]")

    def success(self, message: str) -> None:
        """Print a success message in green with a checkmark."""
        self.print(f"[green]✓[/green] {message}")

    def hint(self, message: str) -> None:
        """Print a dimmed secondary message."""
        self.colored(message, "dim")

    def rule(self, title: str, style: str = "bold blue") -> None:
        """Print a horizontal rule with a title."""
        self.console.rule(f"[{style}]{title}")

    def key_value(self, key: str, value: Any, key_style: str = "dim") -> None:
        """
        Print a formatted key-value pair, e.g. "Objects: 4".

        Args:
            key: The key/label to display
            value: The value to display
            key_style: Style for the key (default: "dim")
        """
        self.print(f"[{key_style}]{key}:[/{key_style}] {value}")

    def list_item(self, text: str, prefix: str = "-", style: str = "") -> None:
        """Print a list item with optional styling."""
        if style:
            self.colored(f"{prefix} {text}", style)
        else:
            self.print(f"{prefix} {text}")


def get_logger(name: str = "resolvergen") -> ResolvergenLogger:
    """
    Get or create a resolvergen logger instance.

    Args:
        name: Logger name (default: "resolvergen")

    Returns:
        ResolvergenLogger instance
    """
    previous_class = logging.getLoggerClass()
    logging.setLoggerClass(ResolvergenLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(previous_class)

    return logger  # type: ignore[return-value]
