"""Interactive prompts used while resolving files.

Resolution never reads from the terminal directly. It asks a `Prompter` to
choose between numbered options, so tests and non-interactive callers can
supply their own implementation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Sequence

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress

from .errors import PromptError
from .models import BinaryAction, BinaryPolicy, ConflictChoice

LOGGER = logging.getLogger(__name__)

BINARY_OPTIONS = (
    "Skip this file",
    "Skip all binary files",
    "Process this file (ask again next time)",
    "Always process binary files without asking",
)

_BINARY_OUTCOMES = (
    (BinaryAction.SKIP, BinaryPolicy.ASK_EACH_TIME),
    (BinaryAction.SKIP, BinaryPolicy.SKIP_ALL),
    (BinaryAction.PROCESS, BinaryPolicy.ASK_EACH_TIME),
    (BinaryAction.PROCESS, BinaryPolicy.NEVER_SKIP),
)


class Prompter(Protocol):
    """Capability for asking the user to pick one of several options."""

    def select(self, title: str, options: Sequence[str], details: Sequence[str] = ()) -> int:
        """Return the 0-based index of the chosen option.

        Raises:
            PromptError: If no answer can be read.
        """
        ...


class ConsolePrompter:
    """Render numbered menus with Rich and read the answer through Click."""

    def __init__(self, console: Optional[Console] = None, progress: Optional[Progress] = None) -> None:
        self.console = console or Console(stderr=True)
        self.progress = progress

    def select(self, title: str, options: Sequence[str], details: Sequence[str] = ()) -> int:
        if self.progress is not None:
            self.progress.stop()
        try:
            self.console.print(f"\n[bold yellow]{escape(title)}[/bold yellow]")
            for line in details:
                self.console.print(escape(line))
            for number, option in enumerate(options, start=1):
                self.console.print(f"  [cyan]{number}[/cyan]) {escape(option)}")
            try:
                choice = click.prompt(
                    "Choose an option",
                    type=click.IntRange(1, len(options)),
                    default=1,
                    err=True,
                )
            except click.Abort as exc:
                raise PromptError("failed to read user input") from exc
        finally:
            if self.progress is not None:
                self.progress.start()
        return choice - 1


def _checked(index: int, count: int) -> int:
    if not 0 <= index < count:
        raise PromptError(f"prompt returned invalid choice {index}")
    return index


def ask_binary_policy(prompter: Prompter, path: Path) -> tuple[BinaryAction, BinaryPolicy]:
    """Ask how to treat a binary file and return the action with the next policy."""
    index = prompter.select(f"Binary file detected: {path}", BINARY_OPTIONS)
    action, policy = _BINARY_OUTCOMES[_checked(index, len(BINARY_OPTIONS))]
    LOGGER.info("Binary file %s: action=%s policy=%s", path.name, action.value, policy.value)
    return action, policy


def ask_conflict_resolution(
    prompter: Prompter, path: Path, detected: str, declared: str
) -> ConflictChoice:
    """Ask which type wins when the signature and extension disagree."""
    options = (
        "Skip this file",
        f"Use signature type (.{detected})",
        f"Use declared extension (.{declared})",
        "Move to manual verification folder",
    )
    index = prompter.select(
        "Detected mismatch between extension and file signature:",
        options,
        details=(
            f"File: {path}",
            f"Declared extension: .{declared}",
            f"Detected signature: .{detected}",
        ),
    )
    choice = list(ConflictChoice)[_checked(index, len(options))]
    LOGGER.info("Conflict for %s resolved with %s", path.name, choice.value)
    return choice


__all__ = [
    "BINARY_OPTIONS",
    "ConsolePrompter",
    "Prompter",
    "ask_binary_policy",
    "ask_conflict_resolution",
]
