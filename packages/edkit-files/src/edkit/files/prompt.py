"""Confirmation boundary.

Commands never read input themselves; they ask a Prompter. The interactive
implementation uses click; the others exist for batch use and tests.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

import click


class Prompter(Protocol):
    def confirm(self, message: str) -> bool: ...


class ClickPrompter:
    """Blocking yes/no prompt on the terminal. Declines by default."""

    def confirm(self, message: str) -> bool:
        return click.confirm(message, default=False)


class AlwaysYes:
    def confirm(self, message: str) -> bool:
        return True


class AlwaysNo:
    def confirm(self, message: str) -> bool:
        return False


class ScriptedPrompter:
    """Replays a fixed sequence of answers and records every question asked."""

    def __init__(self, answers: Iterable[bool]) -> None:
        self._answers = list(answers)
        self.asked: list[str] = []

    def confirm(self, message: str) -> bool:
        self.asked.append(message)
        if not self._answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self._answers.pop(0)
