#!/usr/bin/env python3

"""State shared by every stage of a single grfmerge run"""

from typing import Callable, Protocol

from grfmerge.util.console import Console
from grfmerge.util.progress import NullProgress


class ProgressDisplay(Protocol):
    def update(self, current: int, total: int, label: str) -> None: ...

    def finish(self) -> None: ...


class Session:
    """Flags and collaborators for one run

    Args:
        dry_run: Only list the records each patch set would replace
        always_yes: Answer every question with yes
        prompt: Asks a yes/no question, defaults to the terminal
        progress: Progress display for the merge of a single target
    """

    def __init__(
        self,
        dry_run: bool = False,
        always_yes: bool = False,
        prompt: Callable[[str], bool] | None = None,
        progress: ProgressDisplay | None = None,
    ):
        self.dry_run = dry_run
        self.always_yes = always_yes
        self._prompt = prompt or Console.ask
        self.progress: ProgressDisplay = progress or NullProgress()

    def confirm(self, question: str) -> bool:
        """Ask the user to confirm an action"""
        if self.always_yes:
            Console.log_info(f"{question} [Y/N] Y")
            return True
        return self._prompt(question)
