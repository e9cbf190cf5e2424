#!/usr/bin/env python3

from rich.progress import BarColumn, Progress, TaskID, TaskProgressColumn, TextColumn


class NullProgress:
    """Progress display that shows nothing"""

    def update(self, current: int, total: int, label: str) -> None:
        pass

    def finish(self) -> None:
        pass


class RichProgress:
    """Terminal progress bar for a single target merge"""

    def __init__(self):
        self._progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
        )
        self._task: TaskID | None = None

    def update(self, current: int, total: int, label: str) -> None:
        task = self._task
        if task is None:
            self._progress.start()
            task = self._progress.add_task(label, total=total)
            self._task = task
        self._progress.update(task, completed=current, total=total, description=label)

    def finish(self) -> None:
        if self._task is not None:
            self._progress.remove_task(self._task)
            self._progress.stop()
        self._task = None
