# marc_toolkit/infrastructure/logging/_progress.py

"""Progress display for long streaming runs

Record streams have no known length up front, so tasks are indeterminate and
show a running count. The display writes to stderr; stdout carries records.
"""

# Standard library imports
from contextlib import contextmanager
from logging import getLogger
from typing import Iterable
from typing import Iterator
from typing import TypeVar

# Third party imports
from rich.console import Console
from rich.progress import Progress
from rich.progress import SpinnerColumn
from rich.progress import TaskID
from rich.progress import TextColumn
from rich.progress import TimeElapsedColumn

T = TypeVar("T")

logger = getLogger(__name__)


class ProgressBarManager:
    """Manages progress displays for the phases of a run"""

    def __init__(self, enabled: bool = True) -> None:
        """Initialize progress manager

        Args:
            enabled: Whether to show progress at all
        """
        self.enabled = enabled
        self.progress: Progress | None = None
        self.console: Console | None = None
        self.tasks: dict[str, TaskID] = {}

        if self.enabled:
            self.console = Console(stderr=True)
            self.progress = Progress(
                SpinnerColumn(),
                TextColumn("[bold blue]{task.description}"),
                TextColumn("{task.completed:,} records"),
                TimeElapsedColumn(),
                console=self.console,
                transient=False,
            )

    def start(self) -> None:
        if self.enabled and self.progress:
            self.progress.start()

    def stop(self) -> None:
        if self.enabled and self.progress:
            self.progress.stop()

    def create_task(self, name: str, description: str | None = None) -> TaskID | None:
        """Create an indeterminate task

        Args:
            name: Task key
            description: Description to display

        Returns:
            Task ID if progress is enabled, None otherwise
        """
        if not self.enabled or not self.progress:
            if description:
                logger.info(description)
            return None

        task_id = self.progress.add_task(description or name, total=None)
        self.tasks[name] = task_id
        return task_id

    def advance(self, name: str, amount: int = 1) -> None:
        if not self.enabled or not self.progress or name not in self.tasks:
            return
        self.progress.advance(self.tasks[name], amount)

    def complete_task(self, name: str, message: str | None = None) -> None:
        """Stop a task's spinner and print an optional completion message"""
        if not self.enabled or not self.progress or name not in self.tasks:
            if message:
                logger.info(message)
            return

        task_id = self.tasks[name]
        task = self.progress.tasks[task_id]
        self.progress.update(task_id, total=task.completed)

        if message and self.console:
            self.console.print(f"[green]✓[/green] {message}")

    def track(self, items: Iterable[T], name: str, description: str | None = None) -> Iterator[T]:
        """Yield items unchanged, advancing the named task for each one"""
        self.create_task(name, description)
        try:
            for item in items:
                self.advance(name)
                yield item
        finally:
            self.complete_task(name)

    @contextmanager
    def running(self) -> Iterator["ProgressBarManager"]:
        """Start the display for the duration of a block"""
        self.start()
        try:
            yield self
        finally:
            self.stop()
