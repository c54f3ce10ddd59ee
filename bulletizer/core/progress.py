"""
Global progress reporting module for the Transcript Bulletizer CLI.

This module provides a centralized progress reporter that shows status updates
while the CLI reads, bulletizes and renders transcripts.
"""

from typing import List, Optional

from rich.console import Console
from rich.status import Status


class ProgressReporter:
    """
    Global progress reporter for status updates with step completion tracking.

    Steps are reported without passing console or status objects around;
    completed steps are echoed with a checkmark. Before ``initialize`` is
    called every method is a no-op.
    """

    def __init__(self):
        self._status: Optional[Status] = None
        self._console: Optional[Console] = None
        self._completed_steps: List[str] = []
        self._current_step: Optional[str] = None

    @property
    def completed_steps(self) -> List[str]:
        return list(self._completed_steps)

    def initialize(self, console: Console, initial_message: str = "Starting...") -> Status:
        """
        Initialize the reporter with a console and create a status object.

        Args:
            console: Rich console instance
            initial_message: Initial status message

        Returns:
            Status object that should be used in a context manager
        """
        self._console = console
        self._status = console.status(f"[dim]{initial_message}[/dim]")
        self._completed_steps = []
        self._current_step = initial_message
        return self._status

    def step(self, message: str) -> None:
        """
        Start a new step, marking the previous one as completed.

        Args:
            message: Progress step message to display
        """
        if self._status is None:
            return

        if self._current_step is not None:
            self._mark_done(self._current_step)

        self._current_step = message
        self._status.update(f"[dim]{message}[/dim]")

    def complete_step(self, message: Optional[str] = None) -> None:
        """
        Mark the current step as completed without starting a new one.

        Args:
            message: Optional custom completion message
        """
        if self._current_step is not None:
            self._mark_done(message or self._current_step)
            self._current_step = None

    def _mark_done(self, message: str) -> None:
        self._completed_steps.append(message)
        if self._console is not None:
            self._console.print(f"[green]✓[/green] [dim]{message}[/dim]")


# Global reporter instance
reporter = ProgressReporter()
