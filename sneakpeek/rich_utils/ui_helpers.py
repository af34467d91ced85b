import os
import sys
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, DownloadColumn, Progress, TransferSpeedColumn

def is_ci_environment():
    return (
        bool(os.getenv('CI')) or
        bool(os.getenv('GITHUB_ACTIONS')) or
        not sys.stdout.isatty()
    )

def get_console() -> Console:
    """Detect environment and create console."""
    if is_ci_environment():
        # CI/automated environment - no colors, no interactive elements
        return Console(force_terminal=False, no_color=True)
    return Console()


class TransferProgress:
    """Byte-level upload progress bar.

    The first event creates a task sized to the total byte count, later
    events advance it by the bytes loaded since the previous event.
    """

    def __init__(self, console: Console, description: str = "Uploading"):
        self.description = description
        self.progress = Progress(
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=console,
            transient=True
        )
        self.task_id: Optional[int] = None
        self.last = 0

    def __enter__(self):
        self.progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress.stop()

    def __call__(self, loaded: int, total: int):
        if self.task_id is None:
            self.task_id = self.progress.add_task(self.description, total=total, completed=loaded)
        else:
            self.progress.advance(self.task_id, loaded - self.last)
        self.last = loaded
