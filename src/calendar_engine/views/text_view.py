"""Plain-text output for command results."""

import sys
from pathlib import Path
from typing import Optional, TextIO

from ..models.event import BusyStatus


class TextView:
    """Writes one line per result to a text stream."""

    def __init__(self, output: Optional[TextIO] = None):
        self.output = output if output is not None else sys.stdout

    def _write(self, text: str) -> None:
        print(text, file=self.output)

    def display_message(self, message: str) -> None:
        self._write(message)

    def display_success(self, message: str) -> None:
        self._write(f"Success: {message}")

    def display_error(self, message: str) -> None:
        self._write(f"Error: {message}")

    def display_status(self, status: BusyStatus) -> None:
        self._write(f"Calendar status: {status.name}")

    def display_export_result(self, path: Path) -> None:
        self._write(f"Exported to: {path}")

    def display_exit(self) -> None:
        self._write("Exiting...")
