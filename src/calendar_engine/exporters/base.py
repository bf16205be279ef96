"""Abstract base class for calendar exporters."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from ..models.event import Event
from ..utils.exceptions import ExportError

logger = logging.getLogger(__name__)


class CalendarExporter(ABC):
    """Abstract base class for calendar exporters."""

    format_name: str

    def __init__(self, export_dir: Path = Path("exports")):
        """
        Initialize exporter.

        Args:
            export_dir: Directory relative filenames are written beneath
        """
        self.export_dir = export_dir

    def export(self, events: Sequence[Event], filename: str) -> Path:
        """
        Write events to a file.

        Args:
            events: Read-only event snapshot
            filename: Target filename

        Returns:
            Absolute path of the written file

        Raises:
            ExportError: If the file cannot be written
        """
        path = self.export_dir / filename
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.write(events, path)
        except OSError as e:
            raise ExportError(f"Failed to export to {path}: {e}") from e

        logger.info(f"Exported {len(events)} events as {self.format_name} to {path}")
        return path.resolve()

    @abstractmethod
    def write(self, events: Sequence[Event], path: Path) -> None:
        """
        Serialize events into ``path``.

        Args:
            events: Events to serialize
            path: Destination file
        """
