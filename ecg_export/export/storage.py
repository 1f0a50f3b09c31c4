"""Temporary export directory management."""

import shutil
import tempfile
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

import structlog

from ..core.config import ExportConfig
from ..core.models import ECGReading

logger = structlog.get_logger(__name__)


class ExportStorage:
    """
    Process-wide export directory under the temp root.

    The directory is created on first use. ``clear`` removes it wholesale and
    does not know about exports still being written.
    """

    def __init__(self, config: Optional[ExportConfig] = None):
        self.config = config or ExportConfig()
        root = self.config.temp_root or Path(tempfile.gettempdir())
        self._path = Path(root) / self.config.directory_name

    @property
    def directory(self) -> Path:
        """Get the export directory, creating it if needed."""
        self._path.mkdir(parents=True, exist_ok=True)
        return self._path

    @property
    def documents_dir(self) -> Path:
        """Get the share destination directory."""
        return Path(self.config.documents_dir or Path.home() / "Documents")

    def new_file_name(self, reading: ECGReading, now: Optional[datetime] = None) -> str:
        """Timestamp-qualified file name for an export of ``reading``."""
        now = now or datetime.now()
        return (f"{self.config.file_prefix}_{reading.start_date:%Y%m%d_%H%M%S}"
                f"_{now:%Y%m%d_%H%M%S_%f}_{uuid.uuid4().hex[:6]}.csv")

    def write(self, file_name: str, text: str) -> Path:
        """Write an export; OSError propagates to the caller."""
        path = self.directory / file_name
        path.write_text(text, encoding="utf-8", newline="\n")
        logger.info("export_written", path=str(path), size=path.stat().st_size)
        return path

    def read(self, path: Path) -> str:
        """Read an export back."""
        text = Path(path).read_text(encoding="utf-8")
        logger.debug("export_read", path=str(path), characters=len(text))
        return text

    def share(self, path: Path) -> Path:
        """Copy an export into the documents directory, replacing any previous copy."""
        destination_dir = self.documents_dir
        destination_dir.mkdir(parents=True, exist_ok=True)
        destination = destination_dir / Path(path).name
        if destination.exists():
            destination.unlink()
        shutil.copy2(path, destination)
        logger.info("export_shared", source=str(path), destination=str(destination))
        return destination

    def clear(self) -> None:
        """Remove the export directory and everything in it."""
        shutil.rmtree(self._path, ignore_errors=True)
        logger.info("export_directory_cleared", path=str(self._path))
