"""
Output directory service.

This service handles:
- Creating the output directory when it does not exist
- Removing stale outputs of a previous run
- Deriving zero-padded piece filenames
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from pagesplit.splitting.base import PageSplitError

logger = logging.getLogger(__name__)

# Extensions removed from the output directory before a run
STALE_OUTPUT_EXTENSIONS = (".png", ".jpg")

# Minimum width of the zero-padded indexes in output filenames
MIN_INDEX_WIDTH = 2


class OutputDirectoryError(PageSplitError):
    """Raised when the output directory cannot be prepared."""

    pass


def index_width(count: int) -> int:
    """Digits needed to zero-pad indexes 0..count-1, at least MIN_INDEX_WIDTH."""
    return max(MIN_INDEX_WIDTH, len(str(max(count - 1, 0))))


@dataclass(frozen=True)
class OutputSpec:
    """Naming inputs of one output piece."""

    file_index: int
    piece_index: int
    extension: str
    file_width: int = MIN_INDEX_WIDTH
    piece_width: int = MIN_INDEX_WIDTH

    @property
    def filename(self) -> str:
        """Return the filename, e.g. '00-01.png'."""
        return (
            f"{self.file_index:0{self.file_width}d}-"
            f"{self.piece_index:0{self.piece_width}d}.{self.extension}"
        )


class OutputService:
    """
    Service managing the output directory of a run.

    Clearing is destructive and not safe against concurrent runs
    targeting the same directory.
    """

    def __init__(self, output_dir: Path):
        """
        Initialize the output service.

        Args:
            output_dir: Destination directory for the pieces.
        """
        self.output_dir = Path(output_dir)

    def prepare(self, keep: Iterable[Path] = ()) -> list[Path]:
        """
        Create the output directory and remove stale outputs.

        Only files directly inside the directory with an extension in
        STALE_OUTPUT_EXTENSIONS are removed. Files listed in keep, such as
        input images stored in the output directory, are never removed.

        Args:
            keep: Paths that must survive the cleanup.

        Returns:
            Paths of the removed files.

        Raises:
            OutputDirectoryError: If the directory cannot be created or cleared.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(
                f"Failed to create output directory {self.output_dir}: {e}"
            ) from e

        kept = {Path(p).resolve() for p in keep}
        removed = []
        try:
            for path in sorted(self.output_dir.iterdir()):
                if path.resolve() in kept:
                    logger.debug(f"Keeping input file: {path}")
                    continue
                if path.is_file() and path.suffix.lower() in STALE_OUTPUT_EXTENSIONS:
                    path.unlink()
                    removed.append(path)
                    logger.debug(f"Removed stale output: {path}")
        except OSError as e:
            raise OutputDirectoryError(
                f"Failed to clear output directory {self.output_dir}: {e}"
            ) from e

        if removed:
            logger.info(f"Removed {len(removed)} stale outputs from {self.output_dir}")

        return removed

    def output_path(self, spec: OutputSpec) -> Path:
        """Return the full path of an output piece."""
        return self.output_dir / spec.filename
