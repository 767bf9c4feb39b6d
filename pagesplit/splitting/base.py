"""
Base classes for blank-band image splitting.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import numpy as np


class PageSplitError(Exception):
    """Base class for all errors raised while splitting pages."""

    pass


class InvalidRange(PageSplitError):
    """Raised when the horizontal statistics range is empty or reversed."""

    def __init__(self, left: float, right: float):
        self.left = left
        self.right = right
        super().__init__(
            f"Invalid blank range: left ({left}) must be smaller than right ({right})"
        )


class InvalidWindow(PageSplitError):
    """Raised when the smoothing window does not fit the signal."""

    def __init__(self, window: int, length: int):
        self.window = window
        self.length = length
        super().__init__(
            f"Invalid smoothing window {window} for a signal of {length} rows "
            f"(window must be >= 1 and < {length})"
        )


class NoBlankSpace(PageSplitError):
    """Raised when no blank band is found before the minimum height is reached."""

    def __init__(self, y_start: int, y_end: int, path: Optional[Path] = None):
        self.y_start = y_start
        self.y_end = y_end
        self.path = path
        where = f"{path}: " if path is not None else ""
        super().__init__(
            f"{where}no blank space found between rows {y_start} and {y_end}"
        )


@dataclass(frozen=True, eq=False)
class RowSignal:
    """Per-row brightness statistics of an image."""

    means: np.ndarray
    """Sum of the per-channel means of each row."""

    variances: np.ndarray
    """Sum of squared deviations from the channel means, per row."""

    left: int
    """First column (inclusive) of the measured range."""

    right: int
    """Last column (exclusive) of the measured range."""

    def __len__(self) -> int:
        return len(self.variances)

    def __iter__(self):
        return iter(zip(self.means.tolist(), self.variances.tolist()))


@dataclass(frozen=True)
class CutInterval:
    """A planned piece: rows [y_start, y_end) plus the margin-extended crop end."""

    y_start: int
    y_end: int
    crop_end: int

    @property
    def height(self) -> int:
        """Planned height, margin excluded."""
        return self.y_end - self.y_start

    @property
    def crop_height(self) -> int:
        """Height of the actual crop, margin included."""
        return self.crop_end - self.y_start


@dataclass(frozen=True)
class CutPlan:
    """Ordered intervals that partition [0, height)."""

    intervals: tuple[CutInterval, ...]
    height: int

    def __len__(self) -> int:
        return len(self.intervals)

    def __iter__(self):
        return iter(self.intervals)

    @property
    def boundaries(self) -> list[tuple[int, int]]:
        """Return the (y_start, y_end) pairs of the plan."""
        return [(i.y_start, i.y_end) for i in self.intervals]


@dataclass
class ImageChunk:
    """Represents a single piece of a split image."""

    image: np.ndarray
    """The piece image data as numpy array."""

    index: int
    """Sequential index of this piece."""

    y_offset: int
    """Y offset from original image origin."""

    width: int
    """Width of the piece."""

    height: int
    """Height of the piece, margin included."""

    overlap_bottom: int = 0
    """Rows of margin shared with the piece below."""

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """Return (x, y, width, height) bounds in original image."""
        return (0, self.y_offset, self.width, self.height)


@dataclass
class SplitResult:
    """Result of splitting an image."""

    chunks: list[ImageChunk]
    """List of image pieces, top to bottom."""

    plan: CutPlan
    """The cut plan the pieces were cropped from."""

    original_size: tuple[int, int]
    """Original image size (width, height)."""

    metadata: dict = field(default_factory=dict)
    """Additional metadata about the split."""

    @property
    def num_chunks(self) -> int:
        """Total number of pieces."""
        return len(self.chunks)

    @property
    def was_split(self) -> bool:
        """Whether the image was cut into more than one piece."""
        return len(self.chunks) > 1


@dataclass
class SplitConfig:
    """Configuration for blank-band splitting."""

    max_height: int = 2000
    """Ceiling on a piece's height before the blank search starts."""

    min_height: int = 1000
    """Floor on a piece's height; reaching it without a blank row fails."""

    margin: int = 0
    """Extra rows appended to the bottom of every piece."""

    window: int = 30
    """Rolling-average window, in rows."""

    blank_threshold: float = 100.0
    """Smoothed variance below which a row counts as blank."""

    left_fraction: float = 0.0
    """Left edge of the measured column range (0.0 to 1.0)."""

    right_fraction: float = 1.0
    """Right edge of the measured column range (0.0 to 1.0)."""
