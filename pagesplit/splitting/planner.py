"""
Cut point selection over a smoothed variance signal.

Each piece starts where the previous one ended. Its end is first placed
max_height rows further down, then walked back up one row at a time until a
row inside a blank band is reached. The last piece is taken as is.
"""

import logging
from typing import Optional, Sequence, Union
import numpy as np

from .base import CutInterval, CutPlan, NoBlankSpace, SplitConfig

logger = logging.getLogger(__name__)


class CutPlanner:
    """Plans where to cut a tall image so that every cut falls on blank rows."""

    def __init__(self, config: Optional[SplitConfig] = None):
        """Initialize planner with configuration."""
        self.config = config or SplitConfig()

    def is_blank(self, smoothed: np.ndarray, row: int) -> bool:
        """
        Check whether a row lies in a blank band.

        Rows past the end of the smoothed signal cannot be evaluated and
        count as content.
        """
        return row < len(smoothed) and smoothed[row] < self.config.blank_threshold

    def find_cut(self, smoothed: np.ndarray, y_start: int, height: int) -> int:
        """
        Find the end row of the piece starting at y_start.

        Args:
            smoothed: Smoothed variance signal.
            y_start: First row of the piece.
            height: Image height.

        Returns:
            The exclusive end row of the piece.

        Raises:
            NoBlankSpace: If the search reaches min_height without a blank row.
        """
        y_end = min(y_start + self.config.max_height, height)
        if y_end == height:
            return y_end

        floor = max(self.config.min_height, 1)
        while not self.is_blank(smoothed, y_end):
            if y_end - 1 - y_start < floor:
                raise NoBlankSpace(y_start, y_end)
            y_end -= 1

        return y_end

    def plan(self, smoothed: Union[Sequence[float], np.ndarray], height: int) -> CutPlan:
        """
        Plan the cut intervals of an image.

        Args:
            smoothed: Smoothed variance signal of the image.
            height: Image height in rows.

        Returns:
            CutPlan whose intervals partition [0, height).
        """
        smoothed = np.asarray(smoothed, dtype=np.float64)
        margin = self.config.margin

        intervals = []
        y_start = 0
        while y_start < height:
            y_end = self.find_cut(smoothed, y_start, height)
            intervals.append(
                CutInterval(
                    y_start=y_start,
                    y_end=y_end,
                    crop_end=min(y_end + margin, height),
                )
            )
            logger.debug(f"Planned piece {len(intervals) - 1}: rows {y_start}-{y_end}")
            y_start = y_end

        return CutPlan(intervals=tuple(intervals), height=height)


def plan_cuts(
    smoothed: Union[Sequence[float], np.ndarray],
    height: int,
    max_height: int = 2000,
    min_height: int = 1000,
    blank_threshold: float = 100.0,
    margin: int = 0,
) -> CutPlan:
    """
    Plan cut intervals with explicit parameters.

    Args:
        smoothed: Smoothed variance signal.
        height: Image height in rows.
        max_height: Maximum piece height.
        min_height: Minimum piece height.
        blank_threshold: Variance below which a row is blank.
        margin: Extra rows appended to each crop.

    Returns:
        CutPlan for the image.
    """
    config = SplitConfig(
        max_height=max_height,
        min_height=min_height,
        margin=margin,
        blank_threshold=blank_threshold,
    )
    return CutPlanner(config).plan(smoothed, height)
