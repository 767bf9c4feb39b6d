"""
Blank-band image splitter.

Runs row statistics, smoothing and cut planning over an image and crops
the planned pieces.
"""

import logging
from typing import Optional
import numpy as np

from .analyzer import RowAnalyzer
from .base import CutPlan, ImageChunk, SplitConfig, SplitResult
from .planner import CutPlanner
from .smoothing import rolling_mean

logger = logging.getLogger(__name__)


def crop_pieces(image: np.ndarray, plan: CutPlan) -> list[ImageChunk]:
    """
    Crop every planned interval out of an image.

    Each crop spans rows [y_start, crop_end) at full width, where crop_end
    already includes the margin clamped to the image height.

    Args:
        image: Source image.
        plan: Cut plan of the image.

    Returns:
        List of ImageChunk objects, top to bottom.
    """
    width = image.shape[1]
    chunks = []

    for index, interval in enumerate(plan):
        chunk_image = image[interval.y_start:interval.crop_end].copy()

        chunks.append(
            ImageChunk(
                image=chunk_image,
                index=index,
                y_offset=interval.y_start,
                width=width,
                height=interval.crop_height,
                overlap_bottom=interval.crop_end - interval.y_end,
            )
        )

    return chunks


class BlankSpaceSplitter:
    """
    Splits tall images at blank horizontal bands.

    The per-row variance over the configured column range is smoothed with
    a rolling mean, and cuts are placed on rows whose smoothed variance is
    below the blank threshold.
    """

    def __init__(self, config: Optional[SplitConfig] = None):
        """
        Initialize the splitter.

        Args:
            config: Splitting configuration.

        Raises:
            InvalidRange: If the column range is reversed or empty.
        """
        self.config = config or SplitConfig()
        self.analyzer = RowAnalyzer(
            left_fraction=self.config.left_fraction,
            right_fraction=self.config.right_fraction,
        )
        self.planner = CutPlanner(self.config)

    @property
    def name(self) -> str:
        return "blank_space"

    def plan(self, image: np.ndarray) -> CutPlan:
        """
        Compute the cut plan of an image without cropping it.

        Args:
            image: RGB image as numpy array.

        Returns:
            CutPlan partitioning the image rows.

        Raises:
            InvalidWindow: If the smoothing window does not fit the image.
            NoBlankSpace: If a piece cannot be cut on a blank row.
        """
        _, smoothed = self._smoothed_signal(image)
        return self.planner.plan(smoothed, image.shape[0])

    def _smoothed_signal(self, image: np.ndarray):
        """Compute the row signal and its rolling mean."""
        signal = self.analyzer.analyze(image)
        smoothed = rolling_mean(signal.variances, self.config.window)
        return signal, smoothed

    def split(self, image: np.ndarray) -> SplitResult:
        """
        Split an image into pieces cut on blank rows.

        Args:
            image: RGB image as numpy array.

        Returns:
            SplitResult with the cropped pieces and their plan.
        """
        height, width = image.shape[:2]

        signal, smoothed = self._smoothed_signal(image)
        plan = self.planner.plan(smoothed, height)

        chunks = crop_pieces(image, plan)
        logger.debug(f"Split {width}x{height} image into {len(chunks)} pieces")

        return SplitResult(
            chunks=chunks,
            plan=plan,
            original_size=(width, height),
            metadata={
                "split_method": self.name,
                "boundaries": plan.boundaries,
                "column_range": (signal.left, signal.right),
                "signal_length": len(signal),
                "smoothed_length": len(smoothed),
            },
        )
