"""
Per-row statistics used for blank detection.
"""

import math
import numpy as np

from .base import InvalidRange, RowSignal

# Rows processed per block when computing statistics
ROW_BLOCK_SIZE = 1024


def column_bounds(width: int, left_fraction: float, right_fraction: float) -> tuple[int, int]:
    """
    Convert a fractional column range into pixel bounds.

    Args:
        width: Image width in pixels.
        left_fraction: Left edge (0.0 to 1.0).
        right_fraction: Right edge (0.0 to 1.0).

    Returns:
        (left, right) column bounds, right exclusive.

    Raises:
        InvalidRange: If the range is reversed or covers no column.
    """
    if not left_fraction < right_fraction:
        raise InvalidRange(left_fraction, right_fraction)

    left = math.floor(max(left_fraction, 0.0) * width)
    right = math.floor(min(right_fraction, 1.0) * width)

    if right - left <= 0:
        raise InvalidRange(left_fraction, right_fraction)

    return left, right


def compute_row_signal(
    image: np.ndarray,
    left_fraction: float = 0.0,
    right_fraction: float = 1.0,
) -> RowSignal:
    """
    Compute per-row mean and variance over a column sub-range.

    The mean is the sum of the three channel means. The variance is the sum
    of squared deviations over all three channels, not divided by the pixel
    count, so it grows with the width of the measured range.

    Args:
        image: RGB image as a (height, width, 3) array.
        left_fraction: Left edge of the measured range (0.0 to 1.0).
        right_fraction: Right edge of the measured range (0.0 to 1.0).

    Returns:
        RowSignal with one (mean, variance) pair per row, top to bottom.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an RGB image, got array of shape {image.shape}")

    width = image.shape[1]
    left, right = column_bounds(width, left_fraction, right_fraction)

    height = image.shape[0]
    means = np.empty(height, dtype=np.float64)
    variances = np.empty(height, dtype=np.float64)

    # Rows are converted to float in blocks to bound peak memory
    for start in range(0, height, ROW_BLOCK_SIZE):
        stop = min(start + ROW_BLOCK_SIZE, height)
        pixels = image[start:stop, left:right, :].astype(np.float64)
        channel_means = pixels.mean(axis=1)

        means[start:stop] = channel_means.sum(axis=1)
        pixels -= channel_means[:, np.newaxis, :]
        variances[start:stop] = (pixels ** 2).sum(axis=(1, 2))

    return RowSignal(means=means, variances=variances, left=left, right=right)


class RowAnalyzer:
    """Computes row statistics over a fixed horizontal range."""

    def __init__(self, left_fraction: float = 0.0, right_fraction: float = 1.0):
        """
        Initialize the analyzer.

        Args:
            left_fraction: Left edge of the measured range (0.0 to 1.0).
            right_fraction: Right edge of the measured range (0.0 to 1.0).

        Raises:
            InvalidRange: If left_fraction is not smaller than right_fraction.
        """
        if not left_fraction < right_fraction:
            raise InvalidRange(left_fraction, right_fraction)

        self.left_fraction = left_fraction
        self.right_fraction = right_fraction

    def analyze(self, image: np.ndarray) -> RowSignal:
        """Compute the row signal of an image."""
        return compute_row_signal(image, self.left_fraction, self.right_fraction)
