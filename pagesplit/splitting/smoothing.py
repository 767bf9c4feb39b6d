"""
Moving-average smoothing of the row variance signal.
"""

from typing import Sequence, Union
import numpy as np

from .base import InvalidWindow


def rolling_mean(values: Union[Sequence[float], np.ndarray], window: int) -> np.ndarray:
    """
    Compute the simple moving average of a sequence.

    Output index i is the mean of values[i:i + window], so the result has
    len(values) - window + 1 entries and is aligned on the leading edge.

    Args:
        values: Per-row variances.
        window: Number of consecutive rows averaged together.

    Returns:
        Smoothed signal as a float array.

    Raises:
        InvalidWindow: If window is zero or not smaller than len(values).
    """
    values = np.asarray(values, dtype=np.float64)

    if window < 1 or window >= len(values):
        raise InvalidWindow(window, len(values))

    kernel = np.ones(window) / window
    return np.convolve(values, kernel, mode="valid")
