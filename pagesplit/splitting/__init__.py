"""
Blank-band image splitting module.

This module splits tall page images into shorter pieces, cutting only on
rows that fall inside blank horizontal bands so no cut crosses content.
"""

from .base import (
    PageSplitError,
    InvalidRange,
    InvalidWindow,
    NoBlankSpace,
    RowSignal,
    CutInterval,
    CutPlan,
    ImageChunk,
    SplitResult,
    SplitConfig,
)
from .analyzer import RowAnalyzer, compute_row_signal, column_bounds
from .smoothing import rolling_mean
from .planner import CutPlanner, plan_cuts
from .splitter import BlankSpaceSplitter, crop_pieces

__all__ = [
    # Errors
    "PageSplitError",
    "InvalidRange",
    "InvalidWindow",
    "NoBlankSpace",
    # Data
    "RowSignal",
    "CutInterval",
    "CutPlan",
    "ImageChunk",
    "SplitResult",
    "SplitConfig",
    # Components
    "RowAnalyzer",
    "compute_row_signal",
    "column_bounds",
    "rolling_mean",
    "CutPlanner",
    "plan_cuts",
    "BlankSpaceSplitter",
    "crop_pieces",
]
