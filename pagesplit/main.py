"""
Command-line entry point.

Splits tall page images into shorter pieces cut on blank rows.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from pagesplit.config import settings
from pagesplit.processor import PageSplitProcessor
from pagesplit.splitting import PageSplitError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser. Unset options fall back to settings."""
    parser = argparse.ArgumentParser(
        prog="pagesplit",
        description="Split tall page images at blank horizontal bands.",
    )
    parser.add_argument("input_path", nargs="+", type=Path, help="images to split")
    parser.add_argument("-o", "--output", dest="output_dir", type=Path, help="output directory (default: output)")
    parser.add_argument("-H", "--height", dest="max_height", type=int, help="maximum piece height (default: 2000)")
    parser.add_argument("-m", "--margin", dest="margin", type=int, help="rows appended below each piece (default: 0)")
    parser.add_argument("--min-height", dest="min_height", type=int, help="minimum piece height (default: 1000)")
    parser.add_argument("--blank-height", dest="blank_height", type=int, help="rolling-average window in rows (default: 30)")
    parser.add_argument(
        "--blank-var-threshold",
        dest="blank_var_threshold",
        type=float,
        help="variance below which a row is blank (default: 100.0)",
    )
    parser.add_argument("--blank-left", dest="blank_left", type=float, help="left edge of the measured range, percent (default: 0)")
    parser.add_argument("--blank-right", dest="blank_right", type=float, help="right edge of the measured range, percent (default: 100)")
    parser.add_argument("--ext", dest="file_ext", help="output file extension (default: same as input)")
    parser.add_argument("--debug", action="store_true", default=None, help="enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the splitter; returns the process exit status."""
    args = build_parser().parse_args(argv)
    options = vars(args)
    input_paths = options.pop("input_path")

    try:
        run_settings = settings.with_overrides(**options)
    except ValidationError as e:
        logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logger.error(f"Invalid configuration: {e}")
        return 1

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if run_settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(
        f"Splitting {len(input_paths)} files into {run_settings.output_dir} "
        f"with {run_settings.splitting.model_dump()}"
    )

    try:
        PageSplitProcessor(run_settings).run(input_paths)
    except PageSplitError as e:
        logger.error(f"Split failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
