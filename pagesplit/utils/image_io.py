"""
Image decode and encode helpers.

Images are handled as (height, width, 3) uint8 RGB arrays. Library errors
are wrapped in DecodeError / EncodeError so callers deal with one error
family.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from pagesplit.splitting.base import PageSplitError

logger = logging.getLogger(__name__)

# Long scrolling captures exceed Pillow's default decompression bomb limit
MAX_IMAGE_PIXELS = 500_000_000
Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS


class ImageIOError(PageSplitError):
    """Raised when an image cannot be read or written."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class DecodeError(ImageIOError):
    """Raised when an input image is missing, unreadable or corrupt."""

    pass


class EncodeError(ImageIOError):
    """Raised when an output image cannot be written."""

    pass


def load_image(path: Union[Path, str]) -> np.ndarray:
    """
    Decode an image file into an RGB array.

    Palette, grayscale and alpha images are converted to RGB.

    Args:
        path: Path to the image file.

    Returns:
        Image as a (height, width, 3) uint8 array.

    Raises:
        DecodeError: If the file cannot be opened or decoded.
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            if img.mode != "RGB":
                logger.debug(f"Converting {path} from {img.mode} to RGB")
                img = img.convert("RGB")
            array = np.array(img)
    except FileNotFoundError as e:
        raise DecodeError(path, "file not found") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(path, f"image too large to decode safely: {e}") from e
    except UnidentifiedImageError as e:
        raise DecodeError(path, "not a recognized image format") from e
    except OSError as e:
        raise DecodeError(path, f"failed to decode image: {e}") from e

    logger.debug(f"Loaded {path}: {array.shape[1]}x{array.shape[0]}")
    return array


def save_image(image: np.ndarray, path: Union[Path, str]) -> Path:
    """
    Encode an RGB array to a file; the format follows the file extension.

    Args:
        image: Image as numpy array.
        path: Destination path.

    Returns:
        The path written.

    Raises:
        EncodeError: If the image cannot be encoded or the file written.
    """
    path = Path(path)
    try:
        Image.fromarray(image).save(path)
    except ValueError as e:
        # PIL raises ValueError for extensions it cannot map to a format
        raise EncodeError(path, f"unsupported output format: {e}") from e
    except OSError as e:
        raise EncodeError(path, f"failed to write image: {e}") from e

    return path


def image_extension(path: Union[Path, str]) -> str:
    """Return the lowercase extension of a path without the leading dot."""
    return Path(path).suffix.lower().lstrip(".")
