"""Utility modules for the page splitter."""

from pagesplit.utils.image_io import (
    ImageIOError,
    DecodeError,
    EncodeError,
    load_image,
    save_image,
    image_extension,
)

__all__ = [
    "ImageIOError",
    "DecodeError",
    "EncodeError",
    "load_image",
    "save_image",
    "image_extension",
]
