import numpy as np
import pytest
from PIL import Image


def _noisy_page(width, height, seed):
    """Every row is high-variance content."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


@pytest.fixture
def make_page():
    """
    Build a synthetic noisy page, optionally with uniform blank bands.

    bands is a list of (start, end) row ranges painted a uniform color.
    """

    def _make(width=200, height=3000, bands=(), value=240, seed=0):
        img = _noisy_page(width, height, seed)
        for start, end in bands:
            img[start:end] = value
        return img

    return _make


@pytest.fixture
def noisy_page(make_page):
    return make_page()


@pytest.fixture
def banded_page(make_page):
    """3000-row page with a single blank band on rows 1800-1850."""
    return make_page(bands=[(1800, 1850)])


@pytest.fixture
def write_image(tmp_path):
    """Write an RGB array to tmp_path and return its path."""

    def _write(img, name="page.png", directory=None):
        path = (directory or tmp_path) / name
        Image.fromarray(img).save(path)
        return path

    return _write
