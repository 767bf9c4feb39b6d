import numpy as np
import pytest

from pagesplit.splitting import InvalidRange, RowAnalyzer, analyzer, column_bounds, compute_row_signal


def test_uniform_rows_have_zero_variance():
    img = np.full((10, 40, 3), 200, dtype=np.uint8)
    signal = compute_row_signal(img)

    assert len(signal) == 10
    assert np.all(signal.variances == 0)
    # mean is the sum of the channel means
    assert np.allclose(signal.means, 600.0)


def test_variance_is_unnormalized_sum_over_channels():
    img = np.zeros((1, 4, 3), dtype=np.uint8)
    img[0, :, 0] = [0, 10, 0, 10]  # mean 5, squared deviations 4 * 25
    img[0, :, 1] = 7
    img[0, :, 2] = [2, 2, 4, 4]  # mean 3, squared deviations 4 * 1

    signal = compute_row_signal(img)

    assert signal.variances[0] == pytest.approx(104.0)
    assert signal.means[0] == pytest.approx(5.0 + 7.0 + 3.0)


def test_variance_scales_with_range_width():
    img = np.zeros((1, 100, 3), dtype=np.uint8)
    img[0, 1::2] = 255

    full = compute_row_signal(img, 0.0, 1.0)
    half = compute_row_signal(img, 0.0, 0.5)

    assert full.variances[0] == pytest.approx(2 * half.variances[0])


def test_sub_range_excludes_columns():
    img = np.full((5, 100, 3), 255, dtype=np.uint8)
    img[:, 80:] = np.arange(20, dtype=np.uint8)[:, np.newaxis]

    signal = compute_row_signal(img, 0.0, 0.75)

    assert (signal.left, signal.right) == (0, 75)
    assert np.all(signal.variances == 0)
    assert np.all(compute_row_signal(img).variances > 0)


def test_rows_are_top_to_bottom():
    img = np.zeros((3, 10, 3), dtype=np.uint8)
    img[2, ::2] = 100

    pairs = list(compute_row_signal(img))

    assert pairs[0] == (0.0, 0.0)
    assert pairs[1] == (0.0, 0.0)
    assert pairs[2][1] > 0


def test_column_bounds_floor():
    assert column_bounds(99, 0.1, 0.5) == (9, 49)


@pytest.mark.parametrize("left,right", [(0.5, 0.4), (0.3, 0.3)])
def test_reversed_range_rejected(left, right):
    with pytest.raises(InvalidRange):
        RowAnalyzer(left, right)


def test_empty_range_rejected():
    img = np.zeros((5, 3, 3), dtype=np.uint8)
    with pytest.raises(InvalidRange):
        compute_row_signal(img, 0.1, 0.2)


def test_non_rgb_rejected():
    with pytest.raises(ValueError):
        compute_row_signal(np.zeros((5, 5), dtype=np.uint8))


def test_block_processing_matches_whole_image(monkeypatch):
    rng = np.random.default_rng(1)
    img = rng.integers(0, 256, size=(50, 30, 3), dtype=np.uint8)
    pixels = img[:, 3:27].astype(np.float64)
    channel_means = pixels.mean(axis=1)
    expected_variances = ((pixels - channel_means[:, np.newaxis, :]) ** 2).sum(axis=(1, 2))

    monkeypatch.setattr(analyzer, "ROW_BLOCK_SIZE", 7)
    signal = compute_row_signal(img, 0.1, 0.9)

    assert len(signal) == 50
    assert np.allclose(signal.means, channel_means.sum(axis=1))
    assert np.allclose(signal.variances, expected_variances)
