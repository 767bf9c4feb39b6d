import numpy as np
import pytest

from pagesplit.splitting import CutPlanner, NoBlankSpace, SplitConfig, plan_cuts

CONTENT = 1000.0
BLANK = 0.0


def signal(length, blank_rows=()):
    """Smoothed signal with the given rows blank and the rest content."""
    values = np.full(length, CONTENT)
    for row in blank_rows:
        values[row] = BLANK
    return values


def assert_partition(plan, height):
    bounds = plan.boundaries
    assert bounds[0][0] == 0
    assert bounds[-1][1] == height
    for (_, end), (start, _) in zip(bounds, bounds[1:]):
        assert end == start
    assert all(start < end for start, end in bounds)


def test_last_piece_needs_no_search():
    plan = plan_cuts(signal(1471), height=1500)

    assert plan.boundaries == [(0, 1500)]


def test_cut_at_latest_blank_row():
    smoothed = signal(2971, blank_rows=range(1800, 1821))

    plan = plan_cuts(smoothed, height=3000)

    assert plan.boundaries == [(0, 1820), (1820, 3000)]


def test_candidate_row_itself_can_be_blank():
    smoothed = signal(4971, blank_rows=[2000, 3500])

    plan = plan_cuts(smoothed, height=5000, max_height=2000, min_height=1000)

    assert plan.boundaries == [(0, 2000), (2000, 3500), (3500, 5000)]


def test_no_blank_space_raises_at_min_height():
    with pytest.raises(NoBlankSpace) as exc_info:
        plan_cuts(signal(2971), height=3000)

    assert exc_info.value.y_start == 0
    assert exc_info.value.y_end == 1000


def test_blank_row_exactly_at_min_height_is_accepted():
    plan = plan_cuts(signal(2971, blank_rows=[1000]), height=3000)

    assert plan.boundaries[0] == (0, 1000)


def test_blank_row_below_min_height_is_ignored():
    with pytest.raises(NoBlankSpace):
        plan_cuts(signal(2971, blank_rows=[999]), height=3000)


def test_failure_in_later_piece_reports_its_range():
    smoothed = signal(5971, blank_rows=[1900])

    with pytest.raises(NoBlankSpace) as exc_info:
        plan_cuts(smoothed, height=6000)

    assert (exc_info.value.y_start, exc_info.value.y_end) == (1900, 2900)


def test_rows_past_signal_end_count_as_content():
    # signal shorter than the candidate: rows >= 1500 cannot be evaluated
    smoothed = signal(1500, blank_rows=[1499])

    plan = plan_cuts(smoothed, height=2600, max_height=2000, min_height=1000)

    assert plan.boundaries == [(0, 1499), (1499, 2600)]


def test_threshold_is_strict():
    smoothed = np.full(2971, 100.0)

    with pytest.raises(NoBlankSpace):
        plan_cuts(smoothed, height=3000, blank_threshold=100.0)

    plan = plan_cuts(smoothed, height=3000, blank_threshold=100.1)
    assert plan.boundaries == [(0, 2000), (2000, 3000)]


def test_margin_extends_crop_and_clamps():
    smoothed = signal(4971, blank_rows=[1900, 3800])

    plan = plan_cuts(smoothed, height=5000, margin=150)

    assert [i.crop_end for i in plan] == [2050, 3950, 5000]
    assert [i.crop_height for i in plan] == [2050, 2050, 1200]
    assert [i.height for i in plan] == [1900, 1900, 1200]


def test_partition_and_height_bounds():
    rng = np.random.default_rng(3)
    height = 20000
    smoothed = np.where(rng.random(height - 29) < 0.01, BLANK, CONTENT)

    plan = plan_cuts(smoothed, height=height)

    assert_partition(plan, height)
    for interval in plan.intervals[:-1]:
        assert 1000 <= interval.height <= 2000


def test_higher_threshold_never_loses_blank_rows():
    rng = np.random.default_rng(7)
    smoothed = rng.uniform(0, 500, size=2971)

    low = CutPlanner(SplitConfig(blank_threshold=50.0))
    high = CutPlanner(SplitConfig(blank_threshold=200.0))

    for row in range(len(smoothed)):
        if low.is_blank(smoothed, row):
            assert high.is_blank(smoothed, row)


def test_plan_is_deterministic():
    smoothed = signal(9971, blank_rows=range(0, 9971, 700))

    first = plan_cuts(smoothed, height=10000)
    second = plan_cuts(smoothed, height=10000)

    assert first == second
