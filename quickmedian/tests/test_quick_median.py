import math
import random
import sys
from collections import Counter
from fractions import Fraction

import numpy as np
import pytest

from quickmedian.errors import InvalidArgumentError
from quickmedian.selection.quick_select import PivotMethod, QuickSelect, SortOrder
from quickmedian.statistics.quick_median import QuickMedian, average
from quickmedian.statistics.sorting_median import SortingMedian

INF = math.inf
NINF = -math.inf
MAX = sys.float_info.max
MIN = math.nextafter(0.0, 1.0)
MAX_1 = math.nextafter(MAX, 0.0)
MAX_2 = math.nextafter(MAX_1, 0.0)


def exact_average(x, y):
    return float((Fraction(x) + Fraction(y)) / 2)


class RecordingSelect(QuickSelect):
    """记录每次 select_range 调用的参数和返回值。"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def select_range(self, values, k, begin, end):
        bounds = super().select_range(values, k, begin, end)
        self.calls.append((k, begin, end, bounds))
        return bounds


@pytest.mark.parametrize(
    "x, y",
    [
        (MAX, MAX),
        (MAX, MAX_1),
        (MAX, MAX_2),
        (MAX, -MAX),
        (MAX, -MAX_1),
        (MAX, -MAX_2),
        (0.0, 10.0),
        (0.0, 11.0),
        (3.0, 11.0),
        (0.0, -10.0),
        (0.0, -11.0),
        (3.0, -11.0),
        (-3.0, 11.0),
        (-3.0, -11.0),
    ],
)
def test_average_matches_exact_arithmetic(x, y):
    assert average(x, y) == exact_average(x, y)
    assert average(y, x) == exact_average(x, y)


def test_average_edge_cases():
    assert average(MAX, MAX) == MAX
    assert average(-MAX, -MAX) == -MAX
    assert average(MIN, MIN) == MIN
    assert average(0.0, 0.0) == 0.0
    assert average(INF, INF) == INF
    assert average(NINF, NINF) == NINF
    assert average(INF, 0.0) == INF
    assert average(NINF, 0.0) == NINF
    assert average(INF, MAX) == INF
    assert math.isnan(average(INF, NINF))
    assert math.isnan(average(NINF, INF))


def test_average_opposite_signs_random():
    rng = random.Random(17)
    for _ in range(500):
        x = rng.uniform(0, 1) * 10 ** rng.randint(-250, 300)
        y = -rng.uniform(0, 1) * 10 ** rng.randint(-250, 300)
        assert average(x, y) == exact_average(x, y)


def test_average_static_on_class():
    assert QuickMedian.average(3.0, 11.0) == 7.0


def test_median_illegal_arguments():
    median = QuickMedian()
    with pytest.raises(InvalidArgumentError):
        median.median(None)
    with pytest.raises(InvalidArgumentError):
        median.median([])
    with pytest.raises(InvalidArgumentError):
        median.execute(np.array([], dtype=np.float64))


def test_median_examples():
    median = QuickMedian(QuickSelect(rng=random.Random(42)))
    assert median.median([6.0, 8.0, 7.0, 5.0, 3.0, 0.0, 9.0, 1.0, 2.0, 4.0, 10.0]) == 5.0
    assert median.median([6.0, 8.0, 7.0, 5.0, 3.0, 0.0, 9.0, 1.0, 2.0, 4.0]) == 4.5


@pytest.mark.parametrize("value", [42.42, MAX, -MAX, INF, NINF, 0.0, -7.5])
def test_median_single_value(value):
    assert QuickMedian().median([value]) == value


def test_median_two_values_does_not_select():
    selector = RecordingSelect()
    assert QuickMedian(selector).median([1.0, 4.0]) == 2.5
    assert selector.calls == []


@pytest.mark.parametrize(
    "values, expected",
    [
        ([MAX_1, MAX, MAX, MAX], MAX),
        ([INF, INF, INF], INF),
        ([INF, INF], INF),
        ([INF, INF, INF, INF], INF),
        ([NINF, NINF, NINF], NINF),
        ([NINF, NINF], NINF),
        ([NINF, NINF, NINF, NINF], NINF),
        ([INF, NINF, INF], INF),
        ([INF, NINF, NINF], NINF),
        ([INF, 0.0], INF),
        ([INF, 0.0, INF, 0.0], INF),
        ([INF, MAX], INF),
        ([INF, MAX, INF, MAX], INF),
        ([INF, -MAX], INF),
        ([INF, -MAX, INF, -MAX], INF),
        ([NINF, MAX], NINF),
        ([NINF, MAX, NINF, MAX], NINF),
        ([NINF, -MAX], NINF),
        ([NINF, -MAX, NINF, -MAX], NINF),
    ],
)
def test_median_extreme_values(values, expected):
    assert QuickMedian(QuickSelect(rng=random.Random(42))).median(values) == expected


@pytest.mark.parametrize("values", [[NINF, INF], [NINF, NINF, INF, INF]])
def test_median_opposite_infinities_is_nan(values):
    assert math.isnan(QuickMedian().median(values))


def test_median_even_length_reuses_pinned_low_middle():
    selector = RecordingSelect(pivot_method=PivotMethod.FIXED)
    assert QuickMedian(selector).median([1.0, 4.0, 3.0, 2.0]) == 2.5
    assert len(selector.calls) == 1
    assert selector.calls[0][3].before == 1


def test_median_even_length_narrows_second_select():
    selector = RecordingSelect(pivot_method=PivotMethod.FIXED)
    assert QuickMedian(selector).median([4.0, 3.0, 2.0, 1.0]) == 2.5
    assert len(selector.calls) == 2
    first, second = selector.calls
    assert first[:3] == (2, 0, 4)
    assert first[3].before is None
    assert second[:3] == (1, 0, 2)


@pytest.mark.parametrize("method", list(PivotMethod))
def test_median_second_select_starts_after_before_bound(method):
    rng = random.Random(3)
    for _ in range(30):
        values = [rng.random() for _ in range(2 * rng.randint(2, 200))]
        selector = RecordingSelect(pivot_method=method, rng=random.Random(5))
        QuickMedian(selector).median(values)

        first = selector.calls[0]
        k = len(values) // 2
        assert first[:3] == (k, 0, len(values))
        if len(selector.calls) == 2:
            before = first[3].before
            assert selector.calls[1][:3] == (k - 1, 0 if before is None else before + 1, k)
        else:
            assert first[3].before == k - 1


@pytest.mark.parametrize("order", list(SortOrder))
@pytest.mark.parametrize("method", list(PivotMethod))
def test_median_random_against_sorting(method, order):
    median = QuickMedian(QuickSelect(order, method, random.Random(42)))
    reference_median = SortingMedian()
    rng = random.Random(33)

    for _ in range(40):
        reference = [rng.random() for _ in range(10 + rng.randrange(600))]
        values = list(reference)
        result = median.median(values)
        assert Counter(values) == Counter(reference)
        assert result == reference_median.execute(list(reference))


def test_median_with_duplicates_against_numpy():
    rng = np.random.default_rng(12)
    median = QuickMedian(QuickSelect(rng=random.Random(1)))
    for size in [3, 4, 51, 100, 1001]:
        values = rng.integers(0, 10, size=size).astype(np.float64)
        expected = float(np.median(values))
        assert median.median(values.tolist()) == expected


def test_median_numpy_array_returns_float():
    values = np.array([5.0, 1.0, 3.0, 2.0], dtype=np.float64)
    result = QuickMedian().execute(values)
    assert type(result) is float
    assert result == 2.5
    assert sorted(values.tolist()) == [1.0, 2.0, 3.0, 5.0]


def test_default_selector():
    median = QuickMedian()
    assert isinstance(median.selector, QuickSelect)
    assert median.selector.pivot_method is PivotMethod.MEDIAN_OF_THREE_RANDOM
