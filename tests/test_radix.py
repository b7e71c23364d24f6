import random

import pytest

from conftest import cut, exhaust
from sortscope.dataset import Dataset
from sortscope.events import StepKind
from sortscope.radix import PassColumn, radix_sort


def test_example_trace():
    data = Dataset([5, 3, 8, 1])
    events, status = exhaust(radix_sort(data))
    focus = [e for e in events if e.kind is StepKind.DIGIT_FOCUS]
    assert len(focus) == 1
    assert focus[0].values == (5, 3, 8, 1)
    assert data.values == [1, 3, 5, 8]
    assert status.startswith("Radix Sort Complete")


def test_pass_columns():
    data = Dataset([170, 45, 75, 90, 802, 24, 2, 66])
    events, _ = exhaust(radix_sort(data))
    columns = events[-1].aux
    assert [c.label for c in columns] == [
        "Original Array", "Pass 1 (by 1's)", "Pass 2 (by 10's)", "Pass 3 (by 100's)"]
    assert columns[1].values == (170, 90, 802, 2, 24, 45, 75, 66)
    assert columns[2].values == (802, 2, 24, 45, 66, 170, 75, 90)
    assert columns[3].values == (2, 24, 45, 66, 75, 90, 170, 802)
    assert columns[0].cells()[:2] == ["170", "045"]
    assert data.values == sorted(data.values)


def test_zero_max_runs_one_pass():
    data = Dataset([0, 0, 0])
    events, _ = exhaust(radix_sort(data))
    assert sum(e.kind is StepKind.DIGIT_PASS for e in events) == 1
    assert data.values == [0, 0, 0]


def test_exact_power_of_ten():
    data = Dataset([100, 7, 10])
    events, _ = exhaust(radix_sort(data))
    assert sum(e.kind is StepKind.DIGIT_PASS for e in events) == 3
    assert data.values == [7, 10, 100]


@pytest.mark.parametrize("seed", range(5))
def test_random(seed):
    rng = random.Random(seed)
    values = [rng.randint(0, 99999) for _ in range(40)]
    data = Dataset(values)
    exhaust(radix_sort(data))
    assert data.values == sorted(values)


def test_cancel_leaves_last_completed_pass():
    values = [329, 457, 657, 839, 436, 720, 355]
    events, _ = exhaust(radix_sort(Dataset(values)))
    for n, event in enumerate(events, 1):
        data = cut(radix_sort, values, n)
        last_column = event.aux[-1]
        assert isinstance(last_column, PassColumn)
        assert tuple(data.values) == last_column.values
