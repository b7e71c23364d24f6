import random
from collections import Counter

import pytest

from conftest import cut, exhaust
from sortscope.bucket import bucket_index, bucket_sort, insertion_sort_bucket, make_buckets
from sortscope.dataset import Dataset
from sortscope.events import Highlight, StepKind


def test_example_dataset():
    data = Dataset([29.5, 3.2, 71.0])
    buckets = make_buckets(3.2, 71.0, 10, 0.003)
    assert buckets[0].low == 3.2
    assert buckets[-1].high == pytest.approx(71.003)
    for v in data.values:
        assert buckets[bucket_index(buckets, v)].contains(v)
    assert [bucket_index(buckets, v) for v in data.values] == [3, 0, 9]

    events, status = exhaust(bucket_sort(data, 10, 0.003))
    assert data.values == [3.2, 29.5, 71.0]
    assert status.startswith("Bucket Sort Complete")


def test_buckets_partition_range():
    buckets = make_buckets(2.5, 40.0, 10, 1e-3)
    assert len(buckets) == 10
    assert buckets[0].low == 2.5
    assert buckets[-1].high == 40.001
    widths = [b.high - b.low for b in buckets]
    assert all(w == pytest.approx(widths[0]) for w in widths)
    for a, b in zip(buckets, buckets[1:]):
        assert a.high == b.low


def test_edge_values_land_in_upper_bucket():
    buckets = make_buckets(0, 9.999, 10, 0.001)
    for b in buckets:
        assert bucket_index(buckets, b.low) == b.index
    assert bucket_index(buckets, 9.999) == 9


def test_index_clamped():
    buckets = make_buckets(1, 2, 10, 0.001)
    assert bucket_index(buckets, 0.5) == 0
    assert bucket_index(buckets, 5) == 9


@pytest.mark.parametrize("values", [
    [5],
    [3, 3, 3],
    [0, 99, 50, 50, 1],
    [0.5, 0.25, 0.75, 0.1],
    [1000000, 3, 77, 3.5],
])
def test_sorts(values):
    data = Dataset(values)
    exhaust(bucket_sort(data))
    assert data.values == sorted(values)


def test_random_decimals():
    rng = random.Random(3)
    for _ in range(20):
        values = [round(rng.uniform(0, 100), 2) for _ in range(rng.randint(1, 25))]
        data = Dataset(values)
        exhaust(bucket_sort(data))
        assert data.values == sorted(data.values)
        assert Counter(data.values) == Counter(Dataset(values).values)


def test_all_equal_go_to_first_bucket():
    data = Dataset([4, 4, 4])
    events, _ = exhaust(bucket_sort(data))
    dist = [e for e in events if e.kind is StepKind.DISTRIBUTE]
    assert {e.aux_index for e in dist} == {0}


def test_distribution_marks_consumed():
    data = Dataset([9, 1])
    events, _ = exhaust(bucket_sort(data))
    focus = [e for e in events if e.kind is StepKind.DISTRIBUTE_FOCUS]
    assert focus[1].highlights == {0: Highlight.CONSUMED, 1: Highlight.PRIMARY}
    dist = [e for e in events if e.kind is StepKind.DISTRIBUTE]
    assert dist[-1].highlights == {0: Highlight.CONSUMED, 1: Highlight.CONSUMED}
    assert all(e.snapshot == (9, 1) for e in dist)


def test_insertion_sort_one_shift_per_step():
    buckets = make_buckets(0, 10)
    bucket = buckets[0]
    bucket.items = [0.9, 0.5, 0.1]
    events, _ = exhaust(insertion_sort_bucket(bucket, buckets, [], {}))
    shifts = [e for e in events if e.kind is StepKind.SHIFT]
    assert len(shifts) == 3
    assert all(e.hold for e in shifts)
    assert bucket.items == [0.1, 0.5, 0.9]


def test_dataset_untouched_until_concatenation():
    values = [0.42, 0.32, 0.23, 0.52, 0.25, 0.47, 0.51]
    events, _ = exhaust(bucket_sort(Dataset(values)))
    for n in range(1, len(events) + 1):
        assert cut(bucket_sort, values, n).values == values


def test_cancel_mid_bucket_leaves_later_buckets_untouched():
    values = [19, 11, 15, 92, 91]
    data = Dataset(values)
    gen = bucket_sort(data)
    for event in gen:
        if event.kind is StepKind.SHIFT:
            break
    gen.close()
    later = event.aux[9].items
    assert later == (92, 91)
    assert data.values == values


def test_no_concatenation_once_stopped():
    values = [0.42, 0.32, 0.23, 0.52, 0.25]
    data = Dataset(values)
    events, status = exhaust(bucket_sort(data, running=lambda: False))
    assert status is None
    assert data.values == values
    assert all(e.kind is not StepKind.COMPLETE for e in events)

    data = Dataset(values)
    _, status = exhaust(bucket_sort(data, running=lambda: True))
    assert status.startswith("Bucket Sort Complete")
    assert data.values == sorted(values)
