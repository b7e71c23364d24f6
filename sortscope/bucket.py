import math
from dataclasses import dataclass, field, replace

from sortscope.events import Highlight, StepKind, step
from sortscope.settings import BUCKET_COUNT, BUCKET_EPSILON


@dataclass
class Bucket:
    """One half-open value range [low, high) and the values dropped into it."""
    index: int
    low: float
    high: float
    items: list = field(default_factory=list)

    def contains(self, value) -> bool:
        return self.low <= value < self.high

    @property
    def label(self) -> str:
        return f"[{self.low:g}, {self.high:g})"


def make_buckets(lo, hi, count: int = BUCKET_COUNT, epsilon: float = BUCKET_EPSILON):
    """
    Split [lo, hi + epsilon) into `count` equal-width buckets. Adjacent
    buckets share their edge, so the ranges never overlap or leave gaps.
    """
    top = hi + epsilon
    width = (top - lo) / count
    edges = [lo + i * width for i in range(count)] + [top]
    return [Bucket(i, edges[i], edges[i + 1]) for i in range(count)]


def bucket_index(buckets, value) -> int:
    lo = buckets[0].low
    width = (buckets[-1].high - lo) / len(buckets)
    if width <= 0:
        return 0
    idx =min(max(math.floor((value - lo) / width), 0), len(buckets) - 1)
    # floor() can land one off next to an edge; step to the bucket that holds it
    while idx > 0 and value < buckets[idx].low:
        idx -= 1
    while idx < len(buckets) - 1 and value >= buckets[idx].high:
        idx += 1
    return idx


def _view(buckets):
    return tuple(replace(b, items=tuple(b.items)) for b in buckets)


def insertion_sort_bucket(bucket, buckets, arr, consumed):
    """Insertion sort restricted to bucket.items, one shift per step."""
    items = bucket.items
    for i in range(1, len(items)):
        key = items[i]
        j = i - 1
        while j >= 0 and items[j] > key:
            items[j + 1] = items[j]
            yield step(StepKind.SHIFT,
                       f"Bucket {bucket.index}: {items[j]} > {key}, shifting it right.", arr,
                       values=(items[j], key), highlights=consumed,
                       aux=_view(buckets), aux_index=bucket.index)
            j -= 1
        items[j + 1] = key
        yield step(StepKind.INSERT,
                   f"Bucket {bucket.index}: inserting {key} at position {j + 1}.", arr,
                   values=(key,), highlights=consumed,
                   aux=_view(buckets), aux_index=bucket.index, hold=False)


def bucket_sort(data, count: int = BUCKET_COUNT, epsilon: float = BUCKET_EPSILON,
                running=None):
    """
    Bucket sort over equal-width value ranges. The array itself is only
    replaced once every bucket is sorted, and only if `running()` still
    holds at that point; otherwise the generator ends with no result.
    """
    arr = data.values
    ctx = data.context
    buckets = make_buckets(ctx.min_value, ctx.max_value, count, epsilon)

    yield step(StepKind.BUCKETS,
               f"Starting Bucket Sort with {count} buckets over "
               f"[{ctx.min_value:g}, {ctx.max_value + epsilon:g}).", arr,
               aux=_view(buckets))

    # ---- Distribution ----
    consumed = {}
    for i, v in enumerate(arr):
        b = bucket_index(buckets, v)
        yield step(StepKind.DISTRIBUTE_FOCUS,
                   f"Distributing {v} into bucket {b} {buckets[b].label}.", arr,
                   indices=(i,), values=(v,),
                   highlights={**consumed, i: Highlight.PRIMARY},
                   aux=_view(buckets), aux_index=b)
        buckets[b].items.append(v)
        consumed = {**consumed, i: Highlight.CONSUMED}
        yield step(StepKind.DISTRIBUTE,
                   f"Bucket {b} now holds {len(buckets[b].items)} value(s).", arr,
                   indices=(i,), values=(v,), highlights=consumed,
                   aux=_view(buckets), aux_index=b, hold=False)

    # ---- Per-bucket insertion sort ----
    for bucket in buckets:
        if not bucket.items:
            continue
        yield step(StepKind.SORT_BUCKET,
                   f"Sorting bucket {bucket.index} {bucket.label} with Insertion Sort.", arr,
                   highlights=consumed, aux=_view(buckets), aux_index=bucket.index,
                   hold=False)
        yield from insertion_sort_bucket(bucket, buckets, arr, consumed)

    if running is not None and not running():
        return

    # ---- Concatenation ----
    arr[:] = [v for bucket in buckets for v in bucket.items]
    data.refresh()
    return "Bucket Sort Complete. Average Case: O(n + k)"
