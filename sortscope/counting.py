from sortscope.events import Highlight, StepKind, step


def counting_sort(data):
    """
    Counting sort, O(n + k). Phase 1 tallies every value into count[0..k]
    without touching the array; phase 2 writes values back left to right.

    Each write exchanges the slot at the output cursor with a not-yet-placed
    slot holding the same value, so the array stays a permutation of its
    input even if the run is stopped halfway through placement.
    """
    arr = data.values
    k = data.context.max_value
    count = [0] * (k + 1)

    yield step(StepKind.START, f"Starting Counting Sort. Max value k = {k}.", arr,
               aux=tuple(count))

    # ---- Phase 1: counting ----
    for i, v in enumerate(arr):
        yield step(StepKind.TALLY_FOCUS,
                   f"Phase 1: counting occurrences. Reading {v} at index {i}.", arr,
                   indices=(i,), values=(v,), highlights={i: Highlight.PRIMARY},
                   aux=tuple(count), aux_index=v)
        count[v] += 1
        yield step(StepKind.TALLY, f"Phase 1: count[{v}] is now {count[v]}.", arr,
                   indices=(i,), values=(v,), aux=tuple(count), aux_index=v)

    # ---- Phase 2: placing ----
    pos = 0
    for i in range(k + 1):
        yield step(StepKind.PLACE_FOCUS,
                   f"Phase 2: count[{i}] = {count[i]}, placing {i} that many times.", arr,
                   values=(i,), aux=tuple(count), aux_index=i, hold=False)
        while count[i] > 0:
            j = arr.index(i, pos)
            arr[pos], arr[j] = arr[j], arr[pos]
            yield step(StepKind.PLACE, f"Phase 2: writing {i} to index {pos}.", arr,
                       indices=(pos, j), values=(i,), highlights={pos: Highlight.SECONDARY},
                       aux=tuple(count), aux_index=i)
            count[i] -= 1
            yield step(StepKind.DECREMENT, f"Phase 2: count[{i}] is now {count[i]}.", arr,
                       indices=(pos,), values=(i,), aux=tuple(count), aux_index=i)
            pos += 1

    return "Counting Sort Complete. O(n + k)"
