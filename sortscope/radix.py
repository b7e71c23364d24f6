from dataclasses import dataclass

from sortscope.digits import digit_at, stable_digit_sort, weights
from sortscope.events import StepKind, step
from sortscope.settings import RADIX_BASE


@dataclass(frozen=True)
class PassColumn:
    label: str
    values: tuple
    width: int

    def cells(self):
        """Values zero-padded to the digit count of the maximum."""
        return [str(v).zfill(self.width) for v in self.values]


def radix_sort(data, base: int = RADIX_BASE):
    """
    LSD radix sort: one stable digit pass per position, least significant
    first. Every pass replaces the whole array in a single assignment.
    """
    arr = data.values
    ctx = data.context
    columns = [PassColumn("Original Array", tuple(arr), ctx.digit_count)]

    yield step(StepKind.START, "Starting Radix Sort (LSD).", arr,
               aux=tuple(columns), aux_index=0)

    for n, w in enumerate(weights(ctx.max_value, base), 1):
        digits = tuple(digit_at(v, w, base) for v in arr)
        yield step(StepKind.DIGIT_FOCUS, f"Pass {n}: sorting by the {w}'s digit.", arr,
                   indices=tuple(range(len(arr))), values=digits,
                   aux=tuple(columns), aux_index=n)

        arr[:] = stable_digit_sort(arr, w, base)
        columns.append(PassColumn(f"Pass {n} (by {w}'s)", tuple(arr), ctx.digit_count))
        yield step(StepKind.DIGIT_PASS,
                   f"Array is now stable-sorted by the {w}'s digit.", arr,
                   aux=tuple(columns), aux_index=n)

    return "Radix Sort Complete. O(d * (n + k))"
