from typing import List, Sequence


def digit_at(value: int, weight: int, base: int = 10) -> int:
    return (value // weight) % base


def digit_count(value) -> int:
    """Number of decimal digits in the integer part of value (1 for 0)."""
    n = int(value)
    return len(str(n)) if n > 0 else 1


def stable_digit_sort(values: Sequence[int], weight: int, base: int = 10) -> List[int]:
    """
    Stable counting sort of `values` by the digit at positional `weight`.
    Returns a new list; the input is left untouched.
    """
    n = len(values)
    count = [0] * base
    output = [0] * n

    for v in values:
        count[digit_at(v, weight, base)] += 1

    # count[d] becomes one past the last output slot for digit d
    for d in range(1, base):
        count[d] += count[d - 1]

    # Right to left keeps equal digits in input order
    for v in reversed(values):
        d = digit_at(v, weight, base)
        count[d] -= 1
        output[count[d]] = v

    return output


def weights(max_value: int, base: int = 10):
    """Positional weights 1, base, base**2, ... covering max_value (just 1 for 0)."""
    w = 1
    yield w
    while max_value // (w * base) >= 1:
        w *= base
        yield w
