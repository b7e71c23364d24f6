import math
import random
from dataclasses import dataclass

from sortscope.digits import digit_count
from sortscope.settings import RANDOM_MAX, RANDOM_SIZE


class SortScopeError(Exception):
    pass


class InputParseError(SortScopeError, ValueError):
    pass


def is_fractional(value) -> bool:
    return value != math.floor(value)


@dataclass(frozen=True)
class RunContext:
    size: int
    min_value: float
    max_value: float
    digit_count: int
    has_fraction: bool

    @classmethod
    def of(cls, values):
        mx = max(values)
        return cls(size=len(values), min_value=min(values), max_value=mx,
                   digit_count=digit_count(mx),
                   has_fraction=any(is_fractional(v) for v in values))


class Dataset:
    """
    The array being sorted. Engines mutate `values` in place and call
    refresh() after replacing it wholesale.
    """

    def __init__(self, values):
        values = list(values)
        if not values:
            raise InputParseError("Array cannot be empty.")
        for v in values:
            if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
                raise InputParseError(f"Invalid value: {v!r}")
            if v < 0:
                raise InputParseError(f"Negative value: {v!r}")
        # integral floats like 7.0 become ints so counting/radix can index with them
        self.values = [int(v) if not is_fractional(v) else v for v in values]
        self.context = RunContext.of(self.values)

    def refresh(self) -> RunContext:
        self.context = RunContext.of(self.values)
        return self.context

    def __len__(self):
        return len(self.values)

    def __repr__(self):
        return f"Dataset({self.values!r})"


def parse_values(text: str) -> list:
    """Parse a comma-separated list of non-negative numbers."""
    text = text.strip()
    if not text:
        raise InputParseError("Please enter some numbers.")
    out = []
    for item in text.split(","):
        item = item.strip()
        try:
            num = float(item)
        except ValueError:
            raise InputParseError(
                f'Invalid input: "{item}". Only non-negative numbers and commas.') from None
        if not math.isfinite(num) or num < 0:
            raise InputParseError(
                f'Invalid input: "{item}". Only non-negative numbers and commas.')
        out.append(int(num) if num.is_integer() else num)
    return out


def random_values(size: int = RANDOM_SIZE, max_value: int = RANDOM_MAX, rng=None) -> list:
    rng = rng or random
    return [rng.randint(0, max_value) for _ in range(size)]
