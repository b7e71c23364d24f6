import pytest

from sortscope.dataset import Dataset
from sortscope.settings import Settings


@pytest.fixture
def fast_settings():
    return Settings(step_delay=0.0)


def exhaust(gen):
    """Run an engine generator to the end; returns (events, completion status)."""
    events = []
    while True:
        try:
            events.append(next(gen))
        except StopIteration as stop:
            return events, stop.value


def cut(make_gen, values, n):
    """Advance a fresh engine n steps, close it, and return the dataset."""
    data = Dataset(values)
    gen = make_gen(data)
    for _ in range(n):
        next(gen)
    gen.close()
    return data
