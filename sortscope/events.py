from dataclasses import dataclass, field
from enum import Enum


class StepKind(Enum):
    START       = "start"
    TALLY_FOCUS = "tally-focus"
    TALLY       = "tally"
    PLACE_FOCUS = "place-focus"
    PLACE       = "place"
    DECREMENT   = "decrement"
    BUCKETS     = "buckets"
    DISTRIBUTE_FOCUS = "distribute-focus"
    DISTRIBUTE  = "distribute"
    SORT_BUCKET = "sort-bucket"
    SHIFT       = "shift"
    INSERT      = "insert"
    DIGIT_FOCUS = "digit-focus"
    DIGIT_PASS  = "digit-pass"
    COMPLETE    = "complete"


class Highlight(Enum):
    PRIMARY   = "primary"
    SECONDARY = "secondary"
    CONSUMED  = "consumed"


@dataclass(frozen=True)
class StepEvent:
    """
    One observable unit of progress, handed to the renderer.

    Attributes
    ----------
    kind       : StepKind  - what just happened
    status     : str       - explanation text for this step
    indices    : tuple     - dataset indices touched
    values     : tuple     - values involved
    highlights : dict      - {dataset index: Highlight}
    aux        : tuple     - snapshot of counts / buckets / columns
    aux_index  : int|None  - count cell, bucket or column touched
    snapshot   : tuple     - dataset values after the step
    hold       : bool      - suspend after announcing (False: announce only)
    """
    kind: StepKind
    status: str
    indices: tuple = ()
    values: tuple = ()
    highlights: dict = field(default_factory=dict)
    aux: tuple = ()
    aux_index: int | None = None
    snapshot: tuple = ()
    hold: bool = True


def step(kind, status, data, **kw) -> StepEvent:
    """Build a StepEvent carrying a copy of the current dataset values."""
    return StepEvent(kind, status, snapshot=tuple(data), **kw)
