"""Step-by-step counting, bucket and LSD radix sort with pause / resume."""

from sortscope.dataset import Dataset, InputParseError, RunContext, SortScopeError
from sortscope.digits import stable_digit_sort
from sortscope.engines import ALGORITHMS, ApplicabilityError, check_applicable
from sortscope.events import Highlight, StepEvent, StepKind
from sortscope.playback import PlaybackController, PlaybackState
from sortscope.session import Outcome, Session
from sortscope.settings import Settings, load_settings

__version__ = "1.0.0"
