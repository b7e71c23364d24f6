from sortscope.bucket import bucket_sort
from sortscope.counting import counting_sort
from sortscope.dataset import SortScopeError
from sortscope.radix import radix_sort
from sortscope.settings import Settings

ALGORITHMS = [
    ("Counting Sort",  "counting"),
    ("Bucket Sort",    "bucket"),
    ("LSD Radix Sort", "radix"),
]

INTEGER_ONLY = {"counting", "radix"}


class ApplicabilityError(SortScopeError):
    """The selected algorithm cannot run on the loaded data."""
    INTEGERS_ONLY   = "integers only"
    RANGE_TOO_LARGE = "range too large"

    def __init__(self, key, reason, message):
        super().__init__(message)
        self.key = key
        self.reason = reason


def display_name(key):
    for name, k in ALGORITHMS:
        if k == key:
            return name
    raise KeyError(f"Unknown key: {key}")


def check_applicable(key, context, settings: Settings = None):
    """Raise ApplicabilityError if `key` must not run on data described by `context`."""
    settings = settings or Settings()
    name = display_name(key)
    if key in INTEGER_ONLY and context.has_fraction:
        raise ApplicabilityError(
            key, ApplicabilityError.INTEGERS_ONLY,
            f"Error: {name} works on integers only. Try Bucket Sort for decimals.")
    if key == "counting" and context.max_value > settings.counting_limit:
        raise ApplicabilityError(
            key, ApplicabilityError.RANGE_TOO_LARGE,
            f"Error: Max value (k = {context.max_value:g}) is too large for {name}. "
            f"It is only efficient for small ranges (k <= {settings.counting_limit}). "
            f"Try Radix Sort instead, or load a new array.")


def get_generator(key, data, settings: Settings = None, running=None):
    settings = settings or Settings()
    builtins = {
        "counting": lambda: counting_sort(data),
        "bucket":   lambda: bucket_sort(data, settings.bucket_count, settings.bucket_epsilon,
                                       running=running),
        "radix":    lambda: radix_sort(data),
    }
    if key in builtins:
        return builtins[key]()
    raise KeyError(f"Unknown key: {key}")
