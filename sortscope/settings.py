import json
import logging
import os
from dataclasses import dataclass, fields, replace

logger = logging.getLogger(__name__)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH   = 1100
WINDOW_HEIGHT  = 680
FPS            = 60

# Largest value counting sort accepts (count array has k+1 cells).
COUNTING_LIMIT = 500

BUCKET_COUNT   = 10
# Added to the maximum so it lands inside the last half-open bucket.
BUCKET_EPSILON = 1e-3

RADIX_BASE     = 10

# Seconds between steps at speed 1.0x; the slider divides it.
STEP_DELAY     = 0.5
SPEED_MIN      = 0.25
SPEED_MAX      = 8.0
DEFAULT_SPEED  = 1.0

RANDOM_SIZE    = 20
RANDOM_MAX     = 99

PAUSED_MARKER  = "  -- PAUSED --"

# JSON file saved next to the package for overriding the values above
_PKG_DIR      = os.path.dirname(os.path.abspath(__file__))
SETTINGS_JSON = os.path.join(_PKG_DIR, "sortscope_settings.json")


@dataclass(frozen=True)
class Settings:
    counting_limit: int  = COUNTING_LIMIT
    bucket_count: int    = BUCKET_COUNT
    bucket_epsilon: float = BUCKET_EPSILON
    step_delay: float    = STEP_DELAY
    speed: float         = DEFAULT_SPEED
    random_size: int     = RANDOM_SIZE
    random_max: int      = RANDOM_MAX

    def with_speed(self, speed: float) -> "Settings":
        return replace(self, speed=clamp_speed(speed))


def clamp_speed(speed: float) -> float:
    return max(SPEED_MIN, min(SPEED_MAX, float(speed)))


def load_settings(path: str = SETTINGS_JSON) -> Settings:
    """
    Read overrides from a JSON object whose keys are Settings field names.
    A missing file gives the defaults; a broken one is logged and ignored.
    """
    if not os.path.exists(path):
        return Settings()
    try:
        with open(path) as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return Settings()
    if not isinstance(raw, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return Settings()

    known = {f.name for f in fields(Settings)}
    overrides = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Unknown setting %r in %s", key, path)
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning("Setting %r must be numeric, got %r", key, value)
            continue
        overrides[key] = value
    settings = replace(Settings(), **overrides)
    return settings.with_speed(settings.speed)


def save_settings(settings: Settings, path: str = SETTINGS_JSON) -> None:
    data = {f.name: getattr(settings, f.name) for f in fields(Settings)}
    try:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        logger.warning("Could not save settings to %s: %s", path, e)
