import logging
import threading
from dataclasses import dataclass

from sortscope.settings import DEFAULT_SPEED, PAUSED_MARKER, STEP_DELAY, clamp_speed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackState:
    running: bool
    paused: bool
    speed: float


class PlaybackController:
    """
    Pause / resume / cancel state shared by one session and the engine run
    it drives.

    The engine thread calls suspend() after every step. Any other thread may
    call pause(), resume(), toggle_pause() or cancel(); they only flip flags
    under the condition and wake the suspended caller.
    """

    def __init__(self, step_delay: float = STEP_DELAY, speed: float = DEFAULT_SPEED,
                 get_speed=None, on_status=None):
        self.step_delay = step_delay
        self.get_speed  = get_speed
        self.on_status  = on_status
        self.status     = ""
        self._speed     = clamp_speed(speed)
        self._running   = False
        self._paused    = False
        self._cond      = threading.Condition()

    # ---------------- state ----------------

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def speed(self) -> float:
        if self.get_speed is not None:
            return clamp_speed(self.get_speed())
        return self._speed

    @speed.setter
    def speed(self, value: float):
        self._speed = clamp_speed(value)

    def state(self) -> PlaybackState:
        with self._cond:
            return PlaybackState(self._running, self._paused, self.speed)

    def delay(self) -> float:
        return self.step_delay / self.speed

    # ---------------- transitions ----------------

    def start(self):
        with self._cond:
            self._running = True
            self._paused  = False

    def finish(self):
        """Natural completion: back to idle without waking anyone."""
        with self._cond:
            self._running = False
            self._paused  = False

    def cancel(self):
        with self._cond:
            if self._running:
                logger.debug("Cancelling run (paused=%s)", self._paused)
            self._running = False
            self._paused  = False
            self._cond.notify_all()

    def pause(self):
        with self._cond:
            if self._running:
                self._paused = True

    def resume(self):
        with self._cond:
            self._paused = False
            self._cond.notify_all()

    def toggle_pause(self) -> bool:
        """Flip the paused flag; returns the new value."""
        with self._cond:
            if self._paused:
                self._paused = False
                self._cond.notify_all()
            elif self._running:
                self._paused = True
            return self._paused

    # ---------------- engine side ----------------

    def announce(self, status: str):
        self.status = status
        self._emit(status)

    def _emit(self, text: str):
        if self.on_status is not None:
            self.on_status(text)

    def suspend(self) -> bool:
        """
        Called by the engine after each step. Blocks while paused, then
        waits out the step delay. Returns False when the run was cancelled
        and the caller must stop without touching anything else.
        """
        with self._cond:
            if self._paused and self._running:
                held = self.status
                self._emit(held + PAUSED_MARKER)
                self._cond.wait_for(lambda: not self._paused or not self._running)
                if self._running:
                    self._emit(held)
            if not self._running:
                return False
            delay = self.delay()
            if delay > 0:
                # cancel() cuts the delay short
                self._cond.wait_for(lambda: not self._running, timeout=delay)
            return self._running
