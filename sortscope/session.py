import logging
import threading
from enum import Enum

from sortscope.dataset import Dataset
from sortscope.engines import ApplicabilityError, check_applicable, display_name, get_generator
from sortscope.events import StepKind, step
from sortscope.playback import PlaybackController
from sortscope.settings import Settings

logger = logging.getLogger(__name__)


class Outcome(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def drive(gen, controller, on_step=None):
    """
    Pull steps out of an engine generator, hand each one to `on_step` and
    suspend after it. Returns (Outcome, completion status or None).

    On cancellation the generator is closed where it stands; nothing after
    the last suspension point runs and no completion is announced.
    """
    while True:
        try:
            event = next(gen)
        except StopIteration as stop:
            return Outcome.COMPLETED, stop.value

        controller.announce(event.status)
        if on_step is not None:
            on_step(event)
        logger.debug("%s: %s", event.kind.value, event.status)

        ok = controller.suspend() if event.hold else controller.running
        if not ok:
            gen.close()
            return Outcome.CANCELLED, None


class Run:
    """Handle for one engine run; owns the worker thread when there is one."""

    def __init__(self, key, dataset):
        self.key = key
        self.dataset = dataset
        self.thread = None
        self.outcome = None
        self.error = None
        self.done = threading.Event()

    @property
    def active(self) -> bool:
        return not self.done.is_set()

    def join(self, timeout=None) -> bool:
        return self.done.wait(timeout)

    def __repr__(self):
        return f"Run({self.key!r}, outcome={self.outcome})"


class Session:
    """
    Entry point for a front-end: load an array, start / pause / cancel a
    run, and receive StepEvents and status text through callbacks.

    Only one run is active at a time. Loading a dataset or starting another
    run cancels the active one and waits for its thread to exit first.
    """

    def __init__(self, settings: Settings = None, on_step=None, on_status=None,
                 get_speed=None):
        self.settings = settings or Settings()
        self.on_step = on_step
        self.controller = PlaybackController(self.settings.step_delay, self.settings.speed,
                                             get_speed=get_speed, on_status=on_status)
        self.dataset = None
        self.run_handle = None

    # ---------------- collaborator interface ----------------

    def load_dataset(self, values) -> Dataset:
        dataset = values if isinstance(values, Dataset) else Dataset(values)
        self.cancel_run()
        self.dataset = dataset
        logger.info("Loaded %d values (max %g)", len(dataset), dataset.context.max_value)
        self.controller.announce('Array loaded. Select an algorithm and press "Start".')
        return dataset

    def start_run(self, key) -> Run:
        """
        Start `key` on a worker thread. Raises ApplicabilityError before
        anything changes when the algorithm does not fit the data.
        """
        run = self._prepare(key)
        run.thread = threading.Thread(target=self._execute, args=(run,),
                                      name=f"sortscope-{key}", daemon=True)
        run.thread.start()
        return run

    def run(self, key) -> Outcome:
        """Like start_run, but drives the run on the calling thread."""
        run = self._prepare(key)
        self._execute(run)
        return run.outcome

    def toggle_pause(self) -> bool:
        return self.controller.toggle_pause()

    def cancel_run(self):
        run = self.run_handle
        self.controller.cancel()
        if run is None or run.thread is None:
            return
        if run.thread is not threading.current_thread():
            run.thread.join()

    # ---------------- internals ----------------

    def _prepare(self, key) -> Run:
        if self.dataset is None:
            raise RuntimeError("No dataset loaded")
        try:
            check_applicable(key, self.dataset.context, self.settings)
        except ApplicabilityError as e:
            logger.warning("Refusing %s: %s", key, e.reason)
            raise
        self.cancel_run()
        run = Run(key, self.dataset)
        self.run_handle = run
        self.controller.start()
        logger.info("Starting %s on %d values", display_name(key), len(self.dataset))
        return run

    def _execute(self, run):
        gen = get_generator(run.key, run.dataset, self.settings,
                            running=lambda: self.controller.running)
        try:
            run.outcome, status = drive(gen, self.controller, self.on_step)
            if run.outcome is Outcome.COMPLETED and not self.controller.running:
                # cancelled after the last step but before we got here
                run.outcome = Outcome.CANCELLED
            if run.outcome is Outcome.COMPLETED:
                self.controller.finish()
                event = step(StepKind.COMPLETE, status, run.dataset.values, hold=False)
                self.controller.announce(event.status)
                if self.on_step is not None:
                    self.on_step(event)
            logger.info("%s %s", display_name(run.key), run.outcome.value)
        except Exception as e:
            run.error = e
            self.controller.finish()
            logger.exception("Run %s failed", run.key)
            raise
        finally:
            run.done.set()
