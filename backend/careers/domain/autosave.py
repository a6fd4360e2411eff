import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Autosaver:
    """
    Debounced, coalescing save trigger.

    ``touch()`` (re)arms a timer; when it fires, ``save_fn`` runs once.
    ``save_fn`` takes no arguments and must read the latest state itself,
    so a burst of edits produces one write of the final state.

    While a save is in flight, further triggers only set a rerun flag.
    The in-flight save then runs once more and the skipped triggers are
    never replayed as duplicate writes.
    """

    def __init__(
        self,
        save_fn: Callable[[], None],
        delay: float = 1.0,
        *,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        self._save_fn = save_fn
        self._delay = delay
        self._timer_factory = timer_factory
        self._on_error = on_error

        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._timer = None
        self._generation = 0
        self._in_flight = False
        self._rerun = False

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._in_flight

    def touch(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = self._timer_factory(self._delay, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> None:
        """Cancel any pending timer and save now, after any in-flight save. Errors propagate."""
        self.cancel()
        self._run(wait=True)

    def _fire(self, generation: int) -> None:
        with self._lock:
            # superseded by a later touch() or cancel()
            if generation != self._generation:
                return
            self._timer = None
        try:
            self._run()
        except Exception as exc:
            logger.exception("Autosave failed")
            if self._on_error is not None:
                self._on_error(exc)

    def _run(self, wait: bool = False) -> None:
        with self._idle:
            if self._in_flight and not wait:
                self._rerun = True
                return
            while self._in_flight:
                self._idle.wait()
            self._in_flight = True

        try:
            while True:
                self._save_fn()
                with self._lock:
                    if not self._rerun:
                        break
                    self._rerun = False
        finally:
            with self._idle:
                self._in_flight = False
                self._rerun = False
                self._idle.notify_all()
