"""Debouncing of rapid repeated calls."""
import threading
from typing import Any, Callable, Optional


class Debouncer:
    """Collapse rapid calls into a single delayed call.

    Each call restarts the delay; only the arguments of the last call made
    within the window are used.
    """

    def __init__(self, fn: Callable[..., Any], delay_ms: int = 300):
        """Initialize the Debouncer.

        Args:
            fn: Function to call once the delay elapses
            delay_ms: Delay in milliseconds
        """
        if delay_ms < 0:
            raise ValueError("Delay cannot be negative")
        self.fn = fn
        self.delay_ms = delay_ms
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[tuple] = None
        self._generation = 0

    def __call__(self, *args, **kwargs):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._generation += 1
            self._timer = threading.Timer(
                self.delay_ms / 1000, self._fire, args=(self._generation,)
            )
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        """True if a call is waiting to run."""
        return self._pending is not None

    def _take_pending(self, generation: Optional[int] = None) -> Optional[tuple]:
        with self._lock:
            # A superseded timer may already be running; drop its call
            if generation is not None and generation != self._generation:
                return None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            pending, self._pending = self._pending, None
            return pending

    def _fire(self, generation: int):
        pending = self._take_pending(generation)
        if pending is not None:
            args, kwargs = pending
            self.fn(*args, **kwargs)

    def flush(self) -> bool:
        """Run the pending call now, if any.

        Returns:
            True if a pending call was run
        """
        pending = self._take_pending()
        if pending is None:
            return False
        args, kwargs = pending
        self.fn(*args, **kwargs)
        return True

    def cancel(self):
        """Drop the pending call without running it."""
        self._take_pending()
