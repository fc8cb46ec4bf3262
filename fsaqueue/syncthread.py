"""Synchronisation state shared between the archiving threads."""

from __future__ import annotations

import signal
import threading

DEFAULT_MAX_FILESYSTEMS = 128

_ABORT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class AtomicCounter:
    """An integer counter that is safe to change from several threads."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def increment(self) -> int:
        """Add one and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    def decrement(self) -> int:
        """Subtract one and return the new value."""
        with self._lock:
            self._value -= 1
            return self._value

    @property
    def value(self) -> int:
        """Current value."""
        with self._lock:
            return self._value


class SyncState:
    """Flags and counters by which the reader, worker and writer threads coordinate.

    ``fsbitmap[n]`` is 1 when filesystem ``n`` is wanted and 0 when it is skipped.
    """

    def __init__(self, max_filesystems: int = DEFAULT_MAX_FILESYSTEMS) -> None:
        if max_filesystems < 0:
            raise ValueError("max_filesystems must not be negative")
        self.fsbitmap = bytearray(max_filesystems)
        self._stop_fill_queue = threading.Event()
        self._aborted = threading.Event()
        self._secthreads = AtomicCounter()

    def set_stop_fill_queue(self) -> None:
        """Tell the thread filling the queue that it must stop."""
        self._stop_fill_queue.set()

    @property
    def stop_fill_queue(self) -> bool:
        """True once the queue consumers asked the producer to stop."""
        return self._stop_fill_queue.is_set()

    def inc_secthreads(self) -> int:
        """Record that a secondary thread started."""
        return self._secthreads.increment()

    def dec_secthreads(self) -> int:
        """Record that a secondary thread finished."""
        return self._secthreads.decrement()

    @property
    def secthreads(self) -> int:
        """Number of secondary threads currently running."""
        return self._secthreads.value

    def abort(self) -> None:
        """Mark the operation as aborted."""
        self._aborted.set()

    @property
    def aborted(self) -> bool:
        """True if aborted, or if SIGINT or SIGTERM is pending for this process."""
        if self._aborted.is_set():
            return True
        sigpending = getattr(signal, "sigpending", None)
        if sigpending is None:
            return False
        try:
            pending = sigpending()
        except OSError:
            return False
        if any(sig in pending for sig in _ABORT_SIGNALS):
            self._aborted.set()
            return True
        return False

    @property
    def interrupted(self) -> bool:
        """True if aborted or if the queue producer was told to stop."""
        return self.aborted or self.stop_fill_queue