"""
Cooperative cancellation: an interrupt from the user asks the producer of the event
stream to stop, so we can still summarize what we have got.
"""

import signal
import threading
from types import FrameType
from typing import Callable

from testsieve.reporting import info, trace


class CancellationToken:
    """
    A one-shot flag. Cancelling it runs the registered callbacks once; cancelling it
    again does nothing.
    """
    def __init__(self) -> None:
        self._cancelled = threading.Event()
        self._callbacks : list[Callable[[], None]] = []
        self._lock = threading.RLock() # the signal handler may cancel while on_cancel holds it


    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()


    def on_cancel(self, callback: Callable[[], None]) -> None:
        """
        Register callback to be run when cancelled. If already cancelled, run it right away.
        """
        with self._lock:
            self._callbacks.append(callback)
        if self._cancelled.is_set():
            self._run_callbacks()


    def cancel(self) -> None:
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
        self._run_callbacks()


    def _run_callbacks(self) -> None:
        # the list is emptied in place: a registration interrupted by cancel() still lands in it
        with self._lock:
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        for callback in callbacks:
            callback()


class InterruptWatcher:
    """
    Context manager that turns SIGINT into cancelling token for as long as it is active.
    The previous handler is restored on exit, however the block is left.

    Signal handlers can only be installed from the main thread; elsewhere this does nothing.
    """
    def __init__(self, token: CancellationToken, signum: int = signal.SIGINT):
        self.token = token
        self.signum = signum
        self._old_handler : Callable[[int, FrameType | None], object] | int | None = None
        self._installed = False


    def _handle(self, signum: int, frame: FrameType | None) -> None:
        if not self.token.is_cancelled:
            info('Interrupted, stopping the test run.')
        self.token.cancel()


    def __enter__(self) -> 'InterruptWatcher':
        if threading.current_thread() is threading.main_thread():
            self._old_handler = signal.signal(self.signum, self._handle)
            self._installed = True
            trace('Installed interrupt handler')
        return self


    def __exit__(self, *exc_info) -> None:
        if self._installed:
            signal.signal(self.signum, self._old_handler if self._old_handler is not None else signal.SIG_DFL)
            self._installed = False
            trace('Restored interrupt handler')
