"""
signals.py — Per-Run Control Signals
=====================================
The pause and cancel flags for ONE run, shared between the controlling
thread (UI / HTTP handlers) and the worker thread running the algorithm.

Both flags live behind a single threading.Condition:
  - setters flip the flag and notify_all(), so a waiting worker wakes
    immediately instead of at the next poll;
  - waits still carry a timeout (the poll interval) so a lost wake-up
    can delay the worker by one interval at most.

A fresh RunSignals is created for every run; nothing here is global.
"""

import threading


class RunSignals:
    def __init__(self):
        self._cond      = threading.Condition()
        self._paused    = False
        self._cancelled = False

    # ------------------------------------------------------------------
    # Controller side
    # ------------------------------------------------------------------
    def pause(self) -> None:
        with self._cond:
            self._paused = True
            self._cond.notify_all()

    def resume(self) -> None:
        with self._cond:
            self._paused = False
            self._cond.notify_all()

    def cancel(self) -> None:
        with self._cond:
            self._cancelled = True
            self._cond.notify_all()

    # ------------------------------------------------------------------
    # Worker side
    # ------------------------------------------------------------------
    @property
    def cancelled(self) -> bool:
        with self._cond:
            return self._cancelled

    @property
    def paused(self) -> bool:
        with self._cond:
            return self._paused

    def wait_while_paused(self, poll_interval: float) -> bool:
        """
        Block while paused and not cancelled, waking at least every
        `poll_interval` seconds.  Returns True if the run was cancelled.
        """
        with self._cond:
            while self._paused and not self._cancelled:
                self._cond.wait(poll_interval)
            return self._cancelled

    def sleep(self, seconds: float) -> bool:
        """
        Sleep for `seconds` unless cancelled first.  Pausing does NOT cut a
        sleep short.  Returns True if the run was cancelled.
        """
        with self._cond:
            return self._cond.wait_for(lambda: self._cancelled, timeout=seconds)
