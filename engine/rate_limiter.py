"""
rate_limiter.py — Step Pacing
==============================
Turns the operator's speed setting into a per-step delay, and performs the
actual suspension between instrumented steps.

    delay_ms = compute_delay(speed, 1, 200, 1, 500)     # 100 → 252 ms
    limiter  = RateLimiter(delay_ms, signals, poll_interval=0.05)
    limiter.pace()                                       # once per step

Speed is read once when the run starts; changing the slider mid-run does
not affect a run that is already going.
"""

import math

from algorithms.instruments import RunCancelled
from engine.signals import RunSignals


def compute_delay(
    speed: int,
    min_speed: int,
    max_speed: int,
    min_delay: int,
    max_delay: int,
) -> int:
    """
    Inverse linear map, higher speed ⇒ shorter delay (milliseconds):

        min_delay + (max_speed - speed) / (max_speed - min_speed) * (max_delay - min_delay)

    rounded half-up.  Speeds outside the range are clamped first.
    """
    if max_speed == min_speed:
        return int(min_delay)
    speed    = max(min_speed, min(max_speed, speed))
    fraction = (max_speed - speed) / (max_speed - min_speed)
    return int(math.floor(min_delay + fraction * (max_delay - min_delay) + 0.5))


class RateLimiter:
    """
    Attributes:
        delay_ms      : Fixed per-step delay for this run.
        poll_interval : Wake interval (seconds) while paused.
    """

    def __init__(self, delay_ms: int, signals: RunSignals, poll_interval: float = 0.05):
        self.delay_ms      = max(0, int(delay_ms))
        self.poll_interval = poll_interval
        self._signals      = signals

    def checkpoint(self) -> None:
        """Raise RunCancelled if Stop has been requested."""
        if self._signals.cancelled:
            raise RunCancelled()

    def wait_while_paused(self) -> None:
        if self._signals.wait_while_paused(self.poll_interval):
            raise RunCancelled()

    def pace(self) -> None:
        """
        The suspension performed after every paced event:
          1. stop requested?      → unwind
          2. paused?              → wait, re-checking stop on every wake
          3. per-step delay       → cut short only by stop
          4. stop requested?      → unwind
        """
        self.checkpoint()
        self.wait_while_paused()
        if self.delay_ms and self._signals.sleep(self.delay_ms / 1000.0):
            raise RunCancelled()
        self.checkpoint()
