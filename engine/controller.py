"""
controller.py — Execution Controller
=====================================
The ExecutionController is the ONLY object the UI interacts with to run a
sort.  start() launches one worker thread that drives an instrumented
algorithm; the returned RunHandle exposes pause/resume/stop and the
ordered event stream.

Run state machine (one RunHandle per run):
    start()   →  RUNNING
    RUNNING   →  pause()    →  PAUSED
    PAUSED    →  resume()   →  RUNNING
    RUNNING | PAUSED  →  stop()  →  STOPPING  →  (worker exits) →  STOPPED
    RUNNING   →  (algorithm finishes / fails) →  STOPPED

Controller state is the live run's state, or IDLE before the first run.
A STOPPED run never resumes; the next start() builds a new RunHandle.

Thread safety:
  pause / resume / stop / state may be called from any thread.  The
  worker is the sole writer of the run's ArrayState; readers use
  RunHandle.snapshot().
"""

import logging
import threading
import time
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from config import VisualizerConfig, DEFAULT_CONFIG
from arrays import ArrayState
from algorithms import AlgoInfo, resolve_algorithm
from algorithms.instruments import Instruments, RunCancelled
from algorithms.step import StepEvent
from engine.channel import EventChannel
from engine.rate_limiter import RateLimiter, compute_delay
from engine.signals import RunSignals


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States & outcomes
# ---------------------------------------------------------------------------
class ExecutionState(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    STOPPING = "stopping"
    STOPPED  = "stopped"


class RunOutcome(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED    = "failed"


LIVE_STATES = (ExecutionState.RUNNING, ExecutionState.PAUSED)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class AlreadyRunning(RuntimeError):
    """start() while a run is RUNNING or PAUSED."""


class UnknownAlgorithm(ValueError):
    """start() with a name that is not in the algorithm registry."""


# ---------------------------------------------------------------------------
# RunHandle
# ---------------------------------------------------------------------------
class RunHandle:
    """
    Attributes:
        algorithm : AlgoInfo being executed.
        array     : The run's ArrayState (a copy of the caller's list).
        speed     : Speed setting the run was started with.
        delay_ms  : Per-step delay computed from `speed` at start.
        outcome   : RunOutcome once STOPPED, else None.
        error     : The exception behind a FAILED outcome.
    """

    def __init__(
        self,
        algorithm: AlgoInfo,
        values: Sequence[int],
        speed: int,
        delay_ms: int,
        config: VisualizerConfig,
    ):
        self.algorithm = algorithm
        self.array     = ArrayState(values)
        self.speed     = speed
        self.delay_ms  = delay_ms
        self.outcome:  Optional[RunOutcome]   = None
        self.error:    Optional[BaseException] = None

        self._config   = config
        self._signals  = RunSignals()
        self._channel  = EventChannel(config.event_buffer, config.poll_interval)
        self._limiter  = RateLimiter(delay_ms, self._signals, config.poll_interval)
        self._lock     = threading.Lock()
        self._state    = ExecutionState.RUNNING
        self._thread:  Optional[threading.Thread] = None
        self._done     = threading.Event()
        self._emitted  = 0
        self._started_at  = 0.0
        self._finished_at = 0.0
        self._ops      = Instruments(
            self.array,
            emit=self._emit,
            pace=self._limiter.pace,
            checkpoint=self._limiter.checkpoint,
        )

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def pause(self) -> bool:
        """RUNNING → PAUSED.  Returns True if the state changed."""
        with self._lock:
            if self._state != ExecutionState.RUNNING:
                return False
            self._state = ExecutionState.PAUSED
            self._signals.pause()
        logger.debug("run %s paused", self.algorithm.key)
        return True

    def resume(self) -> bool:
        """PAUSED → RUNNING.  Returns True if the state changed."""
        with self._lock:
            if self._state != ExecutionState.PAUSED:
                return False
            self._state = ExecutionState.RUNNING
            self._signals.resume()
        logger.debug("run %s resumed", self.algorithm.key)
        return True

    def stop(self) -> bool:
        """
        Request cancellation.  Legal in any state and idempotent; the worker
        notices within one poll interval.  Returns True on the first call
        that moved a live run to STOPPING.
        """
        with self._lock:
            self._signals.cancel()
            if self._state not in LIVE_STATES:
                return False
            self._state = ExecutionState.STOPPING
        logger.debug("run %s stopping", self.algorithm.key)
        return True

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    @property
    def state(self) -> ExecutionState:
        with self._lock:
            return self._state

    @property
    def is_live(self) -> bool:
        return self.state in LIVE_STATES

    @property
    def events_emitted(self) -> int:
        return self._emitted

    @property
    def counts(self) -> Dict[str, int]:
        return {
            "comparisons": self._ops.comparisons,
            "swaps":       self._ops.swaps,
            "overwrites":  self._ops.overwrites,
        }

    def events(self) -> Iterator[StepEvent]:
        """
        Lazy, ordered, finite stream of this run's events.  Ends once the
        run is STOPPED, whatever the outcome.  Single consumer.
        """
        return iter(self._channel)

    def snapshot(self) -> List[int]:
        return self.array.snapshot()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the run to finish.  Returns True if it has."""
        return self._done.wait(timeout)

    def to_dict(self) -> Dict[str, Any]:
        elapsed = (self._finished_at or time.monotonic()) - self._started_at if self._started_at else 0.0
        return {
            "algorithm":      self.algorithm.key,
            "label":          self.algorithm.label,
            "state":          self.state.value,
            "outcome":        self.outcome.value if self.outcome else None,
            "error":          repr(self.error) if self.error else None,
            "speed":          self.speed,
            "delay_ms":       self.delay_ms,
            "length":         self.array.length,
            "max_value":      self.array.max_value,
            "events_emitted": self._emitted,
            "elapsed_ms":     round(elapsed * 1000, 2),
            **self.counts,
        }

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------
    def _launch(self) -> None:
        self._started_at = time.monotonic()
        if self.array.length < 2:
            # nothing to compare: sorted by definition, zero events
            self._finish(RunOutcome.COMPLETED)
            return
        self._thread = threading.Thread(
            target=self._run,
            name=f"sort-{self.algorithm.key}",
            daemon=True,
        )
        self._thread.start()

    def _run(self) -> None:
        outcome = RunOutcome.COMPLETED
        try:
            self.algorithm.fn(self._ops)
        except RunCancelled:
            outcome = RunOutcome.CANCELLED
        except Exception as exc:
            logger.exception("run %s failed", self.algorithm.key)
            self.error = exc
            outcome    = RunOutcome.FAILED
        finally:
            self._finish(outcome)

    def _emit(self, event: StepEvent) -> None:
        self._channel.put(event, self._signals)
        self._emitted += 1

    def _finish(self, outcome: RunOutcome) -> None:
        with self._lock:
            self.outcome = outcome
            self._state  = ExecutionState.STOPPED
        self._finished_at = time.monotonic()
        self._channel.close()
        self._done.set()
        logger.info(
            "run %s finished: outcome=%s events=%d elapsed=%.1fms",
            self.algorithm.key, outcome.value, self._emitted,
            (self._finished_at - self._started_at) * 1000,
        )

    def __repr__(self) -> str:
        return f"RunHandle({self.algorithm.key!r}, state={self.state.value}, length={self.array.length})"


# ---------------------------------------------------------------------------
# ExecutionController
# ---------------------------------------------------------------------------
class ExecutionController:
    """
    Owns at most one live run.

    Attributes:
        config  : Bounds for speed/delay and engine timing.
        current : The most recent RunHandle (live or STOPPED), or None.
    """

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config  = config or DEFAULT_CONFIG
        self.current: Optional[RunHandle] = None
        self._lock   = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        algorithm: Union[str, AlgoInfo],
        array: Sequence[int],
        speed: Optional[int] = None,
    ) -> RunHandle:
        """
        Launch `algorithm` over a copy of `array`.

        Raises:
            AlreadyRunning   : a run is RUNNING or PAUSED (or still STOPPING
                               after config.stop_timeout).
            UnknownAlgorithm : `algorithm` is not a registered name.
        """
        info = algorithm if isinstance(algorithm, AlgoInfo) else resolve_algorithm(algorithm)
        if info is None:
            raise UnknownAlgorithm(f"Unknown algorithm: {algorithm}")

        cfg = self.config
        if speed is None:
            speed = cfg.default_speed
        clamped = cfg.clamp_speed(speed)
        if clamped != speed:
            logger.warning("speed %s outside %d..%d, using %d", speed, cfg.min_speed, cfg.max_speed, clamped)

        with self._lock:
            previous = self.current
            if previous is not None:
                if previous.is_live:
                    raise AlreadyRunning(f"a {previous.algorithm.label} run is {previous.state.value}")
                if previous.state == ExecutionState.STOPPING and not previous.join(cfg.stop_timeout):
                    raise AlreadyRunning(f"a {previous.algorithm.label} run is still stopping")

            delay  = compute_delay(clamped, cfg.min_speed, cfg.max_speed, cfg.min_delay_ms, cfg.max_delay_ms)
            handle = RunHandle(info, array, clamped, delay, cfg)
            self.current = handle
            logger.info(
                "starting %s: size=%d speed=%d delay=%dms",
                info.key, handle.array.length, clamped, delay,
            )
            handle._launch()
        return handle

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Stop the live run (if any) and wait for its worker to exit."""
        handle = self.current
        if handle is None:
            return
        handle.stop()
        handle.join(self.config.stop_timeout if timeout is None else timeout)

    # ------------------------------------------------------------------
    # Controls — forwarded to the live run, no-ops without one
    # ------------------------------------------------------------------
    def pause(self) -> bool:
        return self.current.pause() if self.current else False

    def resume(self) -> bool:
        return self.current.resume() if self.current else False

    def stop(self) -> bool:
        return self.current.stop() if self.current else False

    @property
    def state(self) -> ExecutionState:
        return self.current.state if self.current else ExecutionState.IDLE

    @property
    def is_running(self) -> bool:
        return self.current is not None and self.current.is_live
