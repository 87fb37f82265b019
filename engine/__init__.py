"""
engine/
-------
Execution & recording layer.

    from engine import ExecutionController, RunHandle, Recorder, compare
"""

from engine.signals      import RunSignals
from engine.rate_limiter import RateLimiter, compute_delay
from engine.channel      import EventChannel, ChannelClosed
from engine.controller   import (
    ExecutionController,
    ExecutionState,
    RunHandle,
    RunOutcome,
    AlreadyRunning,
    UnknownAlgorithm,
)
from engine.recorder     import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "RunSignals",
    "RateLimiter",
    "compute_delay",
    "EventChannel",
    "ChannelClosed",
    "ExecutionController",
    "ExecutionState",
    "RunHandle",
    "RunOutcome",
    "AlreadyRunning",
    "UnknownAlgorithm",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
