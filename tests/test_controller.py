"""
Execution controller tests: lifecycle, pause/resume, cancellation,
backpressure and failure handling against real worker threads.
"""

import threading
import time

import pytest

from config import VisualizerConfig
from algorithms import AlgoInfo, apply_event
from engine import (
    ExecutionController,
    ExecutionState,
    RunOutcome,
    AlreadyRunning,
    UnknownAlgorithm,
    Recorder,
)


REVERSED = list(range(30, 0, -1))


def recorded(algo, values):
    rec = Recorder()
    rec.record(algo, values)
    return rec.events


def fold(values, events):
    folded = list(values)
    for event in events:
        apply_event(folded, event)
    return folded


# ---------------------------------------------------------------------------
# Normal completion
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("algo", ["bubble", "selection", "insertion", "merge", "quick", "heap"])
def test_run_completes_sorted(fast_config, algo):
    ctl    = ExecutionController(fast_config)
    values = [5, 3, 8, 1, 9, 2, 7]
    handle = ctl.start(algo, values, speed=fast_config.max_speed)

    events = list(handle.events())

    assert handle.join(2.0)
    assert handle.outcome == RunOutcome.COMPLETED
    assert handle.state == ExecutionState.STOPPED
    assert ctl.state == ExecutionState.STOPPED
    assert handle.snapshot() == sorted(values)
    assert events == recorded(algo, values)
    assert handle.events_emitted == len(events)


def test_event_sequence_independent_of_speed():
    cfg = VisualizerConfig(min_delay_ms=0, max_delay_ms=5, poll_interval=0.01, event_buffer=0)
    values = [4, 8, 1, 6, 2, 7, 3, 5]
    sequences = []
    for speed in (cfg.min_speed, cfg.max_speed):
        ctl    = ExecutionController(cfg)
        handle = ctl.start("quick", values, speed=speed)
        sequences.append(list(handle.events()))
        assert handle.join(2.0)
    assert sequences[0] == sequences[1]


def test_caller_array_is_copied(fast_config):
    ctl    = ExecutionController(fast_config)
    values = [3, 2, 1]
    handle = ctl.start("bubble", values, speed=200)
    list(handle.events())
    assert values == [3, 2, 1]
    assert handle.snapshot() == [1, 2, 3]


def test_speed_is_clamped_and_delay_fixed_at_start(fast_config):
    ctl    = ExecutionController(fast_config)
    handle = ctl.start("bubble", [2, 1], speed=10_000)
    list(handle.events())
    assert handle.speed == fast_config.max_speed
    assert handle.delay_ms == fast_config.min_delay_ms


@pytest.mark.parametrize("values", [[], [11]])
def test_degenerate_input_completes_immediately(fast_config, values):
    ctl    = ExecutionController(fast_config)
    handle = ctl.start("merge", values)
    assert handle.state == ExecutionState.STOPPED
    assert handle.outcome == RunOutcome.COMPLETED
    assert list(handle.events()) == []
    assert handle.snapshot() == values


# ---------------------------------------------------------------------------
# Start rules
# ---------------------------------------------------------------------------
def test_idle_before_first_run(fast_config):
    ctl = ExecutionController(fast_config)
    assert ctl.state == ExecutionState.IDLE
    assert ctl.current is None
    assert ctl.pause() is False
    assert ctl.resume() is False
    assert ctl.stop() is False
    assert ctl.state == ExecutionState.IDLE


def test_start_rejected_while_running(slow_config):
    ctl    = ExecutionController(slow_config)
    handle = ctl.start("bubble", REVERSED)
    try:
        with pytest.raises(AlreadyRunning):
            ctl.start("heap", [2, 1])
        assert ctl.current is handle
        assert handle.state == ExecutionState.RUNNING
    finally:
        handle.stop()
        assert handle.join(1.0)


def test_start_rejected_while_paused(slow_config):
    ctl    = ExecutionController(slow_config)
    handle = ctl.start("bubble", REVERSED)
    try:
        assert ctl.pause()
        with pytest.raises(AlreadyRunning):
            ctl.start("bubble", [2, 1])
    finally:
        ctl.stop()
        assert handle.join(1.0)


def test_restart_after_stop(slow_config):
    ctl   = ExecutionController(slow_config)
    first = ctl.start("bubble", REVERSED)
    ctl.stop()
    assert first.join(1.0)

    second = ctl.start("selection", [3, 1, 2], speed=slow_config.max_speed)
    assert second is not first
    assert ctl.current is second
    list(second.events())
    assert second.join(1.0)
    assert second.outcome == RunOutcome.COMPLETED
    assert first.state == ExecutionState.STOPPED


def test_start_waits_out_a_stopping_run(slow_config):
    ctl   = ExecutionController(slow_config)
    first = ctl.start("bubble", REVERSED)
    first.stop()
    # may still be STOPPING here; start() gives it stop_timeout to finish
    second = ctl.start("bubble", [2, 1])
    assert first.state == ExecutionState.STOPPED
    list(second.events())
    assert second.join(1.0)


def test_unknown_algorithm(fast_config):
    ctl = ExecutionController(fast_config)
    with pytest.raises(UnknownAlgorithm):
        ctl.start("bogo", [2, 1])
    with pytest.raises(ValueError):
        ctl.start("bogo", [2, 1])
    assert ctl.state == ExecutionState.IDLE


def test_start_by_label(fast_config):
    ctl    = ExecutionController(fast_config)
    handle = ctl.start("Insertion Sort", [2, 1], speed=200)
    list(handle.events())
    assert handle.algorithm.key == "insertion"


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------
def test_stop_is_prompt_and_leaves_partial_state(slow_config):
    ctl    = ExecutionController(slow_config)
    handle = ctl.start("bubble", REVERSED)
    time.sleep(0.15)

    t0 = time.monotonic()
    assert handle.stop()
    assert handle.join(1.0)
    elapsed = time.monotonic() - t0

    assert elapsed < 2 * slow_config.poll_interval + slow_config.max_delay_ms / 1000.0 + 0.1
    assert handle.outcome == RunOutcome.CANCELLED
    assert handle.state == ExecutionState.STOPPED

    delivered = list(handle.events())
    full      = recorded("bubble", REVERSED)
    assert 0 < len(delivered) < len(full)
    assert delivered == full[:len(delivered)]
    # no rollback, nothing applied past the last delivered event
    assert handle.snapshot() == fold(REVERSED, delivered)


def test_no_events_after_stop(slow_config):
    ctl    = ExecutionController(slow_config)
    handle = ctl.start("heap", REVERSED)
    time.sleep(0.1)
    handle.stop()
    assert handle.join(1.0)
    count = handle.events_emitted
    time.sleep(0.1)
    assert handle.events_emitted == count
    assert len(list(handle.events())) == count


def test_stop_is_idempotent(slow_config):
    ctl    = ExecutionController(slow_config)
    handle = ctl.start("bubble", REVERSED)
    assert handle.stop() is True
    assert handle.stop() is False
    assert handle.join(1.0)
    assert handle.stop() is False
    assert handle.state == ExecutionState.STOPPED


def test_stop_from_another_thread(slow_config):
    ctl    = ExecutionController(slow_config)
    handle = ctl.start("merge", REVERSED)
    stopper = threading.Thread(target=ctl.stop)
    time.sleep(0.05)
    stopper.start()
    stopper.join(1.0)
    assert handle.join(1.0)
    assert handle.outcome == RunOutcome.CANCELLED


def test_stop_under_backpressure():
    cfg    = VisualizerConfig(min_delay_ms=0, max_delay_ms=0, poll_interval=0.01, event_buffer=2)
    ctl    = ExecutionController(cfg)
    values = list(range(20, 0, -1))
    handle = ctl.start("bubble", values)

    time.sleep(0.1)
    # nobody is reading: the worker is parked on a full channel
    assert handle.state == ExecutionState.RUNNING
    assert handle.events_emitted == 2

    handle.stop()
    assert handle.join(0.5)
    assert handle.outcome == RunOutcome.CANCELLED

    delivered = list(handle.events())
    assert len(delivered) == 2
    assert handle.snapshot() == fold(values, delivered)


# ---------------------------------------------------------------------------
# Pause / resume
# ---------------------------------------------------------------------------
def test_pause_holds_and_resume_is_transparent(slow_config):
    ctl    = ExecutionController(slow_config)
    values = [9, 4, 7, 1, 8, 2, 6, 3, 5]
    handle = ctl.start("insertion", values)
    time.sleep(0.1)

    assert handle.pause()
    assert handle.state == ExecutionState.PAUSED
    time.sleep(0.05)        # let a committed delay finish
    before = handle.events_emitted
    time.sleep(0.2)
    assert handle.events_emitted == before

    assert handle.resume()
    assert handle.state == ExecutionState.RUNNING
    events = list(handle.events())
    assert handle.join(2.0)

    assert handle.outcome == RunOutcome.COMPLETED
    assert handle.snapshot() == sorted(values)
    assert events == recorded("insertion", values)


def test_pause_and_resume_are_noops_in_wrong_state(slow_config):
    ctl    = ExecutionController(slow_config)
    handle = ctl.start("bubble", REVERSED)
    try:
        assert handle.resume() is False
        assert handle.pause() is True
        assert handle.pause() is False
        assert handle.resume() is True
    finally:
        handle.stop()
        assert handle.join(1.0)
    assert handle.pause() is False
    assert handle.resume() is False


def test_stop_while_paused_without_resume(slow_config):
    ctl    = ExecutionController(slow_config)
    handle = ctl.start("quick", REVERSED)
    time.sleep(0.05)
    handle.pause()
    time.sleep(0.1)

    t0 = time.monotonic()
    handle.stop()
    assert handle.join(1.0)
    assert time.monotonic() - t0 < 2 * slow_config.poll_interval + 0.1
    assert handle.outcome == RunOutcome.CANCELLED


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------
def test_internal_error_fails_the_run(fast_config):
    def broken(ops):
        ops.compare(0, 1)
        raise RuntimeError("boom")

    info   = AlgoInfo(key="broken", label="Broken Sort", short_label="Broken", fn=broken, pseudocode=[])
    ctl    = ExecutionController(fast_config)
    handle = ctl.start(info, [2, 1])

    events = list(handle.events())
    assert handle.join(1.0)
    assert [str(e) for e in events] == ["Compare(0,1)"]
    assert handle.outcome == RunOutcome.FAILED
    assert isinstance(handle.error, RuntimeError)
    assert handle.state == ExecutionState.STOPPED
    assert handle.snapshot() == [2, 1]
    # the controller accepts a new run afterwards
    ctl.start("bubble", [2, 1])


def test_status_dict(fast_config):
    ctl    = ExecutionController(fast_config)
    handle = ctl.start("bubble", [5, 3, 8, 1], speed=200)
    list(handle.events())
    handle.join(1.0)
    status = handle.to_dict()
    assert status["algorithm"] == "bubble"
    assert status["state"] == "stopped"
    assert status["outcome"] == "completed"
    assert status["events_emitted"] == 14
    assert status["comparisons"] == 6
    assert status["swaps"] == 4
    assert status["max_value"] == 8


def test_shutdown_stops_live_run(slow_config):
    ctl    = ExecutionController(slow_config)
    handle = ctl.start("bubble", REVERSED)
    ctl.shutdown()
    assert handle.state == ExecutionState.STOPPED
    assert handle.outcome == RunOutcome.CANCELLED
