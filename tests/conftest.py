import os
import sys

import pytest

# allow running the suite from a plain checkout
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import VisualizerConfig  # noqa: E402


@pytest.fixture
def fast_config():
    """1 ms steps, 10 ms polls: runs finish quickly, Stop lands quickly."""
    return VisualizerConfig(poll_interval=0.01, event_buffer=0, stop_timeout=2.0)


@pytest.fixture
def slow_config():
    """Every step waits max_delay_ms, so a run is still going when we act on it."""
    return VisualizerConfig(
        min_delay_ms=20, max_delay_ms=20,
        poll_interval=0.01, event_buffer=0, stop_timeout=2.0,
    )
