"""
config.py — Visualizer Configuration
=====================================
Every tunable bound the engine and the HTTP surface read lives here.

    from config import VisualizerConfig, DEFAULT_CONFIG

Defaults mirror the classic desktop visualizer:
  • array size slider       10 … 200   (default 50)
  • speed slider             1 … 200   (default 100, higher = faster)
  • per-step delay           1 … 500 ms
  • pause poll interval     50 ms

Any field can be overridden from the environment with a SORTVIZ_* variable
(see ENV_VARS), which is how the Flask app is configured in deployment.
"""

import os
from dataclasses import dataclass, asdict, fields
from typing import Dict, Any, Optional, Mapping


# ---------------------------------------------------------------------------
# Environment variable names — field → variable
# ---------------------------------------------------------------------------
ENV_VARS: Dict[str, str] = {
    "min_size":      "SORTVIZ_MIN_SIZE",
    "max_size":      "SORTVIZ_MAX_SIZE",
    "default_size":  "SORTVIZ_DEFAULT_SIZE",
    "min_speed":     "SORTVIZ_MIN_SPEED",
    "max_speed":     "SORTVIZ_MAX_SPEED",
    "default_speed": "SORTVIZ_DEFAULT_SPEED",
    "min_delay_ms":  "SORTVIZ_MIN_DELAY_MS",
    "max_delay_ms":  "SORTVIZ_MAX_DELAY_MS",
    "poll_interval": "SORTVIZ_POLL_INTERVAL",
    "event_buffer":  "SORTVIZ_EVENT_BUFFER",
    "stop_timeout":  "SORTVIZ_STOP_TIMEOUT",
}


# ---------------------------------------------------------------------------
# VisualizerConfig
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class VisualizerConfig:
    """
    Attributes:
        min_size / max_size   : Bounds for a freshly generated array.
        default_size          : Size used when the caller does not pick one.
        min_speed / max_speed : Bounds of the operator's speed setting.
        default_speed         : Speed used when the caller does not pick one.
        min_delay_ms          : Per-step delay at max_speed.
        max_delay_ms          : Per-step delay at min_speed.
        poll_interval         : Seconds between wake-ups while paused or
                                backpressured; bounds Stop latency.
        event_buffer          : Capacity of a run's event channel (0 = unbounded).
        stop_timeout          : Seconds start() waits for a STOPPING run to finish.
        value_low / value_high: Inclusive value range for random arrays.
    """

    min_size:      int   = 10
    max_size:      int   = 200
    default_size:  int   = 50
    min_speed:     int   = 1
    max_speed:     int   = 200
    default_speed: int   = 100
    min_delay_ms:  int   = 1
    max_delay_ms:  int   = 500
    poll_interval: float = 0.05
    event_buffer:  int   = 4096
    stop_timeout:  float = 1.0
    value_low:     int   = 5
    value_high:    int   = 504

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "VisualizerConfig":
        """Build a config from SORTVIZ_* variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        types   = {f.name: f.type for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for name, var in ENV_VARS.items():
            raw = environ.get(var)
            if raw is None or raw.strip() == "":
                continue
            caster = float if types[name] in (float, "float") else int
            try:
                kwargs[name] = caster(raw)
            except ValueError:
                raise ValueError(f"{var} must be a number, got {raw!r}") from None
        cfg = cls(**kwargs)
        cfg.validate()
        return cfg

    def validate(self) -> None:
        """Raise ValueError if any range is inverted or empty."""
        if not 0 <= self.min_size <= self.max_size:
            raise ValueError(f"size range {self.min_size}..{self.max_size} is invalid")
        if not self.min_speed <= self.max_speed:
            raise ValueError(f"speed range {self.min_speed}..{self.max_speed} is invalid")
        if not 0 <= self.min_delay_ms <= self.max_delay_ms:
            raise ValueError(f"delay range {self.min_delay_ms}..{self.max_delay_ms} is invalid")
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if self.event_buffer < 0:
            raise ValueError("event_buffer must be >= 0")
        if self.value_low > self.value_high:
            raise ValueError(f"value range {self.value_low}..{self.value_high} is invalid")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def clamp_speed(self, speed: int) -> int:
        return max(self.min_speed, min(self.max_speed, int(speed)))

    def clamp_size(self, size: int) -> int:
        return max(self.min_size, min(self.max_size, int(size)))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = VisualizerConfig()


__all__ = ["VisualizerConfig", "DEFAULT_CONFIG", "ENV_VARS"]
