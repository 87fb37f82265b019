"""
main.py — Sorting Visualizer Flask App
========================================
A thin HTTP surface over one ExecutionController.  Rendering bars is the
client's job; the server only runs algorithms and streams their events.

Routes:
  GET  /api/algorithms          – registry listing (labels, pseudocode, …)
  GET  /api/config              – active size / speed / delay bounds
  POST /api/array/generate      – generate a new random array
  POST /api/run                 – start a run (409 while one is live)
  POST /api/pause               – pause the live run
  POST /api/resume              – resume the live run
  POST /api/stop                – stop the live run
  GET  /api/state               – run status + array snapshot (for polling)
  GET  /api/events              – Server-Sent Events stream of StepEvents
  POST /api/compare             – record two algorithms on one array, compare

State management:
  One controller and one "current array" per process, stored on the app.
  Multi-session use is out of scope; concurrent clients share the run.
"""

import atexit
import json
import logging
import threading
from typing import Any, Dict, List, Optional

from flask import Flask, Response, jsonify, request, current_app

from config import VisualizerConfig
from arrays import generate_random_array
from algorithms import list_algorithms, resolve_algorithm
from engine import (
    ExecutionController,
    AlreadyRunning,
    UnknownAlgorithm,
    Recorder,
    compare,
)


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Per-app state
# ---------------------------------------------------------------------------
class VisualizerState:
    """The controller plus the array the next run will sort."""

    def __init__(self, config: VisualizerConfig):
        self.config     = config
        self.controller = ExecutionController(config)
        self.lock       = threading.Lock()
        self.array: List[int] = generate_random_array(
            config.default_size, config.value_low, config.value_high,
        )


def get_state() -> VisualizerState:
    return current_app.extensions["sortviz"]


def _payload() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def _parse_int_list(raw: Any) -> Optional[List[int]]:
    if not isinstance(raw, list):
        return None
    try:
        return [int(v) for v in raw]
    except (TypeError, ValueError):
        return None


def _request_array(st: VisualizerState, data: Dict[str, Any]) -> List[int]:
    """The payload's "array" if given, else a copy of the pending one.

    Raises ValueError for a malformed or oversized array.
    """
    if "array" not in data:
        with st.lock:
            return list(st.array)
    values = _parse_int_list(data["array"])
    if values is None:
        raise ValueError("array must be a list of integers")
    if len(values) > st.config.max_size:
        raise ValueError(f"array may hold at most {st.config.max_size} values")
    return values


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[VisualizerConfig] = None) -> Flask:
    app = Flask(__name__)
    cfg = config or VisualizerConfig.from_env()
    cfg.validate()
    state = VisualizerState(cfg)
    app.extensions["sortviz"] = state
    atexit.register(state.controller.shutdown)

    # -----------------------------------------------------------------------
    # API: Registry & config
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})

    @app.route("/api/config")
    def api_config():
        return jsonify(get_state().config.to_dict())

    # -----------------------------------------------------------------------
    # API: Array
    # -----------------------------------------------------------------------
    @app.route("/api/array/generate", methods=["POST"])
    def api_array_generate():
        st   = get_state()
        data = _payload()
        if st.controller.is_running:
            return jsonify({"error": "Cannot generate while a run is active"}), 409

        try:
            size = st.config.clamp_size(data.get("size", st.config.default_size))
        except (TypeError, ValueError):
            return jsonify({"error": "size must be an integer"}), 400

        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            return jsonify({"error": "seed must be an integer"}), 400

        with st.lock:
            st.array = generate_random_array(size, st.config.value_low, st.config.value_high, seed=seed)
            values = list(st.array)
        return jsonify({"array": values, "size": len(values), "max_value": max(values, default=0)})

    # -----------------------------------------------------------------------
    # API: Run controls
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        st   = get_state()
        data = _payload()

        name = data.get("algorithm", "bubble")
        try:
            values = _request_array(st, data)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        try:
            speed  = int(data.get("speed", st.config.default_speed))
        except (TypeError, ValueError):
            return jsonify({"error": "speed must be an integer"}), 400

        try:
            handle = st.controller.start(name, values, speed)
        except UnknownAlgorithm as e:
            return jsonify({"error": str(e)}), 400
        except AlreadyRunning as e:
            logger.info("rejected run of %s: %s", name, e)
            return jsonify({"error": str(e)}), 409

        # a rejected start leaves the pending array untouched
        with st.lock:
            st.array = values
        return jsonify(handle.to_dict())

    @app.route("/api/pause", methods=["POST"])
    def api_pause():
        ctl = get_state().controller
        return jsonify({"changed": ctl.pause(), "state": ctl.state.value})

    @app.route("/api/resume", methods=["POST"])
    def api_resume():
        ctl = get_state().controller
        return jsonify({"changed": ctl.resume(), "state": ctl.state.value})

    @app.route("/api/stop", methods=["POST"])
    def api_stop():
        ctl = get_state().controller
        return jsonify({"changed": ctl.stop(), "state": ctl.state.value})

    # -----------------------------------------------------------------------
    # API: Observation
    # -----------------------------------------------------------------------
    @app.route("/api/state")
    def api_state():
        st     = get_state()
        handle = st.controller.current
        with st.lock:
            pending = list(st.array)
        return jsonify({
            "state": st.controller.state.value,
            "run":   handle.to_dict() if handle else None,
            "array": handle.snapshot() if handle else pending,
        })

    @app.route("/api/events")
    def api_events():
        handle = get_state().controller.current
        if handle is None:
            return jsonify({"error": "No run has been started"}), 404

        def stream():
            for event in handle.events():
                yield f"data: {json.dumps(event.to_dict())}\n\n"
            handle.join()
            end = {"outcome": handle.outcome.value if handle.outcome else None}
            yield f"event: end\ndata: {json.dumps(end)}\n\n"

        return Response(stream(), mimetype="text/event-stream", headers={"Cache-Control": "no-cache"})

    # -----------------------------------------------------------------------
    # API: Comparison mode
    # -----------------------------------------------------------------------
    @app.route("/api/compare", methods=["POST"])
    def api_compare():
        st   = get_state()
        data = _payload()

        left_info  = resolve_algorithm(data.get("left", ""))
        right_info = resolve_algorithm(data.get("right", ""))
        if left_info is None or right_info is None:
            return jsonify({"error": "Unknown algorithm"}), 400

        try:
            values = _request_array(st, data)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        left, right = Recorder(), Recorder()
        left.record(left_info, values)
        right.record(right_info, values)
        return jsonify(compare(left, right).to_dict())

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("=" * 60)
    print("  Sorting Algorithm Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000/api/algorithms")
    print("=" * 60)
    create_app().run(debug=False, host="0.0.0.0", port=5000, threaded=True)
