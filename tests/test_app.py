"""
HTTP surface tests via the Flask test client.
"""

import json

import pytest

from main import create_app


@pytest.fixture
def app(fast_config):
    app = create_app(fast_config)
    yield app
    app.extensions["sortviz"].controller.shutdown()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def slow_app(slow_config):
    app = create_app(slow_config)
    yield app
    app.extensions["sortviz"].controller.shutdown()


@pytest.fixture
def slow_client(slow_app):
    return slow_app.test_client()


def parse_sse(body):
    events, end = [], None
    for block in body.strip().split("\n\n"):
        lines = block.splitlines()
        if lines[0] == "event: end":
            end = json.loads(lines[1][len("data: "):])
        else:
            events.append(json.loads(lines[0][len("data: "):]))
    return events, end


def test_lists_algorithms(client):
    data = client.get("/api/algorithms").get_json()
    keys = [a["key"] for a in data["algorithms"]]
    assert keys == ["bubble", "selection", "insertion", "merge", "quick", "heap"]
    assert data["algorithms"][0]["label"] == "Bubble Sort"


def test_config_route(client, fast_config):
    data = client.get("/api/config").get_json()
    assert data["max_speed"] == fast_config.max_speed
    assert data["poll_interval"] == fast_config.poll_interval


def test_generate_array_is_clamped_and_seeded(client):
    a = client.post("/api/array/generate", json={"size": 3, "seed": 1}).get_json()
    b = client.post("/api/array/generate", json={"size": 3, "seed": 1}).get_json()
    assert a["size"] == 10
    assert a["array"] == b["array"]
    assert client.get("/api/state").get_json()["array"] == a["array"]


def test_generate_rejects_bad_size(client):
    resp = client.post("/api/array/generate", json={"size": "big"})
    assert resp.status_code == 400


@pytest.mark.parametrize("seed", ["7", [1], {"a": 1}, 1.5, True])
def test_generate_rejects_bad_seed(client, seed):
    before = client.get("/api/state").get_json()["array"]
    resp = client.post("/api/array/generate", json={"size": 12, "seed": seed})
    assert resp.status_code == 400
    assert client.get("/api/state").get_json()["array"] == before


def test_run_and_stream_events(client):
    resp = client.post("/api/run", json={"algorithm": "Bubble Sort", "array": [5, 3, 8, 1], "speed": 200})
    assert resp.status_code == 200
    assert resp.get_json()["algorithm"] == "bubble"

    stream = client.get("/api/events")
    assert stream.mimetype == "text/event-stream"
    events, end = parse_sse(stream.get_data(as_text=True))

    assert events[:2] == [{"kind": "compare", "i": 0, "j": 1}, {"kind": "swap", "i": 0, "j": 1}]
    assert events[-1] == {"kind": "mark_all_sorted"}
    assert len(events) == 14
    assert end == {"outcome": "completed"}

    state = client.get("/api/state").get_json()
    assert state["state"] == "stopped"
    assert state["array"] == [1, 3, 5, 8]
    assert state["run"]["outcome"] == "completed"


def test_run_rejects_unknown_algorithm(client):
    resp = client.post("/api/run", json={"algorithm": "bogo"})
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_run_rejects_bad_array(client):
    resp = client.post("/api/run", json={"algorithm": "heap", "array": ["x"]})
    assert resp.status_code == 400


def test_run_and_compare_reject_oversized_array(client, fast_config):
    too_big = list(range(fast_config.max_size + 1))
    resp = client.post("/api/run", json={"algorithm": "bubble", "array": too_big})
    assert resp.status_code == 400
    assert client.get("/api/state").get_json()["state"] == "idle"

    resp = client.post("/api/compare", json={"left": "bubble", "right": "quick", "array": too_big})
    assert resp.status_code == 400


def test_unknown_algorithm_keeps_pending_array(app, client):
    before = list(app.extensions["sortviz"].array)
    resp = client.post("/api/run", json={"algorithm": "bogo", "array": [3, 2, 1]})
    assert resp.status_code == 400
    assert app.extensions["sortviz"].array == before


def test_events_without_run(client):
    assert client.get("/api/events").status_code == 404


def test_controls_and_conflict(slow_client):
    values = list(range(30, 0, -1))
    assert slow_client.post("/api/run", json={"algorithm": "bubble", "array": values}).status_code == 200

    conflict = slow_client.post("/api/run", json={"algorithm": "heap"})
    assert conflict.status_code == 409
    assert slow_client.post("/api/array/generate", json={}).status_code == 409

    paused = slow_client.post("/api/pause").get_json()
    assert paused == {"changed": True, "state": "paused"}
    assert slow_client.post("/api/pause").get_json()["changed"] is False

    resumed = slow_client.post("/api/resume").get_json()
    assert resumed == {"changed": True, "state": "running"}

    stopped = slow_client.post("/api/stop").get_json()
    assert stopped["changed"] is True

    events, end = parse_sse(slow_client.get("/api/events").get_data(as_text=True))
    assert end == {"outcome": "cancelled"}
    assert slow_client.get("/api/state").get_json()["state"] == "stopped"


def test_rejected_run_keeps_pending_array(slow_app, slow_client):
    values = [5, 4, 3, 2, 1, 9, 8, 7, 6]
    assert slow_client.post("/api/run", json={"algorithm": "bubble", "array": values}).status_code == 200

    assert slow_client.post("/api/run", json={"algorithm": "quick", "array": [42, 41]}).status_code == 409
    assert slow_client.post("/api/run", json={"algorithm": "nope", "array": [7, 7, 7]}).status_code == 400
    assert slow_app.extensions["sortviz"].array == values

    slow_client.post("/api/stop")
    assert slow_app.extensions["sortviz"].controller.current.join(2.0)


def test_compare_route(client):
    resp = client.post("/api/compare", json={"left": "bubble", "right": "selection", "array": [5, 3, 8, 1]})
    data = resp.get_json()
    assert resp.status_code == 200
    assert data["winner_swaps"] == "Selection Sort"
    assert data["left"]["comparisons"] == 6


def test_compare_rejects_unknown(client):
    resp = client.post("/api/compare", json={"left": "bubble", "right": "nope"})
    assert resp.status_code == 400
