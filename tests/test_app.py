import pytest

from config import Settings
from main import SessionStore, create_app, run_verify


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(registry, clock):
    app = create_app(registry=registry, settings=Settings(speed_ms=100), clock=clock)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def test_list_algorithms(client):
    resp = client.get("/api/algorithms")
    assert resp.status_code == 200
    ids = [a["id"] for a in resp.get_json()["algorithms"]]
    assert ids == ["bubble-sort", "insertion-sort", "bfs", "dfs", "round-robin", "sjf"]


def test_list_algorithms_by_category(client):
    resp = client.get("/api/algorithms?category=graph")
    assert [a["id"] for a in resp.get_json()["algorithms"]] == ["bfs", "dfs"]


def test_algorithm_detail_includes_default_input(client):
    data = client.get("/api/algorithms/round-robin").get_json()
    assert data["name"] == "Round Robin Scheduling"
    assert data["defaultInput"]["time_quantum"] == 2
    assert data["defaultInput"]["processes"][0]["id"] == "P1"


def test_unknown_algorithm_is_404(client):
    resp = client.get("/api/algorithms/quick-sort")
    assert resp.status_code == 404
    assert "quick-sort" in resp.get_json()["error"]


def test_run_with_custom_input(client):
    resp = client.post("/api/run", json={"algorithm": "bubble-sort", "input": [3, 1, 2]})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["currentIndex"] == 0
    assert data["algorithm"]["id"] == "bubble-sort"
    assert data["step"]["state"]["array"] == [3, 1, 2]


def test_run_with_default_input(client):
    data = client.post("/api/run", json={"algorithm": "bfs"}).get_json()
    assert data["step"]["state"]["kind"] == "graph"


@pytest.mark.parametrize("payload,status", [
    ({}, 400),
    ({"algorithm": "quick-sort"}, 404),
    ({"algorithm": "bubble-sort", "input": [1, "x"]}, 400),
    ({"algorithm": "round-robin", "input": {"processes": []}}, 400),
])
def test_run_errors(client, payload, status):
    resp = client.post("/api/run", json=payload)
    assert resp.status_code == status
    assert "error" in resp.get_json()


def test_stepping_without_run_is_400(client):
    assert client.post("/api/step/next").status_code == 400


def test_next_prev_goto_stop(client):
    client.post("/api/run", json={"algorithm": "insertion-sort", "input": [2, 1]})
    assert client.post("/api/step/next").get_json()["currentIndex"] == 1
    assert client.post("/api/step/prev").get_json()["currentIndex"] == 0
    assert client.post("/api/step/prev").get_json()["currentIndex"] == 0
    assert client.post("/api/step/goto", json={"index": 3}).get_json()["currentIndex"] == 3
    assert client.post("/api/step/goto", json={"index": 999}).status_code == 400
    assert client.post("/api/step/stop").get_json()["currentIndex"] == 0


def test_play_advances_with_clock(client, clock):
    client.post("/api/run", json={"algorithm": "bubble-sort", "input": [2, 1]})
    assert client.post("/api/step/play").get_json()["isPlaying"] is True
    clock.now += 250
    data = client.get("/api/state").get_json()
    assert data["currentIndex"] == 2
    clock.now += 10_000
    data = client.get("/api/state").get_json()
    assert data["isAtEnd"] is True
    assert data["isPlaying"] is False
    assert data["state"] == "completed"


def test_pause_stops_advancing(client, clock):
    client.post("/api/run", json={"algorithm": "dfs"})
    client.post("/api/step/play")
    clock.now += 100
    paused = client.post("/api/step/pause").get_json()
    assert paused["currentIndex"] == 1
    clock.now += 1000
    assert client.get("/api/state").get_json()["currentIndex"] == 1


def test_speed_endpoint(client, clock):
    assert client.post("/api/config/speed", json={"speed": "slow"}).get_json()["speedMs"] == 1000
    client.post("/api/run", json={"algorithm": "sjf"})
    assert client.get("/api/state").get_json()["speedMs"] == 1000
    assert client.post("/api/config/speed", json={"speed": 5}).get_json()["speedMs"] == 20
    assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400


def test_new_run_replaces_old(app, client, clock):
    client.post("/api/run", json={"algorithm": "bubble-sort"})
    client.post("/api/step/play")
    client.post("/api/run", json={"algorithm": "sjf"})
    clock.now += 1000
    data = client.get("/api/state").get_json()
    assert data["algorithm"]["id"] == "sjf"
    assert data["currentIndex"] == 0


def test_clients_do_not_share_runs(app):
    first, second = app.test_client(), app.test_client()
    first.post("/api/run", json={"algorithm": "bfs"})
    assert second.get("/api/state").get_json()["algorithm"] is None
    assert len(app.extensions["playback_sessions"]) == 2


def test_verify_endpoint(client):
    data = client.post("/api/verify").get_json()
    assert data["passed"] is True
    assert len(data["results"]) == 6

    data = client.post("/api/verify", json={"algorithm": "bfs", "input": {"graph": "cycle", "startNode": "C"}}).get_json()
    assert data["passed"] is True
    assert data["results"][0]["finalState"]["path"][0] == "C"


def test_cli_verify_exit_status():
    assert run_verify() == 0
    assert run_verify("sjf") == 0


@pytest.mark.parametrize("literal", ["NaN", "Infinity"])
def test_run_rejects_non_finite_process_times(client, literal):
    raw = ('{"algorithm": "sjf", "input": {"processes": '
           '[{"id": "P1", "arrivalTime": %s, "burstTime": 3}]}}' % literal)
    resp = client.post("/api/run", data=raw, content_type="application/json")
    assert resp.status_code == 400
    assert "finite" in resp.get_json()["error"]


# ---------------------------------------------------------------------------
# Session store
# ---------------------------------------------------------------------------
def test_idle_sessions_are_closed_and_dropped(registry, clock):
    store = SessionStore(registry, 100, clock, idle_ms=1000)
    stale = store.get("stale")
    stale.open("bubble-sort")
    stale.controller.play()
    ctl = stale.controller

    clock.now += 600
    store.get("fresh")
    clock.now += 600
    store.get("fresh")

    assert "stale" not in store and "fresh" in store
    assert ctl.is_destroyed
    assert not stale.is_open
    assert store.get("stale").controller is None


def test_least_recently_used_session_dropped_past_cap(registry, clock):
    store = SessionStore(registry, 100, clock, max_sessions=2)
    first = store.get("a")
    first.open("sjf")
    store.get("b")
    store.get("a")
    store.get("c")
    assert len(store) == 2
    assert "b" not in store and "a" in store and "c" in store
    assert first.is_open


def test_app_takes_store_limits_from_settings(registry, clock):
    app = create_app(registry=registry, settings=Settings(session_idle_s=2, max_sessions=3), clock=clock)
    store = app.extensions["playback_sessions"]
    assert (store.idle_ms, store.max_sessions) == (2000, 3)
