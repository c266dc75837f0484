from tests.election_data import AFTER_END, BEFORE_START, DURING, END, START


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_status_pending_before_start(client, clock):
    clock.now = BEFORE_START

    response = client.get("/api/election-status")

    assert response.status_code == 200
    assert response.json() == {"status": "pending"}


def test_status_active_during_window(client, clock):
    clock.now = DURING

    response = client.get("/api/election-status")

    assert response.json() == {"status": "active"}


def test_status_ended_after_window(client, clock):
    clock.now = AFTER_END

    response = client.get("/api/election-status")

    assert response.json() == {"status": "ended"}


def test_status_boundaries_are_active(client, clock, store):
    clock.now = store.window.start
    assert client.get("/api/election-status").json()["status"] == "active"

    clock.now = store.window.end
    assert client.get("/api/election-status").json()["status"] == "active"


def test_get_election_config(client):
    response = client.get("/api/election-config")

    assert response.status_code == 200
    assert response.json() == {"startTime": START, "endTime": END}


def test_results_rejected_before_start(client, clock):
    clock.now = BEFORE_START

    response = client.get("/api/results")

    assert response.status_code == 403
    assert response.json() == {"error": "Election has not started yet."}


def test_results_available_during_and_after_window(client, clock):
    expected = {"President": {"1": 0, "2": 0}, "Secretary": {"3": 0, "4": 0}}

    clock.now = DURING
    response = client.get("/api/results")
    assert response.status_code == 200
    assert response.json() == {"votes": expected}

    clock.now = AFTER_END
    response = client.get("/api/results")
    assert response.status_code == 200
    assert response.json() == {"votes": expected}


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert "error" in response.json()
