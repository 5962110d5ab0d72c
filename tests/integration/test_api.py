"""Integration Tests for the HTTP API

Drives every route through FastAPI's TestClient.
"""
from tests.fixtures.database import TEST_ORIGIN


def _start(client, name, notes=None):
    body = {"experiment_name": name}
    if notes is not None:
        body["notes"] = notes
    return client.post("/api/session/start", json=body)


class TestIngestRoute:

    def test_full_success_is_201(self, client, batch_builder):
        payload = batch_builder.batch("hip", ["2025-05-01T10:00:01.000Z", "2025-05-01T10:00:02.000Z"])

        response = client.post("/api/ingest", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "stored"
        assert body["stored"] == 2

    def test_partial_is_207_with_failures(self, client, batch_builder):
        payload = batch_builder.batch("hip", ["2025-05-01T10:00:01.000Z", "2025-05-01T10:00:02.000Z"])
        payload["seconds_data"][0]["quaternions"] = [{"w": "one"}]

        response = client.post("/api/ingest", json=payload)

        assert response.status_code == 207
        body = response.json()
        assert body["status"] == "partial"
        assert body["stored"] == 1
        assert body["errors"][0]["index"] == 0
        assert body["errors"][0]["reason"] == "invalid_entry"

    def test_all_invalid_is_400(self, client):
        payload = {"device": "hip", "seconds_data": [{"timestamp": 5, "quaternions": []}]}

        response = client.post("/api/ingest", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "All data entries in the batch were invalid."

    def test_missing_device_is_400(self, client):
        response = client.post("/api/ingest", json={"seconds_data": []})

        assert response.status_code == 400
        assert response.json()["reason"] == "validation"

    def test_malformed_json_is_400(self, client):
        response = client.post(
            "/api/ingest",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid JSON payload for batch ingestion"

    def test_get_not_allowed(self, client):
        assert client.get("/api/ingest").status_code == 405


class TestSessionRoutes:

    def test_start_returns_201(self, client):
        response = _start(client, "exp1", notes="pilot")

        assert response.status_code == 201
        body = response.json()
        assert body["experiment_name"] == "exp1"
        assert body["start_time"] == "2025-05-01T10:00:00.000Z"
        assert body["notes"] == "pilot"

    def test_duplicate_start_returns_409(self, client):
        _start(client, "exp1")

        response = _start(client, "exp1")

        assert response.status_code == 409
        assert response.json()["reason"] == "conflict"

    def test_start_without_name_returns_400(self, client):
        assert client.post("/api/session/start", json={"notes": "x"}).status_code == 400
        assert client.post("/api/session/start", json={"experiment_name": ""}).status_code == 400

    def test_start_with_invalid_json_returns_400(self, client):
        response = client.post(
            "/api/session/start",
            content=b"{",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid JSON payload."

    def test_end_returns_200(self, client, clock):
        _start(client, "exp1")
        clock.advance(2)

        response = client.post("/api/session/end", json={"experiment_name": "exp1"})

        assert response.status_code == 200
        assert response.json()["end_time"] == "2025-05-01T10:00:02.000Z"

    def test_end_accepts_put(self, client):
        _start(client, "exp1")
        assert client.put("/api/session/end", json={"experiment_name": "exp1"}).status_code == 200

    def test_end_unknown_returns_404(self, client):
        response = client.post("/api/session/end", json={"experiment_name": "ghost"})

        assert response.status_code == 404
        assert response.json()["reason"] == "not_found"

    def test_list_sessions(self, client, clock):
        _start(client, "first")
        clock.advance(10)
        _start(client, "second")

        response = client.get("/api/sessions")

        assert response.status_code == 200
        names = [s["experiment_name"] for s in response.json()["sessions"]]
        assert names == ["second", "first"]


class TestQueryRoute:

    def test_scenario_start_ingest_end_query(self, client, clock, batch_builder):
        _start(client, "exp1")
        clock.advance(1)
        client.post("/api/ingest", json=batch_builder.batch("hip", [clock.iso()]))
        clock.advance(1)
        client.post("/api/session/end", json={"experiment_name": "exp1"})

        response = client.get("/api/data/experiment", params={"name": "exp1"})

        assert response.status_code == 200
        body = response.json()
        assert body["data_count"] == 1
        assert body["end_time"] == "2025-05-01T10:00:02.000Z"
        record = body["gait_data_records"][0]
        assert record["device"] == "hip"
        assert record["quaternions"] == batch_builder.quaternions(3)

    def test_open_session_returns_202(self, client):
        _start(client, "exp1")

        response = client.get("/api/data/experiment", params={"name": "exp1"})

        assert response.status_code == 202
        body = response.json()
        assert body["status"] == "incomplete"
        assert body["data_count"] == 0
        assert body["gait_data_records"] == []

    def test_unknown_session_returns_404(self, client):
        response = client.get("/api/data/experiment", params={"name": "unknown"})

        assert response.status_code == 404
        assert "unknown" in response.json()["message"]

    def test_missing_name_returns_400(self, client):
        assert client.get("/api/data/experiment").status_code == 400


class TestAppSurface:

    def test_cors_preflight_uses_configured_origin(self, client):
        response = client.options(
            "/api/ingest",
            headers={
                "Origin": TEST_ORIGIN,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == TEST_ORIGIN
        assert response.headers["access-control-max-age"] == "86400"

    def test_cors_rejects_unlisted_origin(self, client):
        response = client.get("/health", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in response.headers

    def test_unknown_route_is_json_404(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"message": "Endpoint not found."}

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"
