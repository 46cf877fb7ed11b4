"""
HTTP API tests using FastAPI's TestClient.

The process-wide orchestrator is swapped for a fresh one backed by
RecordingProvider, so no Gemini calls are made.

Run with: pytest tests/test_api.py -v
"""
import time
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from briefing_agent.errors import RetrievalError
from briefing_agent.main import app
from briefing_agent.state import GENERIC_ERROR_MESSAGE, PipelineOrchestrator

from conftest import RecordingProvider


def _wait_for(client, statuses, attempts=200):
    """Poll /agent/state until the status is one of `statuses`."""
    body = None
    for _ in range(attempts):
        body = client.get("/agent/state").json()
        if body["status"] in statuses:
            return body
        time.sleep(0.01)
    raise AssertionError(f"agent never reached {statuses}: {body}")


@pytest.fixture
def orchestrator():
    return PipelineOrchestrator(provider_factory=RecordingProvider)


@pytest.fixture
def client(orchestrator):
    with patch("briefing_agent.api.get_orchestrator", return_value=orchestrator), \
         patch("briefing_agent.main.get_orchestrator", return_value=orchestrator):
        with TestClient(app) as test_client:
            yield test_client


class TestAgentState:

    def test_initial_state_is_idle(self, client):
        body = client.get("/agent/state").json()
        assert body["status"] == "IDLE"
        assert body["topic"] == ""
        assert body["result"] is None
        assert body["error"] is None
        assert body["show_input"] is True

    def test_suggestions(self, client):
        assert "Fusion Energy" in client.get("/agent/suggestions").json()["suggestions"]

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["agent_status"] == "IDLE"

    def test_index_page_served(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Research Deck Agent" in response.text
        # the start button is re-armed on every render so a failed run can be retried
        assert "disabled = !view.show_input" in response.text


class TestStartAndReset:

    def test_start_runs_to_complete(self, client):
        response = client.post("/agent/start", json={"topic": "Fusion Energy"})
        assert response.status_code == 202
        assert response.json()["status"] == "RESEARCHING"

        body = _wait_for(client, {"COMPLETE", "ERROR"})
        assert body["status"] == "COMPLETE"
        assert body["show_deck"] is True
        assert body["result"]["topic"] == "Fusion Energy"
        assert len(body["result"]["slides"]) == 5
        assert len(body["result"]["sources"]) == 2

    def test_failed_run_shows_generic_error(self, orchestrator, client):
        orchestrator._provider_factory = lambda: RecordingProvider(
            research_error=RetrievalError("403 PERMISSION_DENIED")
        )
        client.post("/agent/start", json={"topic": "Fusion Energy"})

        body = _wait_for(client, {"COMPLETE", "ERROR"})
        assert body["status"] == "ERROR"
        assert body["error"] == GENERIC_ERROR_MESSAGE
        assert "PERMISSION_DENIED" not in str(body)

    def test_blank_topic_rejected(self, client):
        response = client.post("/agent/start", json={"topic": "   "})
        assert response.status_code == 422
        assert client.get("/agent/state").json()["status"] == "IDLE"

    def test_missing_topic_rejected(self, client):
        assert client.post("/agent/start", json={}).status_code == 422

    def test_start_while_running_conflicts(self, orchestrator, client):
        orchestrator.begin("Fusion Energy")
        response = client.post("/agent/start", json={"topic": "AGI Safety"})
        assert response.status_code == 409
        assert orchestrator.topic == "Fusion Energy"

    def test_reset_while_running_conflicts(self, orchestrator, client):
        orchestrator.begin("Fusion Energy")
        assert client.post("/agent/reset").status_code == 409

    def test_reset_after_complete(self, client):
        client.post("/agent/start", json={"topic": "Fusion Energy"})
        _wait_for(client, {"COMPLETE"})

        response = client.post("/agent/reset")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "IDLE"
        assert body["topic"] == ""
        assert body["result"] is None
        assert body["error"] is None

    def test_start_again_after_error(self, orchestrator, client):
        failing = RecordingProvider(research_error=RetrievalError("network down"))
        working = RecordingProvider()
        providers = iter([failing, working])
        orchestrator._provider_factory = lambda: next(providers)

        client.post("/agent/start", json={"topic": "Fusion Energy"})
        assert _wait_for(client, {"COMPLETE", "ERROR"})["status"] == "ERROR"

        response = client.post("/agent/start", json={"topic": "Fusion Energy"})
        assert response.status_code == 202
        assert response.json()["error"] is None

        body = _wait_for(client, {"COMPLETE", "ERROR"})
        assert body["status"] == "COMPLETE"
        assert body["result"]["topic"] == "Fusion Energy"
        assert working.research_calls == ["Fusion Energy"]
