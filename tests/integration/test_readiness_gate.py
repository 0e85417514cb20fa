"""Integration tests for the readiness gate middleware."""

from unittest.mock import patch

import pytest

from modules.core.constants import ReadinessState

pytestmark = pytest.mark.integration


class _Gateway:
    def __init__(self, state):
        self.state = state

    @property
    def is_ready(self):
        return self.state == ReadinessState.READY


@pytest.fixture()
def gate_enabled(settings):
    settings.READINESS_GATE_ENABLED = True


def _with_state(state):
    return patch(
        "modules.core.middleware.get_gateway", return_value=_Gateway(state)
    )


class TestReadinessGate:
    def test_disabled_gate_lets_requests_through(self, api_client):
        with _with_state(ReadinessState.FAILED):
            response = api_client.get("/api/products")
        assert response.status_code == 200

    @pytest.mark.usefixtures("gate_enabled")
    @pytest.mark.parametrize(
        "state",
        [
            ReadinessState.DISCONNECTED,
            ReadinessState.CONNECTING,
            ReadinessState.FAILED,
        ],
    )
    def test_not_ready_returns_503(self, api_client, state):
        with _with_state(state):
            response = api_client.get("/api/products")
        assert response.status_code == 503
        assert response.json() == {"error": "Database not ready", "state": state}

    @pytest.mark.usefixtures("gate_enabled")
    def test_ready_lets_requests_through(self, api_client):
        with _with_state(ReadinessState.READY):
            response = api_client.get("/api/products")
        assert response.status_code == 200

    @pytest.mark.usefixtures("gate_enabled")
    def test_health_is_never_gated(self, api_client):
        with _with_state(ReadinessState.FAILED):
            response = api_client.get("/health")
        assert response.status_code in (200, 503)
        assert "services" in response.json()
