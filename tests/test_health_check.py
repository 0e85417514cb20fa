from unittest.mock import patch

import pytest
from django.db import OperationalError

from modules.core.apps import get_gateway
from modules.core.constants import ReadinessState


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_database_status(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["services"]["database"]["status"] == "up"
        assert "response_time_ms" in data["services"]["database"]

    def test_health_check_reports_readiness(self, client):
        response = client.get("/health")
        readiness = response.json()["services"]["database"]["readiness"]
        assert readiness in ReadinessState.values

    def test_health_check_returns_503_when_database_is_down(self, client):
        gateway = get_gateway()
        with patch.object(gateway, "ping", side_effect=OperationalError("down")):
            response = client.get("/health")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["database"]["status"] == "down"
