"""Integration tests for request correlation and request logging."""

import logging
import uuid

import pytest

pytestmark = pytest.mark.integration

PRODUCTS_URL = "/api/products"


def _log_lines(caplog):
    return [record.getMessage() for record in caplog.records]


class TestRequestIdHeader:
    def test_caller_request_id_is_echoed(self, api_client):
        response = api_client.get(PRODUCTS_URL, HTTP_X_REQUEST_ID="catalog-req-1")
        assert response["X-Request-ID"] == "catalog-req-1"

    def test_missing_request_id_gets_uuid4(self, api_client):
        response = api_client.post(
            PRODUCTS_URL, {"name": "Monitor", "price": 10}, format="json"
        )
        assert response.status_code == 201
        assert uuid.UUID(response["X-Request-ID"]).version == 4

    def test_error_responses_carry_request_id(self, api_client_with_correlation):
        api_client, cid = api_client_with_correlation
        response = api_client.get(f"{PRODUCTS_URL}/abc")
        assert response.status_code == 400
        assert response["X-Request-ID"] == cid

    def test_each_request_gets_its_own_id(self, api_client):
        first = api_client.get(PRODUCTS_URL)["X-Request-ID"]
        second = api_client.get(PRODUCTS_URL)["X-Request-ID"]
        assert first != second


class TestRequestLogging:
    def test_domain_events_carry_request_id(self, api_client, caplog):
        with caplog.at_level(logging.INFO):
            api_client.post(
                PRODUCTS_URL,
                {"name": "Monitor", "price": 10},
                format="json",
                HTTP_X_REQUEST_ID="catalog-req-2",
            )
        created = [line for line in _log_lines(caplog) if "product.created" in line]
        assert created, _log_lines(caplog)
        assert "catalog-req-2" in created[0]

    def test_request_finished_reports_status_and_duration(self, api_client, caplog):
        with caplog.at_level(logging.INFO):
            api_client.get(f"{PRODUCTS_URL}/424242")
        finished = [line for line in _log_lines(caplog) if "request_finished" in line]
        assert finished
        assert "404" in finished[0]
        assert "duration_ms" in finished[0]
