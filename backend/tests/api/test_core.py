"""Tests for the estimate quota and request logging."""

from __future__ import annotations

import json
import logging
import sys

import pytest
from fastapi import HTTPException
from httpx import AsyncClient
from starlette.requests import Request

from app.core.logging import (
    JSONFormatter,
    RequestIdFilter,
    new_request_id,
    request_id_var,
)
from app.core.rate_limit import EstimateQuota, client_key


def _request(ip: str = "10.0.0.1", forwarded: str | None = None) -> Request:
    headers = [(b"x-forwarded-for", forwarded.encode())] if forwarded else []
    return Request({"type": "http", "method": "POST", "path": "/", "headers": headers, "client": (ip, 5000)})


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


# ======================================================================
# Estimate quota
# ======================================================================


class TestClientKey:
    def test_socket_peer(self):
        assert client_key(_request("192.0.2.7")) == "192.0.2.7"

    def test_first_forwarded_hop(self):
        assert client_key(_request(forwarded="203.0.113.5, 10.0.0.2")) == "203.0.113.5"

    def test_blank_forwarded_header(self):
        assert client_key(_request("192.0.2.7", forwarded=" ")) == "192.0.2.7"


class TestEstimateQuota:
    def test_blocks_after_quota(self):
        quota = EstimateQuota(max_requests=2, window_seconds=60, clock=FakeClock())
        quota.check(_request())
        quota.check(_request())
        with pytest.raises(HTTPException) as exc_info:
            quota.check(_request())
        assert exc_info.value.status_code == 429
        assert exc_info.value.headers == {"Retry-After": "60"}

    def test_clients_counted_separately(self):
        quota = EstimateQuota(max_requests=1, clock=FakeClock())
        quota.check(_request("10.0.0.1"))
        quota.check(_request("10.0.0.2"))
        assert quota.tracked_clients == 2

    def test_window_rolls(self):
        clock = FakeClock()
        quota = EstimateQuota(max_requests=1, window_seconds=60, clock=clock)
        quota.check(_request())
        clock.now += 30
        with pytest.raises(HTTPException) as exc_info:
            quota.check(_request())
        assert exc_info.value.headers["Retry-After"] == "30"
        clock.now += 30
        quota.check(_request())

    def test_idle_clients_dropped(self):
        """Many one-off callers do not accumulate once their window passes."""
        clock = FakeClock()
        quota = EstimateQuota(max_requests=5, window_seconds=60, clock=clock)
        for i in range(100):
            quota.check(_request(f"10.0.{i // 256}.{i % 256}"))
        assert quota.tracked_clients == 100

        clock.now += 61
        quota.check(_request("10.9.9.9"))
        assert quota.tracked_clients == 1

    def test_reset(self):
        quota = EstimateQuota(max_requests=1, clock=FakeClock())
        quota.check(_request())
        quota.reset()
        assert quota.tracked_clients == 0
        quota.check(_request())


# ======================================================================
# Logging
# ======================================================================


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("app.services.estimate_service", logging.INFO, __file__, 1, "estimate %s", ("done",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestId:
    def test_keeps_well_formed_id(self):
        assert new_request_id("abc-123.x_y") == "abc-123.x_y"

    @pytest.mark.parametrize("incoming", [None, "", "has space", "x" * 65, "semi;colon"])
    def test_replaces_other_ids(self, incoming):
        rid = new_request_id(incoming)
        assert rid != incoming
        assert len(rid) == 12

    def test_filter_stamps_context_id(self):
        token = request_id_var.set("req-42")
        try:
            record = _record()
            assert RequestIdFilter().filter(record) is True
        finally:
            request_id_var.reset(token)
        assert record.request_id == "req-42"

    def test_filter_outside_request(self):
        record = _record()
        RequestIdFilter().filter(record)
        assert record.request_id == "-"


class TestJSONFormatter:
    def test_structured_fields(self):
        record = _record(request_id="req-1", geocoding_source="city_table", irradiance="estimated", annual_kwh=7443.77)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "estimate done"
        assert entry["level"] == "INFO"
        assert entry["request_id"] == "req-1"
        assert entry["geocoding_source"] == "city_table"
        assert entry["irradiance"] == "estimated"
        assert entry["annual_kwh"] == 7443.77
        assert "status_code" not in entry

    def test_unlisted_extras_dropped(self):
        entry = json.loads(JSONFormatter().format(_record(api_key="secret")))
        assert "api_key" not in entry

    def test_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        entry = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]


@pytest.mark.asyncio
class TestMiddleware:
    async def test_generated_id(self, client: AsyncClient):
        resp = await client.get("/health")
        assert len(resp.headers["X-Request-ID"]) == 12

    async def test_oversized_id_replaced(self, client: AsyncClient):
        resp = await client.get("/health", headers={"x-request-id": "x" * 100})
        assert resp.headers["X-Request-ID"] != "x" * 100

    async def test_access_log(self, client: AsyncClient, caplog):
        with caplog.at_level(logging.INFO, logger="solar_estimator.access"):
            await client.get("/health", headers={"x-request-id": "trace-7"})
        access = [r for r in caplog.records if r.name == "solar_estimator.access"]
        assert len(access) == 1
        assert access[0].status_code == 200
        assert access[0].path == "/health"
        assert access[0].method == "GET"
