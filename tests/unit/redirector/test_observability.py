"""Tests for structured logging and observability middleware."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from simple_redirector.observability.logging import parse_log_level, request_id_ctx
from prometheus_client import REGISTRY

from simple_redirector.observability.middleware import (
    AccessMiddleware,
    RequestIdMiddleware,
    path_label,
)


@pytest.fixture
def app():
    """Create a test FastAPI app with the request-ID middleware."""
    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)

    @app.get("/ctx")
    async def ctx():
        return {"request_id": request_id_ctx.get()}

    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def test_request_id_visible_in_context(client):
    response = client.get("/ctx")
    assert response.json()["request_id"] == response.headers["X-Request-ID"]


def test_request_id_reset_after_request(client):
    client.get("/ctx")
    assert request_id_ctx.get() is None


def test_request_id_from_header(client):
    rid = "0123456789abcdef"
    response = client.get("/ctx", headers={"X-Request-ID": rid})
    assert response.json()["request_id"] == rid


@pytest.mark.parametrize("path,label", [
    ("/healthy", "/healthy"),
    ("/metrics", "/metrics"),
    ("/", "/{path}"),
    ("/some/user/path", "/{path}"),
])
def test_metric_path_labels(path, label):
    assert path_label(path) == label


@pytest.mark.parametrize("name,level", [("debug", 10), ("INFO", 20), ("warn", 30), ("Error", 40)])
def test_parse_log_level(name, level):
    assert parse_log_level(name) == level


def test_parse_log_level_rejects_unknown():
    with pytest.raises(ValueError):
        parse_log_level("TRASH")


def test_access_middleware_collapses_mapped_paths():
    app = FastAPI()
    app.add_middleware(AccessMiddleware)

    @app.get("/{path:path}")
    async def anything(path: str):
        return {}

    labels = {"method": "GET", "path": "/{path}", "status": "200"}
    before = REGISTRY.get_sample_value("http_server_requests_total", labels) or 0.0
    client = TestClient(app)
    client.get("/first")
    client.get("/second/deeper")
    after = REGISTRY.get_sample_value("http_server_requests_total", labels)
    assert after == before + 2
