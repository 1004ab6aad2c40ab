"""Testes da montagem de routers por papel do serviço."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import router as api_routes
from config.settings import BaseSettings, RequesterSettings


def _client(monkeypatch: pytest.MonkeyPatch, role: str) -> TestClient:
    monkeypatch.setattr(api_routes, "get_base_settings", lambda: BaseSettings(service_role=role))
    monkeypatch.setattr(
        api_routes,
        "get_requester_settings",
        lambda: RequesterSettings(base_path="/api"),
    )
    app = FastAPI()
    app.include_router(api_routes.create_api_router())
    return TestClient(app, raise_server_exceptions=False)


def _mounted(client: TestClient, method: str, path: str) -> bool:
    return client.request(method, path).status_code != 404


def test_worker_role_mounts_interactions_only(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, "worker")

    assert _mounted(client, "POST", "/interactions")
    assert _mounted(client, "GET", "/health")
    assert not _mounted(client, "GET", "/api/v10/gateway")


def test_requester_role_mounts_proxy_only(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, "requester")

    assert _mounted(client, "GET", "/api/v10/gateway")
    assert not _mounted(client, "POST", "/interactions")
    assert _mounted(client, "GET", "/ready")


def test_all_role_mounts_both(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, "all")

    assert _mounted(client, "POST", "/interactions")
    assert _mounted(client, "GET", "/api/v10/gateway")
    assert client.get("/probe").status_code == 200
