"""Tests basiques de l’API FastAPI (endpoints simples)."""

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError

from app import app
from infrastructure.dependencies import get_db


client = TestClient(app)


class UnreachableSession:
    """Session dont chaque requête échoue comme une base injoignable."""

    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))


class UnreachableEngine:
    """Moteur dont la connexion échoue au démarrage."""

    url = make_url("postgresql://postgres:secret@db:5432/users")

    def connect(self):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))


def test_root_endpoint_returns_service_info():
    response = client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data.get("service") == "users-api"
    assert data.get("status") == "operational"


def test_health_check_endpoint_ok():
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data.get("status") == "healthy"
    assert data.get("database") == "connected"


def test_health_check_database_down_returns_503():
    def unreachable_db():
        yield UnreachableSession()

    app.dependency_overrides[get_db] = unreachable_db
    try:
        response = client.get("/health")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json() == {"errorType": "Service Unavailable"}


def test_startup_fails_when_database_is_unreachable(monkeypatch, caplog):
    monkeypatch.setattr("app.engine", UnreachableEngine())

    with caplog.at_level(logging.INFO):
        with pytest.raises(OperationalError):
            with TestClient(app):
                pass

    assert any(record.levelno == logging.CRITICAL for record in caplog.records)
    assert "secret" not in caplog.text


def test_unknown_route_uses_error_envelope():
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"errorType": "Not Found"}


def test_method_not_allowed_uses_error_envelope():
    response = client.patch("/users/")
    assert response.status_code == 405
    assert response.json() == {"errorType": "Method Not Allowed"}
