"""
Unit tests for the FastAPI application factory.
"""

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from lad.core.exceptions import ExternalServiceError
from lad.main import create_app, get_config


@pytest.fixture
def app(config):
    return create_app(config)


@pytest.fixture
def client(app):
    return TestClient(app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app": "Lad", "env": "test"}


def test_config_is_stored_on_app_state(app, config):
    assert app.state.config is config
    assert app.title == "Lad"


def test_get_config_dependency(app, client, config):
    @app.get("/app-name")
    async def app_name(cfg=Depends(get_config)):
        return {"app_name": cfg["app_name"], "same": cfg is config}

    assert client.get("/app-name").json() == {"app_name": "Lad", "same": True}


def test_external_service_error_response(app, client):
    @app.get("/send")
    async def send():
        raise ExternalServiceError(detail="Failed to send email", service_name="email")

    response = client.get("/send")

    assert response.status_code == 502
    assert response.json() == {
        "error": {
            "status_code": 502,
            "message": "Failed to send email",
            "type": "ExternalServiceError",
            "details": {"service_name": "email"}
        }
    }


def test_unhandled_error_response(app):
    @app.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    response = TestClient(app, raise_server_exceptions=False).get("/boom")

    assert response.status_code == 500
    assert response.json()["error"]["type"] == "InternalServerError"
