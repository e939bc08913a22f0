"""Tests asserting ``marketplace_api.main`` exception handlers delegate to helpers."""

from __future__ import annotations

import json

import pytest
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import DBAPIError
from starlette.datastructures import Headers

import marketplace_api.main as api_main
from marketplace_api.errors import InvalidCredentials
from marketplace_api.utils.request_context import clear_request_id, set_request_id


def _build_request(path: str = "/resource") -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": Headers().raw,
    }
    return Request(scope)


@pytest.mark.asyncio
async def test_validation_handler_reports_invalid_input():
    token = set_request_id("req-1")
    exc = RequestValidationError(
        [{"loc": ["query", "page"], "msg": "Input should be >= 1", "input": "0"}]
    )

    try:
        response = await api_main.validation_exception_handler(
            _build_request("/products"), exc
        )
    finally:
        clear_request_id(token)

    body = json.loads(response.body.decode())
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert body["error_type"] == "invalid_input"
    assert body["errors"][0]["field"] == "query.page"
    assert body["request_id"] == "req-1"


@pytest.mark.asyncio
async def test_domain_handler_uses_exception_status():
    response = await api_main.marketplace_exception_handler(
        _build_request("/auth/login"), InvalidCredentials()
    )

    body = json.loads(response.body.decode())
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert body["message"] == "Invalid credentials"
    assert body["path"] == "/auth/login"


@pytest.mark.asyncio
async def test_database_handler_hides_driver_details():
    exc = DBAPIError("statement", {}, Exception("password=hunter2"))

    response = await api_main.database_connection_exception_handler(
        _build_request("/products"), exc
    )

    raw = response.body.decode()
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert "hunter2" not in raw
    assert json.loads(raw)["error_type"] == "database_error"


@pytest.mark.asyncio
async def test_generic_handler_returns_server_error():
    response = await api_main.generic_exception_handler(
        _build_request("/products"), RuntimeError("secret internals")
    )

    body = json.loads(response.body.decode())
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert body["message"] == "Server error"
    assert "secret internals" not in response.body.decode()


def test_sanitize_database_url_masks_password():
    sanitized = api_main._sanitize_database_url(
        "postgresql+psycopg://shop:s3cret@db:5432/shop"
    )

    assert sanitized == "postgresql+psycopg://shop:***@db:5432/shop"
