"""HTTP surface: tool discovery, invocation and the registry behind them."""

from __future__ import annotations

import runpy
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from pydantic import BaseModel, ValidationError

from app.main import app
from app.tools.registry import ToolDefinition, ToolNotFoundError, ToolRegistry
from conftest import fake_session, make_response


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_discovery_lists_seochecker(client):
    resp = client.get("/discovery")

    assert resp.status_code == 200
    functions = resp.json()["functions"]
    assert [f["name"] for f in functions] == ["seochecker"]
    tool = functions[0]
    assert tool["description"] == "Checks a url for SEO statistics"
    assert tool["endpoint"] == "/tools/seochecker"
    assert tool["http_method"] == "POST"
    assert tool["parameters"] == [
        {
            "name": "url",
            "type": "string",
            "description": "The URL of the page to analyze",
            "required": True,
        }
    ]


@patch("services.crawler.get_session")
def test_invoke_seochecker_returns_camel_case_report(mock_get_session, client, clean_page_html):
    mock_get_session.return_value = fake_session(make_response(clean_page_html, 200))

    resp = client.post("/tools/seochecker", json={"parameters": {"url": "https://example.com/"}})

    assert resp.status_code == 200
    body = resp.json()
    assert body["statusCode"] == 200
    assert body["structuredData"] is True
    assert body["images"] == {"totalImages": 1, "imagesWithAlt": 1, "imagesWithoutAlt": 0}
    assert body["recommendations"] == ["Great! No major SEO issues detected."]


@patch("services.crawler.get_session")
def test_invoke_accepts_bare_parameter_object(mock_get_session, client):
    resp = client.post("/tools/seochecker", json={"url": "ftp://example.com"})

    assert resp.status_code == 200
    assert resp.json()["error"].startswith("Invalid URL format")
    assert set(resp.json()) == {"error"}
    mock_get_session.assert_not_called()


@patch("services.crawler.get_session")
def test_fetch_failure_is_a_normal_tool_result(mock_get_session, client):
    mock_get_session.return_value = fake_session(make_response("", 500))

    resp = client.post("/tools/seochecker", json={"parameters": {"url": "https://example.com/"}})

    assert resp.status_code == 200
    assert resp.json()["error"].startswith("Failed to fetch URL:")


def test_unknown_tool_is_404(client):
    resp = client.post("/tools/nope", json={"parameters": {}})
    assert resp.status_code == 404


@pytest.mark.parametrize("params", [{}, {"url": 42}])
def test_invalid_parameters_are_422(client, params):
    resp = client.post("/tools/seochecker", json={"parameters": params})
    assert resp.status_code == 422


@patch("services.crawler.get_session")
def test_empty_url_is_an_invalid_url_result(mock_get_session, client):
    resp = client.post("/tools/seochecker", json={"parameters": {"url": ""}})

    assert resp.status_code == 200
    assert resp.json()["error"].startswith("Invalid URL format")
    mock_get_session.assert_not_called()


def test_non_object_parameters_are_422(client):
    resp = client.post("/tools/seochecker", json={"parameters": ["https://example.com"]})
    assert resp.status_code == 422


class _EchoParams(BaseModel):
    text: str


class _Echo(BaseModel):
    echoed: str


def test_registry_register_invoke_and_errors():
    registry = ToolRegistry()

    @registry.tool(name="echo", description="Echo text back", parameters=_EchoParams)
    def echo(params: _EchoParams) -> _Echo:
        return _Echo(echoed=params.text)

    assert registry.invoke("echo", {"text": "hi"}) == _Echo(echoed="hi")
    assert [t.name for t in registry.list_tools()] == ["echo"]

    with pytest.raises(ValidationError):
        registry.invoke("echo", {})
    with pytest.raises(ToolNotFoundError):
        registry.invoke("missing", {})
    with pytest.raises(ValueError):
        registry.register(ToolDefinition("echo", "dup", _EchoParams, echo))


@patch("uvicorn.run")
def test_running_main_module_serves_app_with_uvicorn(mock_run):
    runpy.run_module("app.main", run_name="__main__")

    mock_run.assert_called_once_with("app.main:app", host="127.0.0.1", port=8000, reload=False)
