"""Tests for the code generation endpoint and the error envelope."""
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from protogen.core.errors import ApiError
from protogen.llm.client import get_llm_client
from protogen.main import app


def client_with_llm(llm, **kwargs) -> TestClient:
    app.dependency_overrides[get_llm_client] = lambda: llm
    return TestClient(app, **kwargs)


def teardown_function():
    app.dependency_overrides.clear()


def test_generate_code_success():
    llm = MagicMock()
    llm.generate_code = AsyncMock(return_value={"code": "const x = 1;", "language": "javascript", "model": "m"})
    client = client_with_llm(llm)

    r = client.post("/api/generate/code", json={"prompt": "declare x", "maxTokens": 100, "comments": False})

    assert r.status_code == 200
    assert r.json() == {"success": True, "data": {"code": "const x = 1;", "language": "javascript", "model": "m"}}
    llm.generate_code.assert_awaited_once_with(
        prompt="declare x", language="javascript", comments=False, max_tokens=100, stream=False
    )


def test_generate_code_stream_flag():
    llm = MagicMock()
    llm.generate_code = AsyncMock(return_value={"code": "x", "language": "python", "model": "m"})
    client = client_with_llm(llm)

    r = client.post("/api/generate/code", json={"prompt": "p", "language": "python", "stream": True})

    assert r.status_code == 200
    assert llm.generate_code.await_args.kwargs["stream"] is True


def test_generate_code_validation_error():
    client = client_with_llm(MagicMock())

    r = client.post("/api/generate/code", json={"language": "python", "maxTokens": 0})

    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "prompt" in body["error"]["message"]
    assert "maxTokens" in body["error"]["message"]
    assert ", " in body["error"]["message"]
    assert "stack" not in body["error"]


def test_generate_code_service_error():
    llm = MagicMock()
    llm.generate_code = AsyncMock(side_effect=ApiError("Ollama is down", 503, "LLM_API_ERROR"))
    client = client_with_llm(llm)

    r = client.post("/api/generate/code", json={"prompt": "anything"})

    assert r.status_code == 503
    assert r.json() == {"success": False, "error": {"message": "Ollama is down", "code": "LLM_API_ERROR"}}


def test_generate_code_unexpected_error():
    llm = MagicMock()
    llm.generate_code = AsyncMock(side_effect=RuntimeError("kaboom"))
    client = client_with_llm(llm, raise_server_exceptions=False)

    r = client.post("/api/generate/code", json={"prompt": "anything"})

    assert r.status_code == 500
    assert r.json()["error"] == {"message": "kaboom", "code": "INTERNAL_SERVER_ERROR"}


def test_stack_included_in_development(monkeypatch):
    from protogen.core.config import settings

    monkeypatch.setattr(settings, "app_env", "development")
    llm = MagicMock()
    llm.generate_code = AsyncMock(side_effect=ApiError("Ollama is down", 503, "LLM_API_ERROR"))
    client = client_with_llm(llm)

    r = client.post("/api/generate/code", json={"prompt": "anything"})

    assert "ApiError" in r.json()["error"]["stack"]
