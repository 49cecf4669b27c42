"""Tests for the Ollama client, using httpx.MockTransport instead of a server."""
import asyncio
import json

import httpx
import pytest

from protogen.core.errors import ApiError, ModelUnavailableError
from protogen.llm.client import GenAIClient, run_with_timeout


def make_client(handler, model="deepseek-r1:8b") -> GenAIClient:
    return GenAIClient(
        base_url="http://ollama.test",
        model=model,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


def test_format_prompt():
    prompt = GenAIClient.format_prompt([
        {"role": "system", "content": "Be brief."},
        {"role": "user", "content": "Hi"},
        {"role": "tool", "content": "ignored"},
    ])
    assert prompt == "System: Be brief.\n\nUser: Hi\n\nAssistant: "


@pytest.mark.asyncio
async def test_generate_completion_request_shape():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": "hello", "done": True})

    client = make_client(handler)
    completion = await client.generate_completion(
        [{"role": "user", "content": "Hi"}], temperature=0.2, max_tokens=64
    )

    assert completion.content == "hello"
    assert completion.model == "deepseek-r1:8b"
    assert seen["path"] == "/api/generate"
    assert seen["body"] == {
        "model": "deepseek-r1:8b",
        "prompt": "User: Hi\n\nAssistant: ",
        "stream": False,
        "options": {"temperature": 0.2, "top_p": 0.9, "max_tokens": 64},
    }


@pytest.mark.asyncio
async def test_generate_code_cleans_output():
    def handler(request: httpx.Request) -> httpx.Response:
        text = "<think>let me see</think>```python\nprint('hi')\n```"
        return httpx.Response(200, json={"response": text})

    result = await make_client(handler).generate_code("print hi", language="python")
    assert result == {"code": "print('hi')", "language": "python", "model": "deepseek-r1:8b"}


@pytest.mark.asyncio
async def test_stream_completion_accumulates_chunks():
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content)["stream"] is True
        body = "\n".join([
            json.dumps({"response": "foo", "done": False}),
            json.dumps({"response": "bar", "done": True}),
        ])
        return httpx.Response(200, text=body)

    completion = await make_client(handler).stream_completion([{"role": "user", "content": "x"}])
    assert completion.content == "foobar"


@pytest.mark.asyncio
async def test_upstream_error_keeps_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "model 'nope' not found"})

    with pytest.raises(ApiError) as exc_info:
        await make_client(handler).generate_completion([{"role": "user", "content": "x"}])

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "LLM_API_ERROR"
    assert exc_info.value.message == "model 'nope' not found"


@pytest.mark.asyncio
async def test_transport_error_maps_to_500():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiError) as exc_info:
        await make_client(handler).generate_completion([{"role": "user", "content": "x"}])

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_non_json_body_maps_to_llm_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy</html>")

    with pytest.raises(ApiError) as exc_info:
        await make_client(handler).generate_completion([{"role": "user", "content": "x"}])

    assert exc_info.value.status_code == 502
    assert exc_info.value.code == "LLM_API_ERROR"


@pytest.mark.asyncio
async def test_generate_code_can_stream():
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content)["stream"] is True
        body = "\n".join([
            json.dumps({"response": "const a", "done": False}),
            json.dumps({"response": " = 1;", "done": True}),
        ])
        return httpx.Response(200, text=body)

    result = await make_client(handler).generate_code("declare a", stream=True)
    assert result["code"] == "const a = 1;"


@pytest.mark.asyncio
async def test_check_model_switches_to_first_available(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/tags"
        return httpx.Response(200, json={"models": [{"name": "llama3:8b"}, {"name": "qwen2:7b"}]})

    client = make_client(handler, model="missing:1b")
    assert await client.check_model() == "llama3:8b"
    assert client.model == "llama3:8b"
    assert "not found" in caplog.text


@pytest.mark.asyncio
async def test_check_model_without_models_fails():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"models": []})

    with pytest.raises(ModelUnavailableError):
        await make_client(handler).check_model()


@pytest.mark.asyncio
async def test_check_model_unreachable_server():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    with pytest.raises(ModelUnavailableError):
        await make_client(handler).check_model()


@pytest.mark.asyncio
async def test_check_model_non_json_tags_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy</html>")

    with pytest.raises(ModelUnavailableError):
        await make_client(handler).check_model()


@pytest.mark.asyncio
async def test_run_with_timeout_cancels_and_raises_504():
    cancelled = asyncio.Event()

    async def slow():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    with pytest.raises(ApiError) as exc_info:
        await run_with_timeout(slow(), 0.01, message="too slow", code="SLOW")

    assert exc_info.value.status_code == 504
    assert exc_info.value.code == "SLOW"
    assert cancelled.is_set()
