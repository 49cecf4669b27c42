"""Async client for an Ollama-compatible text completion server."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

import httpx

from protogen.core.config import settings
from protogen.core.errors import ApiError, ModelUnavailableError
from protogen.llm.parser import accumulate_ndjson, clean_llm_output

log = logging.getLogger(__name__)

T = TypeVar("T")

ROLE_PREFIXES = {
    "system": "System",
    "user": "User",
    "assistant": "Assistant",
}


@dataclass
class Completion:
    content: str
    model: str


async def run_with_timeout(
    awaitable: Awaitable[T],
    seconds: float,
    message: str = "LLM request timed out",
    code: str = "LLM_TIMEOUT",
) -> T:
    """Await with a deadline; the pending request is cancelled when it expires."""
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError:
        log.error("%s after %s seconds", message, seconds)
        raise ApiError(message, 504, code)


@dataclass
class GenAIClient:
    base_url: str = settings.ollama_base_url
    model: str = settings.ollama_model
    timeout: float = settings.llm_timeout_seconds
    transport: Optional[httpx.AsyncBaseTransport] = field(default=None, repr=False)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url.rstrip("/"),
            timeout=self.timeout,
            headers={"Content-Type": "application/json"},
            transport=self.transport,
        )

    @staticmethod
    def format_prompt(messages: List[Dict[str, str]]) -> str:
        """Flatten chat messages into a single completion prompt."""
        prompt = ""
        for message in messages:
            prefix = ROLE_PREFIXES.get(message.get("role", ""))
            if prefix:
                prompt += f"{prefix}: {message.get('content', '')}\n\n"
        prompt += "Assistant: "
        return prompt

    def _request_body(self, messages, temperature, top_p, max_tokens, stream: bool) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prompt": self.format_prompt(messages),
            "stream": stream,
            "options": {
                "temperature": temperature,
                "top_p": top_p,
                "max_tokens": max_tokens,
            },
        }

    @staticmethod
    def _to_api_error(exc: Exception) -> ApiError:
        status_code = 500
        message = str(exc) or "LLM API error"
        if not isinstance(exc, httpx.HTTPError):
            status_code = 502
            message = f"Invalid JSON response from LLM server: {exc}"
        elif isinstance(exc, httpx.HTTPStatusError):
            status_code = exc.response.status_code
            try:
                body = exc.response.json()
            except ValueError:
                body = {}
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
        log.error("LLM API error: %s", message)
        return ApiError(message, status_code, "LLM_API_ERROR")

    async def generate_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        top_p: float = 0.9,
        max_tokens: int = 2048,
    ) -> Completion:
        body = self._request_body(messages, temperature, top_p, max_tokens, stream=False)
        try:
            async with self._client() as client:
                r = await client.post("/api/generate", json=body)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise self._to_api_error(e) from e
        return Completion(content=data.get("response", ""), model=self.model)

    async def stream_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        top_p: float = 0.9,
        max_tokens: int = 2048,
    ) -> Completion:
        body = self._request_body(messages, temperature, top_p, max_tokens, stream=True)
        lines: List[str] = []
        try:
            async with self._client() as client:
                async with client.stream("POST", "/api/generate", json=body) as r:
                    r.raise_for_status()
                    async for line in r.aiter_lines():
                        lines.append(line)
        except httpx.HTTPError as e:
            raise self._to_api_error(e) from e
        return Completion(content=accumulate_ndjson(lines), model=self.model)

    async def list_models(self) -> List[str]:
        try:
            async with self._client() as client:
                r = await client.get("/api/tags")
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise self._to_api_error(e) from e
        return [m.get("name") for m in data.get("models", []) if m.get("name")]

    async def check_model(self) -> str:
        """
        Make sure the configured model can serve requests.

        Falls back to the first available model when the configured one
        has not been pulled. Returns the model that will be used.
        """
        log.info("Checking if local model is running at %s", self.base_url)
        try:
            available = await self.list_models()
        except ApiError as e:
            raise ModelUnavailableError(
                f"Error connecting to local model at {self.base_url}: {e}. "
                "Make sure Ollama is running with: ollama serve"
            ) from e

        if self.model in available:
            log.info("Local model '%s' is running", self.model)
            return self.model

        if not available:
            raise ModelUnavailableError(
                f"No models available. Pull one with: ollama pull {self.model}"
            )

        log.warning(
            "Model '%s' not found, continuing with '%s' (available: %s)",
            self.model, available[0], ", ".join(available),
        )
        self.model = available[0]
        return self.model

    # --------------------------------------------------------
    # Task helpers
    # --------------------------------------------------------

    async def _ask(
        self, system_prompt: str, user_content: str, max_tokens: int, temperature: float, stream: bool = False
    ) -> Completion:
        complete = self.stream_completion if stream else self.generate_completion
        return await complete(
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
        )

    async def generate_code(
        self, prompt: str, language: str = "javascript", comments: bool = True, max_tokens: int = 2048, stream: bool = False
    ) -> Dict[str, Any]:
        system_prompt = (
            f"You are an expert programmer. Generate {language} code based on the following requirements. "
            f"{'Include helpful comments.' if comments else 'Minimize comments.'} "
            "The code should be production-ready, efficient, and follow best practices."
        )
        response = await self._ask(system_prompt, prompt, max_tokens, 0.2, stream=stream)
        return {
            "code": clean_llm_output(response.content),
            "language": language,
            "model": response.model,
        }

    async def validate_content(self, content: str, criteria: List[str], detailed: bool = True) -> Dict[str, Any]:
        system_prompt = (
            f"You are a content reviewer. Evaluate the following content based on these criteria: {', '.join(criteria)}. "
            f"{'Provide detailed feedback for each criterion.' if detailed else 'Provide concise feedback.'} "
            "Be objective and constructive."
        )
        response = await self._ask(system_prompt, content, 2048, 0.3)
        return {"review": response.content, "criteria": criteria, "model": response.model}

    async def research_topic(self, topic: str, depth: str = "intermediate", format: str = "detailed") -> Dict[str, Any]:
        system_prompt = (
            f"You are a research assistant. Conduct {depth} research on the following topic and present it in {format} format. "
            "Include key concepts, important details, and relevant insights."
        )
        response = await self._ask(system_prompt, f"Research topic: {topic}", 4096, 0.7)
        return {
            "research": response.content,
            "topic": topic,
            "depth": depth,
            "format": format,
            "model": response.model,
        }

    async def summarize_content(self, content: str, length: str = "medium", style: str = "paragraph") -> Dict[str, Any]:
        system_prompt = (
            f"You are a summarization expert. Create a {length} summary of the following content in {style} style. "
            "Capture the main points and key insights."
        )
        response = await self._ask(system_prompt, content, 2048, 0.4)
        return {"summary": response.content, "length": length, "style": style, "model": response.model}

    async def derive_insights(self, content: str, perspective: str = "analytical", focus_areas: Optional[List[str]] = None) -> Dict[str, Any]:
        focus_areas = focus_areas or []
        focus = f"Focus on these areas: {', '.join(focus_areas)}." if focus_areas else ""
        system_prompt = (
            f"You are an insights analyst with a {perspective} perspective. Analyze the following content and extract meaningful insights. "
            f"{focus} Provide actionable takeaways and highlight patterns or trends."
        )
        response = await self._ask(system_prompt, content, 2048, 0.5)
        return {
            "insights": response.content,
            "perspective": perspective,
            "focusAreas": focus_areas,
            "model": response.model,
        }

    async def generate_svg(self, description: str, style: str = "minimal", size: Optional[Dict[str, int]] = None, colors: Optional[List[str]] = None) -> Dict[str, Any]:
        size = size or {"width": 300, "height": 300}
        colors = colors or []
        colors_str = f"Use these colors: {', '.join(colors)}." if colors else "Use appropriate colors."
        system_prompt = (
            f"You are an SVG designer. Create an SVG image based on the following description in {style} style. "
            f"The image should be {size['width']}x{size['height']} pixels. {colors_str} "
            "Return only valid SVG code without any explanation."
        )
        response = await self._ask(system_prompt, description, 4096, 0.7)
        return {
            "svg": clean_llm_output(response.content),
            "style": style,
            "size": size,
            "model": response.model,
        }


_default_client: Optional[GenAIClient] = None


def get_llm_client() -> GenAIClient:
    """FastAPI dependency returning the process-wide client."""
    global _default_client
    if _default_client is None:
        _default_client = GenAIClient()
    return _default_client
