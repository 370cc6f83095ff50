"""OpenAI-compatible adapter - LM Studio, vLLM, Ollama /v1, OpenAI."""

import logging

import httpx
from pydantic import BaseModel

from resumate.domain.errors import BackendUnavailableError
from resumate.domain.ports.config import OpenAICompatibleConfig
from resumate.domain.ports.llm import GenerationResult
from resumate.infrastructure.llm.json_payload import parse_json_payload, schema_instruction

logger = logging.getLogger(__name__)


class OpenAICompatibleAdapter:
    """Implements GenerationPort via /v1/chat/completions.

    These servers have no built-in web search: the flag is accepted and
    ignored, so grounded stages run ungrounded.
    """

    def __init__(self, config: OpenAICompatibleConfig, default_model: str = "default") -> None:
        """Initialize with OpenAI-compatible config."""
        self._config = config
        self._default_model = default_model
        self._base_url = config.base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}
        if config.api_key:
            self._headers["Authorization"] = f"Bearer {config.api_key}"
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create persistent async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                headers=self._headers,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client (call during app shutdown)."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _chat_body(self, model: str, prompt: str, response_format: dict | None = None) -> dict:
        """Build request body; optional max_tokens from config."""
        body: dict = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False,
        }
        if self._config.max_tokens is not None:
            body["max_tokens"] = self._config.max_tokens
        if response_format is not None:
            body["response_format"] = response_format
        return body

    async def _complete(self, body: dict) -> str:
        """POST the body, return the first choice's content."""
        client = self._get_client()
        try:
            resp = await client.post(f"{self._base_url}/chat/completions", json=body)
        except httpx.HTTPError as e:
            raise BackendUnavailableError(f"LLM request failed: {e}") from e
        if resp.status_code >= 400:
            logger.error("LLM API error %s: %s", resp.status_code, resp.text[:500])
            raise BackendUnavailableError(f"LLM API error {resp.status_code}: {resp.text[:200]}")
        try:
            data = resp.json()
        except ValueError as e:
            raise BackendUnavailableError("LLM API returned non-JSON body") from e
        choices = data.get("choices") or [{}]
        return (choices[0].get("message") or {}).get("content") or ""

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str | None = None,
        web_search: bool = False,
    ) -> GenerationResult:
        """Generate free text."""
        if web_search:
            logger.debug("Web search not supported by OpenAI-compatible backend, ignoring")
        body = self._chat_body(model or self._default_model, prompt)
        return GenerationResult(text=await self._complete(body))

    async def generate_structured(
        self,
        prompt: str,
        schema: type[BaseModel],
        *,
        model: str | None = None,
        web_search: bool = False,
    ) -> GenerationResult:
        """Generate JSON constrained by response_format json_schema."""
        if web_search:
            logger.debug("Web search not supported by OpenAI-compatible backend, ignoring")
        response_format = {
            "type": "json_schema",
            "json_schema": {"name": schema.__name__, "schema": schema.model_json_schema()},
        }
        body = self._chat_body(
            model or self._default_model,
            prompt + schema_instruction(schema),
            response_format=response_format,
        )
        text = await self._complete(body)
        return GenerationResult(text=text, data=parse_json_payload(text))

    async def is_available(self) -> bool:
        """Check if the server answers /models."""
        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                resp = await client.get(f"{self._base_url}/models", headers=self._headers)
                return resp.status_code == 200
        except (httpx.HTTPError, OSError) as e:
            logger.debug("OpenAI-compatible availability check failed: %s", e)
            return False
