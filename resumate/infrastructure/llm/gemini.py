"""Gemini adapter - implements GenerationPort with Google Search grounding."""

import logging
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel

from resumate.domain.errors import BackendUnavailableError
from resumate.domain.ports.config import GeminiConfig
from resumate.domain.ports.llm import GenerationResult
from resumate.infrastructure.llm.json_payload import parse_json_payload, schema_instruction

logger = logging.getLogger(__name__)


def _grounding_sources(response: Any) -> list[str]:
    """Collect web URIs from the first candidate's grounding metadata."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []
    sources: list[str] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if uri and uri not in sources:
            sources.append(uri)
    return sources


class GeminiAdapter:
    """google-genai client wrapper.

    Structured calls without search use response_schema. Gemini does not
    combine a response schema with the search tool on every model, so
    grounded structured calls put the schema in the prompt and parse the text.
    """

    def __init__(self, config: GeminiConfig, client: genai.Client | None = None) -> None:
        self._config = config
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._config.api_key:
                raise BackendUnavailableError("Gemini API key is not configured (set GEMINI_API_KEY)")
            self._client = genai.Client(
                api_key=self._config.api_key,
                http_options=types.HttpOptions(timeout=self._config.timeout * 1000),
            )
        return self._client

    async def _call(self, model: str, prompt: str, config: types.GenerateContentConfig) -> Any:
        client = self._get_client()
        try:
            return await client.aio.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error("Gemini API error %s: %s", getattr(e, "code", "?"), e)
            raise BackendUnavailableError(f"Gemini API error: {e}") from e
        except (OSError, ValueError) as e:
            raise BackendUnavailableError(f"Gemini request failed: {e}") from e

    @staticmethod
    def _search_tools(web_search: bool) -> list[types.Tool] | None:
        if not web_search:
            return None
        return [types.Tool(google_search=types.GoogleSearch())]

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str | None = None,
        web_search: bool = False,
    ) -> GenerationResult:
        """Generate free text, optionally grounded with Google Search."""
        config = types.GenerateContentConfig(tools=self._search_tools(web_search))
        response = await self._call(model or self._config.writer_model, prompt, config)
        return GenerationResult(text=response.text or "", sources=_grounding_sources(response))

    async def generate_structured(
        self,
        prompt: str,
        schema: type[BaseModel],
        *,
        model: str | None = None,
        web_search: bool = False,
    ) -> GenerationResult:
        """Generate JSON matching schema."""
        if web_search:
            config = types.GenerateContentConfig(tools=self._search_tools(True))
            prompt = prompt + schema_instruction(schema)
        else:
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            )
        response = await self._call(model or self._config.writer_model, prompt, config)
        text = response.text or ""
        return GenerationResult(
            text=text,
            data=parse_json_payload(text),
            sources=_grounding_sources(response),
        )

    async def is_available(self) -> bool:
        """Gemini is hosted: available when a key is configured."""
        return bool(self._config.api_key)
