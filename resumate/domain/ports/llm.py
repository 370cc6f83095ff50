"""Generation Port - interface for generative text/search backends."""

from typing import Any, Protocol

from pydantic import BaseModel, Field


class GenerationResult(BaseModel):
    """Response from a backend call.

    `data` holds the parsed JSON for structured calls and is None for text
    calls. `sources` lists grounding URLs when web search was used.
    """

    text: str = ""
    data: Any = None
    sources: list[str] = Field(default_factory=list)


class GenerationPort(Protocol):
    """Interface for generation backends (Gemini, OpenAI-compatible servers)."""

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str | None = None,
        web_search: bool = False,
    ) -> GenerationResult:
        """Generate free text. Raises BackendUnavailableError on failure."""
        ...

    async def generate_structured(
        self,
        prompt: str,
        schema: type[BaseModel],
        *,
        model: str | None = None,
        web_search: bool = False,
    ) -> GenerationResult:
        """Generate JSON matching `schema`. Raises BackendUnavailableError on failure."""
        ...

    async def is_available(self) -> bool:
        """Check if the backend is reachable and configured."""
        ...
