"""Fact extractor - pull standalone candidate facts out of a clarification transcript."""

import logging

from pydantic import BaseModel, Field

from resumate.domain.ports.llm import GenerationPort
from resumate.infrastructure.agents.prompts import fact_extraction_prompt

logger = logging.getLogger(__name__)


class LearnedFacts(BaseModel):
    """Structured reply of the fact extraction call."""

    facts: list[str] = Field(default_factory=list)


class FactExtractor:
    def __init__(self, backend: GenerationPort, model: str | None = None) -> None:
        self._backend = backend
        self._model = model

    async def extract(self, transcript: str) -> list[str]:
        """Return extracted facts; empty list on empty transcript or any failure."""
        if not transcript.strip():
            return []
        try:
            result = await self._backend.generate_structured(
                fact_extraction_prompt(transcript),
                LearnedFacts,
                model=self._model,
            )
            payload = LearnedFacts.model_validate(result.data)
        except Exception as e:  # noqa: BLE001
            logger.warning("Fact extraction failed: %s", e)
            return []
        return [f.strip() for f in payload.facts if f and f.strip()]
