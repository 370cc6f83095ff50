"""Analysis gate - decide between clarification and direct generation."""

import logging

from pydantic import BaseModel, Field

from resumate.domain.entities.workflow_state import AnalysisResult
from resumate.domain.ports.llm import GenerationPort
from resumate.infrastructure.agents.prompts import gap_analysis_prompt

logger = logging.getLogger(__name__)

UNAVAILABLE_RATIONALE = "Analysis unavailable, proceeding."


class GapAnalysisPayload(BaseModel):
    """Structured reply of the gap analysis call."""

    needs_info: bool
    questions: list[str] = Field(default_factory=list)
    rationale: str = ""


class AnalysisGate:
    """Single backend call that never blocks the workflow."""

    def __init__(self, backend: GenerationPort, model: str | None = None, max_questions: int = 3) -> None:
        self._backend = backend
        self._model = model
        self._max_questions = max_questions

    async def analyze(self, resume: str, job_description: str, known_facts: list[str]) -> AnalysisResult:
        """Return the gap analysis; any failure degrades to needs_info=False."""
        prompt = gap_analysis_prompt(resume, job_description, known_facts, self._max_questions)
        try:
            result = await self._backend.generate_structured(prompt, GapAnalysisPayload, model=self._model)
            payload = GapAnalysisPayload.model_validate(result.data)
        except Exception as e:  # noqa: BLE001
            logger.warning("Gap analysis failed, proceeding without clarification: %s", e)
            return AnalysisResult(needs_info=False, questions=[], rationale=UNAVAILABLE_RATIONALE)

        questions = [q.strip() for q in payload.questions if q and q.strip()][: self._max_questions]
        return AnalysisResult(
            needs_info=payload.needs_info,
            questions=questions,
            rationale=payload.rationale,
        )
