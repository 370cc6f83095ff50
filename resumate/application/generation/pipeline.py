"""Generation pipeline use case - runs the three-stage LangGraph pipeline."""

import logging
from collections.abc import Callable

from resumate.application.generation.dto import PipelineResult
from resumate.domain.entities.pipeline_state import PipelineState
from resumate.domain.entities.workflow_state import GeneratedContent
from resumate.domain.ports.llm import GenerationPort
from resumate.infrastructure.workflow import build_pipeline_graph, compile_pipeline_graph

logger = logging.getLogger(__name__)


def _state_to_result(state: PipelineState) -> PipelineResult:
    """Map final graph state to a result. Content only when every stage ran."""
    failed = state.get("failed_stage")
    if failed:
        return PipelineResult.failure(failed, state.get("error") or "Generation failed")
    content = GeneratedContent(
        resume=state.get("tailored_resume", ""),
        cover_letter=state.get("cover_letter", ""),
        outreach_message=state.get("outreach_message", ""),
        hiring_manager_info=state.get("hiring_manager_info"),
    )
    return PipelineResult.success(content)


class GenerationPipeline:
    """Orchestrates generation: tailored resume → cover letter → outreach."""

    def __init__(self, backend: GenerationPort, model: str | None = None) -> None:
        self._backend = backend
        self._model = model

    async def generate(
        self,
        resume: str,
        job_description: str,
        context: str,
        on_status: Callable[[str], None] | None = None,
    ) -> PipelineResult:
        """Run all stages in order. Never raises for backend failures."""
        builder = build_pipeline_graph(self._backend, self._model, on_status=on_status)
        graph = compile_pipeline_graph(builder)
        initial: PipelineState = {
            "resume": resume,
            "job_description": job_description,
            "context": context,
        }
        final = await graph.ainvoke(initial)
        result = _state_to_result(final)
        if result.ok:
            logger.info("Generation pipeline completed")
        else:
            logger.warning("Generation pipeline aborted at %s: %s", result.failed_stage, result.error)
        return result
