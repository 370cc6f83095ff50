"""Cover letter agent - writes from the tailored resume, not the original."""

import logging
from collections.abc import Callable

from resumate.domain.entities.pipeline_state import PipelineState
from resumate.domain.ports.llm import GenerationPort
from resumate.infrastructure.agents.prompts import cover_letter_prompt

logger = logging.getLogger(__name__)

STAGE = "cover_letter"


async def cover_letter_node(
    state: PipelineState,
    backend: GenerationPort,
    model: str | None,
    on_status: Callable[[str], None] | None = None,
) -> PipelineState:
    """Generate cover letter. Updates state['cover_letter'] or records the failure."""
    if on_status:
        on_status("Writing cover letter...")
    prompt = cover_letter_prompt(state.get("tailored_resume", ""), state.get("job_description", ""))
    try:
        result = await backend.generate_text(prompt, model=model)
    except Exception as e:  # noqa: BLE001
        logger.warning("Cover letter stage failed: %s", e, exc_info=True)
        return {**state, "failed_stage": STAGE, "error": str(e) or type(e).__name__, "current_step": STAGE}

    text = result.text.strip()
    if not text:
        return {**state, "failed_stage": STAGE, "error": "Backend returned an empty cover letter", "current_step": STAGE}
    return {**state, "cover_letter": text, "current_step": STAGE}
