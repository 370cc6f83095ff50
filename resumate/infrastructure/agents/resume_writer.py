"""Resume writer agent - tailors the original resume to the job description."""

import logging
from collections.abc import Callable

from resumate.domain.entities.pipeline_state import PipelineState
from resumate.domain.ports.llm import GenerationPort
from resumate.infrastructure.agents.prompts import tailored_resume_prompt

logger = logging.getLogger(__name__)

STAGE = "resume"


async def resume_writer_node(
    state: PipelineState,
    backend: GenerationPort,
    model: str | None,
    on_status: Callable[[str], None] | None = None,
) -> PipelineState:
    """Generate tailored resume. Updates state['tailored_resume'] or records the failure."""
    if on_status:
        on_status("Drafting tailored resume...")
    prompt = tailored_resume_prompt(
        state.get("resume", ""),
        state.get("job_description", ""),
        state.get("context", ""),
    )
    try:
        result = await backend.generate_text(prompt, model=model)
    except Exception as e:  # noqa: BLE001
        logger.warning("Resume stage failed: %s", e, exc_info=True)
        return {**state, "failed_stage": STAGE, "error": str(e) or type(e).__name__, "current_step": STAGE}

    text = result.text.strip()
    if not text:
        return {**state, "failed_stage": STAGE, "error": "Backend returned an empty resume", "current_step": STAGE}
    return {**state, "tailored_resume": text, "current_step": STAGE}
