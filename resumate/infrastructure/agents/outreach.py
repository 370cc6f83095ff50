"""Outreach agent - finds a contact via web search and drafts a short message.

Never aborts the pipeline: any failure degrades to a generic message.
"""

import logging
from collections.abc import Callable

from pydantic import BaseModel

from resumate.domain.entities.pipeline_state import PipelineState
from resumate.domain.ports.llm import GenerationPort
from resumate.infrastructure.agents.prompts import outreach_prompt

logger = logging.getLogger(__name__)

STAGE = "outreach"
FALLBACK_MESSAGE = "Hi, I recently applied for the position and would love to connect."
FALLBACK_MANAGER_INFO = "Could not identify hiring manager."
DEFAULT_MANAGER_INFO = "Hiring Team"
MAX_SOURCES = 2


class OutreachPayload(BaseModel):
    """Structured reply of the outreach call."""

    manager_info: str = ""
    draft_message: str = ""


async def outreach_node(
    state: PipelineState,
    backend: GenerationPort,
    model: str | None,
    on_status: Callable[[str], None] | None = None,
) -> PipelineState:
    """Find the hiring manager and draft a message. Updates outreach fields."""
    if on_status:
        on_status("Finding hiring manager...")
    prompt = outreach_prompt(state.get("job_description", ""), state.get("tailored_resume", ""))
    try:
        result = await backend.generate_structured(prompt, OutreachPayload, model=model, web_search=True)
        payload = OutreachPayload.model_validate(result.data or {})
    except Exception as e:  # noqa: BLE001
        logger.warning("Outreach stage degraded to fallback: %s", e)
        return {
            **state,
            "outreach_message": FALLBACK_MESSAGE,
            "hiring_manager_info": FALLBACK_MANAGER_INFO,
            "current_step": STAGE,
        }

    manager_info = payload.manager_info.strip() or DEFAULT_MANAGER_INFO
    sources = result.sources[:MAX_SOURCES]
    if sources:
        manager_info = f"{manager_info} (Source: {', '.join(sources)})"
    return {
        **state,
        "outreach_message": payload.draft_message.strip() or FALLBACK_MESSAGE,
        "hiring_manager_info": manager_info,
        "current_step": STAGE,
    }
