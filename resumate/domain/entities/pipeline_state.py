"""Generation pipeline state schema for LangGraph."""

from typing import TypedDict


class PipelineState(TypedDict, total=False):
    """State passed between pipeline stages. All fields optional for incremental build."""

    # Input (copies of the job context, never written back)
    resume: str
    job_description: str
    context: str  # User answers + known facts

    # Stage outputs
    tailored_resume: str
    cover_letter: str
    outreach_message: str
    hiring_manager_info: str

    # Failure of an aborting stage; later stages do not run
    failed_stage: str | None
    error: str | None

    # Metadata
    current_step: str
