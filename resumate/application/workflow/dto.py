"""Workflow DTOs."""

from pydantic import BaseModel, Field

from resumate.domain.entities.profile import JobOpportunity
from resumate.domain.entities.workflow_state import (
    AnalysisResult,
    ChatMessage,
    GeneratedContent,
    JobContext,
    WorkflowStep,
)


class IntakeRequest(BaseModel):
    """Resume and job description for a new application."""

    resume: str = Field(..., max_length=100_000)
    job_description: str = Field(..., max_length=100_000)


class ClarificationAnswer(BaseModel):
    """One user reply in the clarification dialogue."""

    content: str = Field(..., min_length=1, max_length=10_000)


class ClarificationCompletion(BaseModel):
    """Explicit context/transcript; omitted fields come from the recorded dialogue."""

    context: str | None = Field(None, max_length=50_000)
    transcript: str | None = Field(None, max_length=100_000)


class NavigateRequest(BaseModel):
    step: WorkflowStep


class FactRequest(BaseModel):
    fact: str = Field(..., max_length=2_000)


class WorkflowSnapshot(BaseModel):
    """Current workflow state for the presentation layer."""

    step: WorkflowStep
    loading: bool
    status_text: str = ""
    job_context: JobContext
    analysis: AnalysisResult | None = None
    content: GeneratedContent | None = None  # Only while on the results step
    messages: list[ChatMessage] = Field(default_factory=list)
    opportunities: list[JobOpportunity] = Field(default_factory=list)
    last_error: str | None = None
