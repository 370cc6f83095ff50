"""Workflow entities: current step, job context and per-intake results."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class WorkflowStep(str, Enum):
    """Where the user currently is. Exactly one step is active."""

    INTAKE = "intake"
    CLARIFICATION = "clarification"
    GENERATING = "generating"
    RESULTS = "results"
    PROFILE = "profile"
    JOB_SEARCH = "job_search"


class JobContext(BaseModel):
    """Inputs for one application. Replaced wholesale, never edited in place."""

    model_config = ConfigDict(frozen=True)

    resume: str = ""
    job_description: str = ""
    additional_context: str = ""


class AnalysisResult(BaseModel):
    """Gap analysis outcome for one intake."""

    model_config = ConfigDict(frozen=True)

    needs_info: bool = False
    questions: list[str] = Field(default_factory=list)
    rationale: str = ""

    @property
    def requires_clarification(self) -> bool:
        """Clarification happens only when there is something to ask."""
        return self.needs_info and len(self.questions) > 0


class GeneratedContent(BaseModel):
    """Final application package. Published only when every stage has run."""

    model_config = ConfigDict(frozen=True)

    resume: str
    cover_letter: str
    outreach_message: str
    hiring_manager_info: str | None = None


class ChatMessage(BaseModel):
    """Single message of a clarification dialogue."""

    role: Literal["user", "assistant"]
    content: str
