"""Domain entities."""

from resumate.domain.entities.profile import (
    JobOpportunity,
    SearchPreferences,
    UserProfile,
    WorkMode,
    default_profile,
)
from resumate.domain.entities.workflow_state import (
    AnalysisResult,
    ChatMessage,
    GeneratedContent,
    JobContext,
    WorkflowStep,
)

__all__ = [
    "AnalysisResult",
    "ChatMessage",
    "GeneratedContent",
    "JobContext",
    "JobOpportunity",
    "SearchPreferences",
    "UserProfile",
    "WorkMode",
    "WorkflowStep",
    "default_profile",
]
