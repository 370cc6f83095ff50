"""Workflow application layer."""

from resumate.application.workflow.clarification import ClarificationSession
from resumate.application.workflow.controller import WorkflowController
from resumate.application.workflow.dto import (
    ClarificationAnswer,
    ClarificationCompletion,
    IntakeRequest,
    NavigateRequest,
    WorkflowSnapshot,
)

__all__ = [
    "ClarificationAnswer",
    "ClarificationCompletion",
    "ClarificationSession",
    "IntakeRequest",
    "NavigateRequest",
    "WorkflowController",
    "WorkflowSnapshot",
]
