"""Workflow API routes - intake, clarification and navigation."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from resumate.api.dependencies import get_workflow_controller, limiter
from resumate.application.workflow.controller import WorkflowController
from resumate.application.workflow.dto import (
    ClarificationAnswer,
    ClarificationCompletion,
    IntakeRequest,
    NavigateRequest,
    WorkflowSnapshot,
)
from resumate.domain.entities.workflow_state import WorkflowStep
from resumate.domain.errors import ValidationFailure, WorkflowStateError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workflow", tags=["workflow"])


def _generation_outcome(controller: WorkflowController) -> WorkflowSnapshot:
    """Snapshot, or 502 when the pipeline sent the user back to intake."""
    if controller.step is WorkflowStep.INTAKE and controller.last_error:
        raise HTTPException(status_code=502, detail=controller.last_error)
    return controller.snapshot()


@router.get("")
@limiter.limit("120/minute")
async def get_workflow(
    request: Request,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> WorkflowSnapshot:
    """Current step, job context, results and clarification messages."""
    return controller.snapshot()


@router.post("/intake")
@limiter.limit("10/minute")
async def submit_intake(
    request: Request,
    body: IntakeRequest,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> WorkflowSnapshot:
    """Analyze the gap; either open clarification or generate right away."""
    try:
        await controller.submit_intake(body.resume, body.job_description)
    except ValidationFailure as e:
        raise HTTPException(status_code=422, detail={"field": e.field, "message": str(e)})
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _generation_outcome(controller)


@router.post("/clarification/answer")
@limiter.limit("60/minute")
async def answer_clarification(
    request: Request,
    body: ClarificationAnswer,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> WorkflowSnapshot:
    try:
        controller.answer_clarification(body.content)
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return controller.snapshot()


@router.post("/clarification/complete")
@limiter.limit("10/minute")
async def complete_clarification(
    request: Request,
    body: ClarificationCompletion | None = None,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> WorkflowSnapshot:
    """Generate with the answers given so far, then learn from the dialogue."""
    body = body or ClarificationCompletion()
    try:
        await controller.complete_clarification(context=body.context, transcript=body.transcript)
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _generation_outcome(controller)


@router.post("/restart")
@limiter.limit("60/minute")
async def restart(
    request: Request,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> WorkflowSnapshot:
    """Back to intake; resume and job description stay filled in."""
    controller.restart()
    return controller.snapshot()


@router.post("/navigate")
@limiter.limit("120/minute")
async def navigate(
    request: Request,
    body: NavigateRequest,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> WorkflowSnapshot:
    try:
        controller.navigate(body.step)
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return controller.snapshot()
