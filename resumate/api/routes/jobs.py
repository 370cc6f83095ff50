"""Jobs API - grounded job sweep and selecting a result for intake."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from resumate.api.dependencies import get_workflow_controller, limiter
from resumate.application.workflow.controller import WorkflowController
from resumate.application.workflow.dto import WorkflowSnapshot
from resumate.domain.entities.profile import JobOpportunity, SearchPreferences
from resumate.domain.errors import SearchTimeoutError, WorkflowStateError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


class SearchRequest(BaseModel):
    """Preferences for this sweep only; omitted means the saved ones."""

    preferences: SearchPreferences | None = None


@router.post("/search")
@limiter.limit("10/minute")
async def search_jobs(
    request: Request,
    body: SearchRequest | None = None,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> list[JobOpportunity]:
    """Find opportunities. 504 on deadline; calling again is a fresh attempt."""
    preferences = body.preferences if body else None
    try:
        return await controller.run_search(preferences=preferences)
    except SearchTimeoutError as e:
        logger.warning("Job search timed out after %ss", e.deadline)
        raise HTTPException(status_code=504, detail=str(e))
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/select")
@limiter.limit("30/minute")
async def select_job(
    request: Request,
    job: JobOpportunity,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> WorkflowSnapshot:
    """Seed intake with the chosen job and the master resume."""
    controller.select_opportunity(job)
    return controller.snapshot()
