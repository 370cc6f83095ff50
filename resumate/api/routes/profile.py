"""Profile API - master resume, learned facts and search preferences."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from resumate.api.dependencies import get_workflow_controller, limiter
from resumate.application.workflow.controller import WorkflowController
from resumate.application.workflow.dto import FactRequest
from resumate.domain.entities.profile import SearchPreferences, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
@limiter.limit("60/minute")
async def get_profile(
    request: Request,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> UserProfile:
    return controller.profile


@router.put("")
@limiter.limit("30/minute")
async def save_profile(
    request: Request,
    profile: UserProfile,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> dict:
    """Replace the profile. persisted=false means it only lives in memory for now."""
    persisted = controller.save_profile(profile)
    if not persisted:
        logger.warning("Profile kept in memory only, store write failed")
    return {"profile": controller.profile.model_dump(mode="json"), "persisted": persisted}


@router.post("/facts")
@limiter.limit("30/minute")
async def add_fact(
    request: Request,
    body: FactRequest,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> UserProfile:
    """Add a fact by hand; duplicates and blanks are ignored."""
    return controller.add_fact(body.fact)


@router.delete("/facts/{index}")
@limiter.limit("30/minute")
async def remove_fact(
    index: int,
    request: Request,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> UserProfile:
    try:
        return controller.remove_fact(index)
    except IndexError:
        raise HTTPException(status_code=404, detail="Fact not found")


@router.put("/search-preferences")
@limiter.limit("30/minute")
async def save_search_preferences(
    request: Request,
    preferences: SearchPreferences,
    controller: WorkflowController = Depends(get_workflow_controller),
) -> UserProfile:
    return controller.save_search_preferences(preferences)
