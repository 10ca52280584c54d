"""
Evaluations Routes
==================

API endpoints for the evaluation lifecycle.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, status

from services.client_evaluation.dependencies import get_evaluation_service
from services.client_evaluation.services import EvaluationService
from shared.models.common import MessageResponse
from shared.models.evaluation import (
    CategoriesUpdate,
    CategoriesUpdateResponse,
    Evaluation,
    EvaluationCreate,
)

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_evaluation(
    evaluation_data: EvaluationCreate,
    service: EvaluationService = Depends(get_evaluation_service),
) -> MessageResponse:
    """
    Submit an evaluation.

    Tier, recommendation notes, priority and the evaluation date are
    derived from the submitted score.
    """
    evaluation = await service.create(evaluation_data)
    return MessageResponse(msg="Evaluation added successfully!", id=evaluation.id)


@router.get("", response_model=list[Evaluation])
async def list_evaluations(
    service: EvaluationService = Depends(get_evaluation_service),
) -> list[Evaluation]:
    """List all evaluations."""
    return await service.list_all()


@router.get("/{evaluation_id}", response_model=Evaluation)
async def get_evaluation(
    evaluation_id: str,
    service: EvaluationService = Depends(get_evaluation_service),
) -> Evaluation:
    """Get an evaluation by ID."""
    return await service.get(evaluation_id)


@router.put("/{evaluation_id}/categories", response_model=CategoriesUpdateResponse)
async def update_categories(
    evaluation_id: str,
    update: CategoriesUpdate,
    service: EvaluationService = Depends(get_evaluation_service),
) -> CategoriesUpdateResponse:
    """
    Merge a partial category update into an evaluation.

    Recomputes score, precise score, tier and recommendation notes from
    all categories and marks the evaluation finished.
    """
    updated = await service.update_categories(evaluation_id, update.categories)
    return CategoriesUpdateResponse(
        msg="Categories updated successfully",
        updated_evaluation=updated,
    )


@router.post("/{evaluation_id}/priority", response_model=Evaluation)
async def refresh_priority(
    evaluation_id: str,
    service: EvaluationService = Depends(get_evaluation_service),
) -> Evaluation:
    """Recompute the follow-up priority from the evaluation's age."""
    return await service.refresh_priority(evaluation_id)


@router.delete("/{evaluation_id}", response_model=MessageResponse)
async def delete_evaluation(
    evaluation_id: str,
    service: EvaluationService = Depends(get_evaluation_service),
) -> MessageResponse:
    """Delete an evaluation."""
    await service.remove(evaluation_id)
    return MessageResponse(msg="Evaluation deleted successfully")
