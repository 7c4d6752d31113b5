"""
Review Board Backend — Review Route Handlers
=============================================

What:  GET/POST /reviews and DELETE /delete-review.
How:   Each handler receives a validated request model from FastAPI,
       delegates to ReviewService and returns a response model.
       Errors are raised, never returned: the global handlers in main.py
       turn them into JSON error bodies with the right status code.

Any other method on these paths gets Starlette's 405, rendered by the
same global handlers. OPTIONS never reaches this module; the CORS
middleware answers it.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request

from reviewboard.schemas.review import (
    CreateReviewResponse,
    ErrorResponse,
    ReviewCreate,
    ReviewDelete,
    ReviewResponse,
    SuccessResponse,
)
from reviewboard.services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reviews"])


def get_review_service(request: Request) -> ReviewService:
    """FastAPI dependency: the ReviewService attached to the app by create_app()."""
    return request.app.state.review_service


@router.get(
    "/reviews",
    response_model=List[ReviewResponse],
    responses={500: {"description": "Storage failure", "model": ErrorResponse}},
    summary="List all reviews",
)
async def list_reviews(
    service: ReviewService = Depends(get_review_service),
) -> List[ReviewResponse]:
    return await service.list_reviews()


@router.post(
    "/reviews",
    response_model=CreateReviewResponse,
    responses={
        400: {"description": "Invalid payload or rating outside 1..5", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Submit a new review",
)
async def create_review(
    payload: ReviewCreate,
    service: ReviewService = Depends(get_review_service),
) -> CreateReviewResponse:
    """
    Create a review and return its assigned id.

    Responds 200 (not 201) with {"success": true, "id": <int>}.
    """
    review_id = await service.create_review(payload)
    return CreateReviewResponse(success=True, id=review_id)


@router.delete(
    "/delete-review",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Invalid payload", "model": ErrorResponse},
        404: {"description": "No review with that id", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Delete a review by id",
)
async def delete_review(
    payload: ReviewDelete,
    service: ReviewService = Depends(get_review_service),
) -> SuccessResponse:
    await service.delete_review(payload.id)
    return SuccessResponse(success=True)
