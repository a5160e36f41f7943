"""Review endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bench_reviews.config import settings
from bench_reviews.database import get_db
from bench_reviews.repositories.review import SqlAlchemyReviewRepository
from bench_reviews.schemas.review import (
    ReviewCreate,
    ReviewErrorResponse,
    ReviewResponse,
    ReviewUpdate,
)
from bench_reviews.services import review as review_service
from bench_reviews.services.validation import ReviewDraft

router = APIRouter(tags=["reviews"])

_error_responses = {422: {"model": ReviewErrorResponse}}


def get_review_repository(db: AsyncSession = Depends(get_db)) -> SqlAlchemyReviewRepository:
    return SqlAlchemyReviewRepository(db)


@router.post(
    "/benches/{bench_id}/reviews",
    response_model=ReviewResponse,
    status_code=201,
    responses=_error_responses,
)
async def submit_review(
    bench_id: int,
    data: ReviewCreate,
    repository: SqlAlchemyReviewRepository = Depends(get_review_repository),
) -> ReviewResponse:
    """Leave a review on a bench."""
    draft = ReviewDraft(
        body=data.body,
        rating=data.rating,
        author_id=data.author_id,
        bench_id=bench_id,
    )
    review = await review_service.validate_and_save(repository, draft)
    return ReviewResponse.model_validate(review)


@router.get("/benches/{bench_id}/reviews", response_model=list[ReviewResponse])
async def get_bench_reviews(
    bench_id: int,
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    repository: SqlAlchemyReviewRepository = Depends(get_review_repository),
) -> list[ReviewResponse]:
    """Get reviews for a bench, newest first."""
    limit = min(limit, settings.review_page_size_max)
    reviews = await review_service.list_reviews_for_bench(repository, bench_id, limit, offset)
    return [ReviewResponse.model_validate(r) for r in reviews]


@router.get("/reviews/{review_id}", response_model=ReviewResponse)
async def get_review(
    review_id: int,
    repository: SqlAlchemyReviewRepository = Depends(get_review_repository),
) -> ReviewResponse:
    review = await review_service.get_review(repository, review_id)
    return ReviewResponse.model_validate(review)


@router.patch("/reviews/{review_id}", response_model=ReviewResponse, responses=_error_responses)
async def update_review(
    review_id: int,
    data: ReviewUpdate,
    repository: SqlAlchemyReviewRepository = Depends(get_review_repository),
) -> ReviewResponse:
    """Change the body and/or rating of a review."""
    review = await review_service.update_review(repository, review_id, data.body, data.rating)
    return ReviewResponse.model_validate(review)
