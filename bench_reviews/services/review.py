"""Review business logic."""

import logging
from dataclasses import replace

from bench_reviews.models.review import Review
from bench_reviews.repositories.review import ConstraintViolation, ReviewRepository
from bench_reviews.services.validation import (
    FOREIGN_KEY_MESSAGE,
    ForeignKeyViolation,
    ReviewDraft,
    ReviewError,
    ReviewValidationError,
    collect_errors,
    duplicate_error,
)

logger = logging.getLogger(__name__)


class ReviewNotFoundError(Exception):
    def __init__(self, review_id: int) -> None:
        self.review_id = review_id
        super().__init__(f"Review {review_id} not found")


def _constraint_error(violation: ConstraintViolation) -> ReviewError:
    if violation.kind == "unique":
        return duplicate_error()
    return ForeignKeyViolation(field=None, message=FOREIGN_KEY_MESSAGE)


async def validate_and_save(repository: ReviewRepository, draft: ReviewDraft) -> Review:
    """Validate a new review and persist it.

    All validators run before anything is written; if any fail, a
    ReviewValidationError carrying every error is raised and the store is left
    untouched. A unique-index violation at write time (two submissions racing
    past the existence check) is reported as the same duplicate error.
    """
    errors = await collect_errors(draft, repository)
    if errors:
        raise ReviewValidationError(errors)

    try:
        review = await repository.add(draft)
    except ConstraintViolation as violation:
        logger.warning(
            "Review write rejected by %s constraint (author %s, bench %s)",
            violation.kind, draft.author_id, draft.bench_id,
        )
        raise ReviewValidationError([_constraint_error(violation)]) from violation

    logger.info("Review %s saved for bench %s by author %s", review.id, review.bench_id, review.author_id)
    return review


async def update_review(
    repository: ReviewRepository,
    review_id: int,
    body: str | None = None,
    rating: int | None = None,
) -> Review:
    """Change body and/or rating of an existing review, re-running validation."""
    review = await get_review(repository, review_id)

    draft = ReviewDraft(
        body=review.body,
        rating=review.rating,
        author_id=review.author_id,
        bench_id=review.bench_id,
        id=review.id,
    )
    if body is not None:
        draft = replace(draft, body=body)
    if rating is not None:
        draft = replace(draft, rating=rating)

    errors = await collect_errors(draft, repository)
    if errors:
        raise ReviewValidationError(errors)

    try:
        review = await repository.update(review, draft.body, draft.rating)
    except ConstraintViolation as violation:
        logger.warning("Review %s update rejected by %s constraint", review_id, violation.kind)
        raise ReviewValidationError([_constraint_error(violation)]) from violation

    logger.info("Review %s updated", review_id)
    return review


async def get_review(repository: ReviewRepository, review_id: int) -> Review:
    review = await repository.get(review_id)
    if review is None:
        raise ReviewNotFoundError(review_id)
    return review


async def list_reviews_for_bench(
    repository: ReviewRepository, bench_id: int, limit: int = 20, offset: int = 0
) -> list[Review]:
    """Reviews left on a bench, newest first."""
    return await repository.list_for_bench(bench_id, limit, offset)
