"""Persistence interface for reviews and its SQLAlchemy implementation."""

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bench_reviews.models.review import Review
from bench_reviews.services.validation import ReviewDraft

logger = logging.getLogger(__name__)


class ConstraintViolation(Exception):
    """A storage-level constraint rejected a write.

    ``kind`` is ``"unique"`` or ``"foreign_key"``.
    """

    def __init__(self, kind: str, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind} constraint violated: {detail}")


SQLSTATE_KINDS = {
    "23505": "unique",
    "23503": "foreign_key",
}


def classify_integrity_error(exc: IntegrityError) -> str | None:
    """Map a driver IntegrityError to a constraint kind.

    PostgreSQL drivers expose the SQLSTATE (``sqlstate`` on asyncpg, ``pgcode``
    on psycopg2). SQLite has none, so its fixed "UNIQUE constraint failed" /
    "FOREIGN KEY constraint failed" prefixes are matched instead.
    """
    sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    if sqlstate:
        return SQLSTATE_KINDS.get(sqlstate)

    message = str(exc.orig).lower()
    if message.startswith("unique constraint failed"):
        return "unique"
    if message.startswith("foreign key constraint failed"):
        return "foreign_key"
    return None


class ReviewRepository(Protocol):
    async def exists(
        self, author_id: int, bench_id: int, exclude_id: int | None = None
    ) -> bool: ...

    async def add(self, draft: ReviewDraft) -> Review: ...

    async def update(self, review: Review, body: str, rating: int) -> Review: ...

    async def get(self, review_id: int) -> Review | None: ...

    async def list_for_bench(
        self, bench_id: int, limit: int = 20, offset: int = 0
    ) -> list[Review]: ...


class SqlAlchemyReviewRepository:
    """ReviewRepository backed by an AsyncSession. Each write commits."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def exists(
        self, author_id: int, bench_id: int, exclude_id: int | None = None
    ) -> bool:
        query = select(Review.id).where(
            Review.author_id == author_id,
            Review.bench_id == bench_id,
        )
        if exclude_id is not None:
            query = query.where(Review.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def add(self, draft: ReviewDraft) -> Review:
        review = Review(
            body=draft.body,
            rating=draft.rating,
            author_id=draft.author_id,
            bench_id=draft.bench_id,
        )
        self.db.add(review)
        await self._commit()
        await self.db.refresh(review)
        return review

    async def update(self, review: Review, body: str, rating: int) -> Review:
        review.body = body
        review.rating = rating
        await self._commit()
        await self.db.refresh(review)
        return review

    async def get(self, review_id: int) -> Review | None:
        result = await self.db.execute(select(Review).where(Review.id == review_id))
        return result.scalar_one_or_none()

    async def list_for_bench(
        self, bench_id: int, limit: int = 20, offset: int = 0
    ) -> list[Review]:
        result = await self.db.execute(
            select(Review)
            .where(Review.bench_id == bench_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            kind = classify_integrity_error(exc)
            if kind is None:
                raise
            logger.debug("Integrity error classified as %s: %s", kind, exc.orig)
            raise ConstraintViolation(kind, str(exc.orig)) from exc
