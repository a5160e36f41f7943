"""Pydantic v2 schemas for Reviews.

Request schemas are deliberately loose: body and rating are optional and
unbounded here so the review validators report problems in one envelope.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

from bench_reviews.services.validation import ReviewError

# Strict members stop pydantic coercing true, 5.0 or "4" into an int.
RawRating = StrictInt | StrictBool | StrictFloat | StrictStr | None


class ReviewCreate(BaseModel):
    author_id: int
    body: str | None = Field(None, max_length=10_000)
    rating: RawRating = None


class ReviewUpdate(BaseModel):
    body: str | None = Field(None, max_length=10_000)
    rating: RawRating = None


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    bench_id: int
    author_id: int
    body: str
    rating: int
    created_at: datetime
    updated_at: datetime


class ReviewErrorDetail(BaseModel):
    kind: str
    field: str | None
    message: str

    @classmethod
    def from_error(cls, error: ReviewError) -> "ReviewErrorDetail":
        return cls(kind=error.kind, field=error.field, message=error.message)


class ReviewErrorResponse(BaseModel):
    detail: str = "Review is invalid"
    errors: list[ReviewErrorDetail]
