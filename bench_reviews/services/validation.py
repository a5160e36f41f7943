"""Review validation: structured errors and the ordered validator chain.

Every validator runs against a ``ReviewDraft`` and returns a (possibly empty)
list of errors. ``collect_errors`` runs the whole chain so callers can report
all problems at once instead of stopping at the first.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bench_reviews.repositories.review import ReviewRepository

RATING_RANGE = range(1, 6)
RATING_MESSAGE = "must be between 1 and 5"
BLANK_MESSAGE = "can't be blank"
DUPLICATE_MESSAGE = "You have already left a review for this bench."
FOREIGN_KEY_MESSAGE = "Referenced bench or author does not exist"
DUPLICATE_SCOPE = ("author_id", "bench_id")


@dataclass(frozen=True)
class ReviewError:
    """A single validation failure. ``field`` is None for entity-level errors."""

    field: str | None
    message: str

    @property
    def kind(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class PresenceError(ReviewError):
    pass


@dataclass(frozen=True)
class RangeError(ReviewError):
    allowed: range = RATING_RANGE


@dataclass(frozen=True)
class DuplicateError(ReviewError):
    scope: tuple[str, ...] = DUPLICATE_SCOPE


@dataclass(frozen=True)
class ForeignKeyViolation(ReviewError):
    pass


def duplicate_error() -> DuplicateError:
    return DuplicateError(field=None, message=DUPLICATE_MESSAGE)


class ReviewValidationError(Exception):
    """Raised when a review cannot be saved. Carries every collected error."""

    def __init__(self, errors: list[ReviewError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field or 'base'}: {e.message}" for e in self.errors))


@dataclass
class ReviewDraft:
    """Unsaved review values. ``id`` is set when the draft mirrors a stored review."""

    body: str | None
    rating: int | None
    author_id: int | None
    bench_id: int | None
    id: int | None = None


Validator = Callable[["ReviewDraft", "ReviewRepository"], Awaitable[list[ReviewError]]]


async def validate_body_presence(draft: ReviewDraft, repository: "ReviewRepository") -> list[ReviewError]:
    if draft.body is None or not draft.body.strip():
        return [PresenceError(field="body", message=BLANK_MESSAGE)]
    return []


async def validate_rating_range(draft: ReviewDraft, repository: "ReviewRepository") -> list[ReviewError]:
    rating = draft.rating
    # bool is an int subclass; True must not pass as a rating of 1
    if isinstance(rating, bool) or not isinstance(rating, int) or rating not in RATING_RANGE:
        return [RangeError(field="rating", message=RATING_MESSAGE)]
    return []


async def validate_not_a_duplicate(draft: ReviewDraft, repository: "ReviewRepository") -> list[ReviewError]:
    if draft.author_id is None or draft.bench_id is None:
        return []
    if await repository.exists(draft.author_id, draft.bench_id, exclude_id=draft.id):
        return [duplicate_error()]
    return []


async def validate_references_present(draft: ReviewDraft, repository: "ReviewRepository") -> list[ReviewError]:
    errors: list[ReviewError] = []
    if draft.author_id is None:
        errors.append(PresenceError(field="author_id", message=BLANK_MESSAGE))
    if draft.bench_id is None:
        errors.append(PresenceError(field="bench_id", message=BLANK_MESSAGE))
    return errors


REVIEW_VALIDATORS: tuple[Validator, ...] = (
    validate_body_presence,
    validate_rating_range,
    validate_not_a_duplicate,
    validate_references_present,
)


async def collect_errors(
    draft: ReviewDraft,
    repository: "ReviewRepository",
    validators: tuple[Validator, ...] = REVIEW_VALIDATORS,
) -> list[ReviewError]:
    """Run every validator in order and return all errors found."""
    errors: list[ReviewError] = []
    for validator in validators:
        errors.extend(await validator(draft, repository))
    return errors
