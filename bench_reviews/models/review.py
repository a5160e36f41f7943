"""Review model: one rating and comment per author per bench."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bench_reviews.database import Base
from bench_reviews.models.bench import Bench  # noqa: F401 (relationship target)
from bench_reviews.models.user import User  # noqa: F401 (relationship target)


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        Index("ix_reviews_bench_id_author_id", "bench_id", "author_id", unique=True),
        Index("ix_reviews_author_id", "author_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    # No single-column index on bench_id: the composite index leads with it.
    bench_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("benches.id"), nullable=False
    )
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    bench = relationship("Bench", backref="reviews", lazy="selectin")
    author = relationship("User", backref="reviews", lazy="selectin")
