"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bench_reviews.config import settings
from bench_reviews.routers import reviews
from bench_reviews.schemas.review import ReviewErrorDetail, ReviewErrorResponse
from bench_reviews.services.review import ReviewNotFoundError
from bench_reviews.services.validation import ReviewValidationError

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Bench Reviews",
    description="Ratings and comments left by users on benches",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reviews.router)


@app.exception_handler(ReviewValidationError)
async def review_validation_error_handler(request: Request, exc: ReviewValidationError) -> JSONResponse:
    logger.info("Rejected review on %s %s: %s", request.method, request.url.path, exc)
    body = ReviewErrorResponse(errors=[ReviewErrorDetail.from_error(e) for e in exc.errors])
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(ReviewNotFoundError)
async def review_not_found_handler(request: Request, exc: ReviewNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": "Review not found"})


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}
