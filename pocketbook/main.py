"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pocketbook.api import auth, categories, groups, transactions, users
from pocketbook.config import get_settings
from pocketbook.database import init_db

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    logger.info(f"Started in {settings.environment} mode")
    yield


app = FastAPI(
    title="Pocketbook API",
    description="Personal finance bookkeeping with categories, transactions and groups",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def describe_validation_errors(errors: list[dict]) -> str:
    """Pick the message for the most basic problem in a request body."""
    if any(error["type"] == "missing" for error in errors):
        return "Some parameter is missing"
    if any(error["type"] == "empty_parameter" for error in errors):
        return "Some parameter is an empty string"
    for error in errors:
        if any("email" in str(part) for part in error["loc"]):
            return "Invalid email format"
    return errors[0]["msg"] if errors else "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 with a single readable message."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": describe_validation_errors(exc.errors())},
    )


# Register routers
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(transactions.router)
app.include_router(users.router)
app.include_router(groups.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
