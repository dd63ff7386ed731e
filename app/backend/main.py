"""
FastAPI application for the contract analyzer.

Provides endpoints for:
- Purchasing access through Stripe Checkout
- Verifying a completed Checkout session
- Asking questions about an uploaded contract (OpenAI)
- Serving the single-page frontend
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from . import __version__
from .config import get_settings
from .exceptions import ContractAnalyzerError
from .models import ErrorResponse, HealthResponse
from .routers import checkout, query
from .services import (
    configure_stripe_http_client,
    get_answer_service,
    get_document_service,
    get_payment_service,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).resolve().parent.parent / "frontend"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Contract Analyzer...")
    settings = get_settings()
    if settings.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    # Initialize services on startup
    get_document_service()
    configure_stripe_http_client(settings.stripe_timeout)
    if not get_payment_service().api_key:
        logger.warning("STRIPE_SECRET_KEY not set: checkout endpoints will fail")
    if not get_answer_service().api_key:
        logger.warning("OPENAI_API_KEY not set: questions cannot be answered")
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down Contract Analyzer...")


# Create FastAPI application
app = FastAPI(
    title="Contract Analyzer API",
    description="Pay once, upload a contract and ask questions about it",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(ContractAnalyzerError)
async def contract_analyzer_error_handler(request: Request, exc: ContractAnalyzerError):
    """Render pipeline errors as {"error", "details"} bodies."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    body = ErrorResponse(error=exc.message, details=exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


# =============================================================================
# Health Endpoint
# =============================================================================


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", message="Service is healthy", version=__version__)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(checkout.router)
app.include_router(query.router)


# =============================================================================
# Frontend (registered last so API routes take precedence)
# =============================================================================


@app.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str) -> FileResponse:
    """Serve a frontend asset, or index.html for any other path."""
    root = FRONTEND_DIR.resolve()
    candidate = (root / full_path).resolve()
    if full_path and candidate.is_relative_to(root) and candidate.is_file():
        return FileResponse(candidate)
    return FileResponse(root / "index.html")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
