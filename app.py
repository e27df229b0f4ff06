from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import logging

import httpx
from pydantic import ValidationError

from lexiclear.config import Settings
from lexiclear.explainer import ExplanationError, ExplanationService
from lexiclear.fallback import GENERIC_EXPLANATION, known_terms
from lexiclear.gemini_client import GeminiClient
from lexiclear.logger import setup_logger
from lexiclear.memory_cache import DocumentCache, TermCache
from lexiclear.models import (
    ErrorResponse, ExplainRequest, ExplainResponse, SimplifyRequest,
    SimplifyResponse, StatusReport, TermsResponse,
)
from lexiclear.openai_client import OpenAIClient
from lexiclear.simplifier import SimplificationError, SimplificationService
from lexiclear.status import check_api_status

logger = logging.getLogger("lexiclear.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler - runs on startup and shutdown."""
    # Startup: settings, caches and the shared HTTP client
    settings = Settings.from_env()
    setup_logger(settings.log_level)

    app.state.settings = settings
    app.state.explanation_cache = TermCache(settings.cache_ttl, settings.cache_ttl_jitter)
    app.state.simplification_cache = DocumentCache(settings.cache_ttl, settings.cache_ttl_jitter)
    app.state.http_client = build_http_client()

    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set; explanations will use fallback content")
    if not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY not set; simplification will return placeholders")

    yield

    # Shutdown
    await app.state.http_client.aclose()


app = FastAPI(
    title="LexiClear",
    description="Plain-English explanations of legal terms and documents",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(ExplanationError)
async def explanation_error_handler(_: Request, exc: ExplanationError) -> JSONResponse:
    body = ErrorResponse(error=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(SimplificationError)
async def simplification_error_handler(_: Request, exc: SimplificationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def build_http_client() -> httpx.AsyncClient:
    """Shared upstream client. Per-call deadlines come from Settings via asyncio.wait_for."""
    return httpx.AsyncClient(timeout=None)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_explanation_service(
    request: Request,
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> ExplanationService:
    client: Optional[OpenAIClient] = None
    if settings.openai_api_key:
        client = OpenAIClient(settings.openai_api_key, http_client, settings.openai_base_url)
    return ExplanationService(request.app.state.explanation_cache, settings, client)


def get_simplification_service(
    request: Request,
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> SimplificationService:
    client: Optional[GeminiClient] = None
    if settings.google_api_key:
        client = GeminiClient(settings.google_api_key, http_client, settings.gemini_base_url)
    return SimplificationService(request.app.state.simplification_cache, settings, client)


@app.get("/")
def read_root():
    return {
        "message": "LexiClear API",
        "docs": "/docs",
        "endpoints": {
            "explain": "/explain",
            "simplify": "/simplify",
            "check_status": "/check-status",
            "terms": "/terms",
        }
    }


@app.post("/explain", response_model=ExplainResponse)
async def explain_term(
    request: Request,
    service: ExplanationService = Depends(get_explanation_service)
) -> ExplainResponse:
    """
    Explain a legal term in plain English.

    Body:
        {"term": "..."}

    Returns:
        {"result": {"definition", "example", "implications"}}

    Errors:
        400 when the term is empty; 401/5xx/upstream status when the
        OpenAI API rejects the request or the key is malformed.
    """
    try:
        body = ExplainRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        logger.error("Could not decode /explain request body")
        return ExplainResponse(result=GENERIC_EXPLANATION)

    explanation = await service.explain(body.term)
    return ExplainResponse(result=explanation)


@app.post("/simplify", response_model=SimplifyResponse)
async def simplify_document(
    request: Request,
    service: SimplificationService = Depends(get_simplification_service)
) -> SimplifyResponse:
    """
    Rewrite a legal document in plain English.

    A body that is not JSON or has no usable "text" string is answered
    with 400 {"error": "No text provided"}.
    """
    try:
        body = SimplifyRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        logger.error("Could not decode /simplify request body")
        raise SimplificationError("No text provided", 400)

    simplified = await service.simplify(body.text)
    return SimplifyResponse(simplified=simplified)


@app.get("/check-status", response_model=StatusReport)
async def check_status(
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client)
) -> StatusReport:
    """Diagnose the configured OpenAI API key."""
    return await check_api_status(
        settings.openai_api_key,
        http_client,
        settings.openai_base_url,
        settings.status_timeout,
    )


@app.get("/terms", response_model=TermsResponse)
def list_terms() -> TermsResponse:
    """Terms with hand-written explanations."""
    return TermsResponse(terms=known_terms())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=8000)
