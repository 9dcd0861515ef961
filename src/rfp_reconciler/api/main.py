"""FastAPI application for the RFP reconciler service."""

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request

from ..backends import FallbackBackend, RemoteBackend, RuleBasedBackend
from ..clients.openai_client import OpenAIClient
from ..errors import AIConfigError
from ..logging import configure_logging, logging_context
from ..pipeline import ProcurementPipeline
from .config import get_settings
from .routes.health import router as health_router
from .routes.proposals import router as proposals_router
from .routes.requests import router as requests_router

logger = structlog.get_logger(__name__)

TRACE_HEADER = "X-Trace-Id"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the pipeline at startup, close the OpenAI client at shutdown."""
    settings = get_settings()
    configure_logging(json_output=settings.LOG_JSON, log_level=settings.LOG_LEVEL)

    openai: OpenAIClient | None
    try:
        openai = OpenAIClient(
            api_key=settings.OPENAI_API_KEY,
            chat_model=settings.OPENAI_CHAT_MODEL,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
        )
    except AIConfigError:
        # Extraction still works; interpretation and comparison answer 503
        logger.warning("lifespan.openai_unconfigured")
        openai = None

    app.state.pipeline = ProcurementPipeline(
        FallbackBackend(primary=RemoteBackend(openai), fallback=RuleBasedBackend())
    )
    app.state.openai = openai

    logger.info("lifespan.ready", remote_configured=openai is not None)
    yield

    logger.info("lifespan.shutdown")
    await app.state.pipeline.close()


app = FastAPI(
    title="rfp-reconciler",
    description="Turns procurement requests and vendor replies into ranked proposals.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(requests_router)
app.include_router(proposals_router)


@app.middleware("http")
async def trace_requests(request: Request, call_next):
    """Bind a trace id to every log line of the request and echo it back."""
    trace_id = request.headers.get(TRACE_HEADER) or uuid.uuid4().hex
    with logging_context(trace_id=trace_id):
        response = await call_next(request)
    response.headers[TRACE_HEADER] = trace_id
    return response
