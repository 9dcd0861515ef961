"""Request interpretation endpoint."""

import structlog
from fastapi import APIRouter, HTTPException, Request

from ...errors import AIAuthError, AIConfigError, ValidationError
from ...models.base import WireModel
from ...models.request import StructuredRequest
from .errors import service_unavailable

logger = structlog.get_logger(__name__)

router = APIRouter()


class CreateRequestBody(WireModel):
    description: str


@router.post("/requests", response_model=StructuredRequest, status_code=201)
async def create_request(body: CreateRequestBody, request: Request):
    """Interpret free text into a StructuredRequest; persisting it is the caller's job."""
    pipeline = request.app.state.pipeline
    try:
        return await pipeline.create_request(body.description)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"error": e.message})
    except (AIConfigError, AIAuthError) as e:
        logger.error("requests.ai_unavailable", error=str(e), code=e.code)
        raise service_unavailable(e)
