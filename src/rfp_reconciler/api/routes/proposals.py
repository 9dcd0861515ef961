"""Proposal extraction and comparison endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import Field

from ...errors import AIAuthError, AIConfigError, InsufficientProposalsError
from ...models.base import WireModel
from ...models.comparison import ComparisonResult
from ...models.proposal import StructuredProposal
from ...models.request import StructuredRequest
from .errors import service_unavailable

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/proposals")


class ExtractProposalBody(WireModel):
    request: StructuredRequest
    vendor_id: str = Field(..., min_length=1)
    raw_content: str
    sender: str | None = None
    subject: str | None = None


class CompareProposalsBody(WireModel):
    request: StructuredRequest
    proposals: list[StructuredProposal]


@router.post("/extract")
async def extract_proposal(body: ExtractProposalBody, request: Request):
    """Reconcile a vendor reply. Always answers with a proposal, even a degraded one."""
    result = await request.app.state.pipeline.ingest_reply(
        body.raw_content,
        body.request,
        vendor_id=body.vendor_id,
        sender=body.sender,
        subject=body.subject,
    )
    return result.to_dict()


@router.post("/compare", response_model=ComparisonResult)
async def compare_proposals(body: CompareProposalsBody, request: Request):
    """Score and rank the eligible proposals for a request."""
    pipeline = request.app.state.pipeline
    try:
        return await pipeline.compare(body.request, body.proposals)
    except InsufficientProposalsError as e:
        raise HTTPException(
            status_code=400,
            detail={"error": e.message, "currentCount": e.context.get("current_count", 0)},
        )
    except (AIConfigError, AIAuthError) as e:
        logger.error("proposals.compare_ai_unavailable", error=str(e), code=e.code)
        raise service_unavailable(e)
