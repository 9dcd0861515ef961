"""
Pipeline facade over a reconciliation backend.

Provides the three entry points used by the HTTP layer and scripts:
1. create_request: buyer description -> StructuredRequest
2. ingest_reply: vendor reply -> StructuredProposal + stored status
3. compare: eligible proposals -> ComparisonResult

The pipeline holds no per-request state; concurrent calls for different
requests are independent.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .backends import ReconcilerBackend, build_default_backend
from .backends.remote import RemoteBackend
from .errors import InsufficientProposalsError, ValidationError
from .logging import PipelineTimer, get_logger, logging_context
from .models.comparison import ComparisonResult
from .models.proposal import (
    ProposalStatus,
    StructuredProposal,
    derive_status,
    eligible_for_comparison,
)
from .models.request import StructuredRequest

logger = get_logger(__name__)

MIN_PROPOSALS_TO_COMPARE = 2


@dataclass
class ProposalIngestResult:
    """Outcome of reconciling one vendor reply."""

    proposal: StructuredProposal
    status: ProposalStatus
    sender: str | None = None
    subject: str | None = None
    processing_time_ms: int | None = None
    stage_timings: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'proposal': self.proposal.model_dump(by_alias=True, mode='json'),
            'status': self.status.value,
            'sender': self.sender,
            'subject': self.subject,
            'processingTimeMs': self.processing_time_ms,
            'stageTimings': self.stage_timings,
        }


class ProcurementPipeline:
    """
    End-to-end reconciliation entry points.

    Usage:
        pipeline = ProcurementPipeline.from_env()
        request = await pipeline.create_request("I need 20 laptops ...")
        result = await pipeline.ingest_reply(reply_text, request, vendor_id="v1")
        comparison = await pipeline.compare(request, [p1, p2])
    """

    def __init__(self, backend: ReconcilerBackend):
        self.backend = backend

    @classmethod
    def from_env(cls) -> ProcurementPipeline:
        """OpenAI-first pipeline with the rule-based fallback."""
        return cls(build_default_backend())

    async def close(self) -> None:
        """Close the remote client, if the backend holds one."""
        for backend in (self.backend, getattr(self.backend, 'primary', None)):
            if isinstance(backend, RemoteBackend) and backend.openai is not None:
                await backend.openai.close()

    async def create_request(
        self, description: str, today: date | None = None
    ) -> StructuredRequest:
        """
        Interpret a buyer's description.

        Raises:
            ValidationError: If the description is blank
            AIConfigError / AIAuthError: If the remote service is unusable
        """
        if not description or not description.strip():
            raise ValidationError('Description is required')

        timer = PipelineTimer()
        with timer.stage('interpretation'):
            request = await self.backend.interpret_request(description, today=today)

        logger.info(
            'pipeline.request_created',
            item_count=len(request.items),
            budget=request.budget,
            **timer.summary(),
        )
        return request

    async def ingest_reply(
        self,
        reply_text: str,
        request: StructuredRequest,
        vendor_id: str,
        sender: str | None = None,
        subject: str | None = None,
        today: date | None = None,
    ) -> ProposalIngestResult:
        """
        Reconcile a vendor reply against its request.

        Never raises for remote failures: extraction always has the
        rule-based path. Sender and subject are kept for bookkeeping only.
        """
        timer = PipelineTimer()

        with logging_context(request_id=request.id, vendor_id=vendor_id):
            with timer.stage('extraction'):
                extracted = await self.backend.extract_proposal(reply_text, request, today=today)

            proposal = extracted.model_copy(
                update={'request_id': request.id, 'vendor_id': vendor_id}
            )
            status = derive_status(proposal)

            logger.info(
                'pipeline.reply_ingested',
                status=status.value,
                parse_error=proposal.parse_error.value if proposal.parse_error else None,
                sender=sender,
                **timer.summary(),
            )

        return ProposalIngestResult(
            proposal=proposal,
            status=status,
            sender=sender,
            subject=subject,
            processing_time_ms=int(timer.total_ms),
            stage_timings=timer.stages.copy(),
        )

    async def compare(
        self,
        request: StructuredRequest,
        proposals: Sequence[StructuredProposal],
    ) -> ComparisonResult:
        """
        Compare the eligible proposals for a request.

        Raises:
            InsufficientProposalsError: If fewer than two proposals are eligible
            AIConfigError / AIAuthError: If the remote service is unusable
        """
        eligible = eligible_for_comparison(list(proposals))
        if len(eligible) < MIN_PROPOSALS_TO_COMPARE:
            raise InsufficientProposalsError(
                'Need at least 2 proposals to compare',
                context={'current_count': len(eligible), 'received': len(proposals)},
            )

        timer = PipelineTimer()
        with logging_context(request_id=request.id):
            with timer.stage('evaluation'):
                result = await self.backend.evaluate_proposals(eligible, request)

            logger.info(
                'pipeline.comparison_complete',
                proposal_count=len(eligible),
                source=result.source,
                recommended=result.recommendation.recommended_proposal_ref,
                **timer.summary(),
            )
        return result
