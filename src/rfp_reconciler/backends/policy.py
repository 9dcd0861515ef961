"""
Try-primary-then-fallback composition of two backends.

Failure policy per operation:

    operation            config/auth failure    any other remote failure
    interpret_request    raised                 fallback
    extract_proposal     fallback               fallback
    evaluate_proposals   raised                 fallback

An empty reply never reaches either backend.
"""

from collections.abc import Awaitable, Callable, Sequence
from datetime import date
from typing import TypeVar

from ..errors import RemoteServiceError, is_surfaced
from ..logging import get_logger
from ..models.comparison import ComparisonResult
from ..models.proposal import StructuredProposal
from ..models.request import StructuredRequest
from .base import ReconcilerBackend

logger = get_logger(__name__)

T = TypeVar('T')


class FallbackBackend(ReconcilerBackend):
    """Run `primary`; on an absorbable remote failure, run `fallback`."""

    name = 'fallback'

    def __init__(self, primary: ReconcilerBackend, fallback: ReconcilerBackend):
        self.primary = primary
        self.fallback = fallback

    async def _attempt(
        self,
        operation: str,
        primary: Callable[[], Awaitable[T]],
        fallback: Callable[[], Awaitable[T]],
        surface_config_errors: bool,
    ) -> T:
        try:
            return await primary()
        except RemoteServiceError as e:
            if surface_config_errors and is_surfaced(e):
                logger.error(
                    f'{operation}.unavailable',
                    backend=self.primary.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
            logger.warning(
                f'{operation}.fallback',
                backend=self.primary.name,
                fallback=self.fallback.name,
                error=str(e),
                error_type=type(e).__name__,
            )
        return await fallback()

    async def interpret_request(
        self, free_text: str, today: date | None = None
    ) -> StructuredRequest:
        return await self._attempt(
            'request_interpretation',
            lambda: self.primary.interpret_request(free_text, today=today),
            lambda: self.fallback.interpret_request(free_text, today=today),
            surface_config_errors=True,
        )

    async def extract_proposal(
        self,
        reply_text: str,
        request: StructuredRequest,
        today: date | None = None,
    ) -> StructuredProposal:
        if not reply_text or not reply_text.strip():
            return StructuredProposal.empty(request_id=request.id)

        return await self._attempt(
            'proposal_extraction',
            lambda: self.primary.extract_proposal(reply_text, request, today=today),
            lambda: self.fallback.extract_proposal(reply_text, request, today=today),
            surface_config_errors=False,
        )

    async def evaluate_proposals(
        self,
        proposals: Sequence[StructuredProposal],
        request: StructuredRequest,
    ) -> ComparisonResult:
        return await self._attempt(
            'proposal_evaluation',
            lambda: self.primary.evaluate_proposals(proposals, request),
            lambda: self.fallback.evaluate_proposals(proposals, request),
            surface_config_errors=True,
        )
