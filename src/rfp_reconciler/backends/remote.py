"""
Backend that delegates reasoning to the OpenAI chat API.

Every response must be a JSON object in the documented shape. Anything the
model returns is validated into our models; a response that does not
validate is a RemoteResponseError, which callers treat like any other
remote failure.
"""

from collections.abc import Sequence
from datetime import date
from typing import Any, TypeVar

import pydantic

from .. import catalogs
from ..clients.openai_client import OpenAIClient
from ..config import config
from ..errors import AIConfigError, RemoteResponseError
from ..evaluator import proposal_refs
from ..logging import get_logger
from ..models.base import WireModel
from ..models.comparison import ComparisonResult, rank_by_score
from ..models.proposal import ParseError, StructuredProposal
from ..models.request import StructuredRequest
from ..prompts import (
    build_comparison_prompt,
    build_extraction_prompt,
    build_interpret_prompt,
)
from .base import ReconcilerBackend

logger = get_logger(__name__)

M = TypeVar('M', bound=WireModel)


def _validate(model: type[M], data: dict[str, Any]) -> M:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise RemoteResponseError(
            f'Remote {model.__name__} failed validation',
            context={'errors': e.error_count(), 'first_error': str(e.errors()[0]['msg'])},
        ) from e


class RemoteBackend(ReconcilerBackend):
    """
    OpenAI-backed reconciliation.

    Constructed without a client (no API key configured), every operation
    raises AIConfigError.
    """

    name = 'remote'

    def __init__(
        self,
        openai_client: OpenAIClient | None,
        raw_content_prefix_chars: int | None = None,
    ):
        self.openai = openai_client
        self.raw_content_prefix_chars = (
            raw_content_prefix_chars
            if raw_content_prefix_chars is not None
            else config.RAW_CONTENT_PREFIX_CHARS
        )

    @classmethod
    def from_env(cls) -> 'RemoteBackend':
        """Build from OPENAI_* settings; unconfigured yields a client-less backend."""
        try:
            return cls(OpenAIClient())
        except AIConfigError:
            logger.warning('remote_backend.unconfigured')
            return cls(None)

    def _client(self) -> OpenAIClient:
        if self.openai is None:
            raise AIConfigError('AI_CONFIG_ERROR: OPENAI_API_KEY not configured')
        return self.openai

    async def interpret_request(
        self, free_text: str, today: date | None = None
    ) -> StructuredRequest:
        data = await self._client().chat_completion_json(
            build_interpret_prompt(free_text, today=today)
        )
        data.setdefault('title', catalogs.DEFAULT_REQUEST_TITLE)
        data.setdefault('description', free_text)
        data.pop('id', None)

        request = _validate(StructuredRequest, data)
        logger.info('request_interpretation.remote', item_count=len(request.items))
        return request

    async def extract_proposal(
        self,
        reply_text: str,
        request: StructuredRequest,
        today: date | None = None,
    ) -> StructuredProposal:
        data = await self._client().chat_completion_json(
            build_extraction_prompt(reply_text, request, today=today)
        )
        parsed = _validate(StructuredProposal, data)

        # The model's own flags are not trusted where we can check them
        total_price = parsed.total_price
        if total_price is None and parsed.item_prices:
            total_price = sum(p.total_price for p in parsed.item_prices)
        is_complete = (
            parsed.is_complete
            and total_price is not None
            and parsed.delivery_date is not None
        )

        proposal = parsed.model_copy(
            update={
                'request_id': request.id,
                'vendor_id': None,
                'total_price': total_price,
                'is_complete': is_complete,
                'parse_error': ParseError.INSUFFICIENT_DATA if total_price is None else None,
                'raw_content': reply_text,
            }
        )
        logger.info(
            'proposal_extraction.remote',
            has_total=total_price is not None,
            items_priced=len(proposal.item_prices),
            is_complete=is_complete,
        )
        return proposal

    async def evaluate_proposals(
        self,
        proposals: Sequence[StructuredProposal],
        request: StructuredRequest,
    ) -> ComparisonResult:
        refs = proposal_refs(proposals)
        data = await self._client().chat_completion_json(
            build_comparison_prompt(
                proposals, refs, request, prefix_chars=self.raw_content_prefix_chars
            )
        )
        result = _validate(ComparisonResult, data)
        if not result.analysis:
            raise RemoteResponseError('Remote comparison returned no analysis')

        # Exactly one analysis per input proposal
        returned = [a.proposal_ref for a in result.analysis]
        if sorted(returned) != sorted(refs):
            raise RemoteResponseError(
                'Remote comparison refs do not match the proposals',
                context={'expected': refs, 'returned': returned},
            )

        analyses = []
        for analysis in result.analysis:
            total = analysis.score_breakdown.total
            if analysis.score != total:
                logger.warning(
                    'proposal_evaluation.remote_score_mismatch',
                    proposal_ref=analysis.proposal_ref,
                    score=analysis.score,
                    breakdown_total=total,
                )
                analysis = analysis.model_copy(update={'score': total})
            analyses.append(analysis)

        ranked = rank_by_score(analyses)
        recommendation = result.recommendation.model_copy(
            update={'recommended_proposal_ref': ranked[0].proposal_ref}
        )
        logger.info(
            'proposal_evaluation.remote',
            proposal_count=len(proposals),
            top_ref=ranked[0].proposal_ref,
        )
        return result.model_copy(
            update={'analysis': ranked, 'recommendation': recommendation, 'source': 'remote'}
        )
