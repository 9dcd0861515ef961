"""
The reconciliation backend interface.

A backend implements the three reconciliation operations. Variants:
- RuleBasedBackend: deterministic pattern tables, no network
- RemoteBackend: delegates to the OpenAI chat API
- FallbackBackend: tries one backend, falls back to another
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import date

from ..models.comparison import ComparisonResult
from ..models.proposal import StructuredProposal
from ..models.request import StructuredRequest


class ReconcilerBackend(ABC):
    """Free text -> request, reply -> proposal, proposals -> comparison."""

    name: str = 'backend'

    @abstractmethod
    async def interpret_request(
        self, free_text: str, today: date | None = None
    ) -> StructuredRequest:
        """Turn a buyer's description into a StructuredRequest."""

    @abstractmethod
    async def extract_proposal(
        self,
        reply_text: str,
        request: StructuredRequest,
        today: date | None = None,
    ) -> StructuredProposal:
        """Turn a vendor reply into a StructuredProposal for `request`."""

    @abstractmethod
    async def evaluate_proposals(
        self,
        proposals: Sequence[StructuredProposal],
        request: StructuredRequest,
    ) -> ComparisonResult:
        """Score, rank and recommend among `proposals`."""
