"""
Deterministic backend over the rule-based components.

Never touches the network and never raises for well-typed input.
"""

from collections.abc import Sequence
from datetime import date

from ..evaluator import ProposalEvaluator
from ..extractor import ProposalExtractor
from ..interpreter import RequestInterpreter
from ..models.comparison import ComparisonResult
from ..models.proposal import StructuredProposal
from ..models.request import StructuredRequest
from .base import ReconcilerBackend


class RuleBasedBackend(ReconcilerBackend):
    name = 'rules'

    def __init__(
        self,
        interpreter: RequestInterpreter | None = None,
        extractor: ProposalExtractor | None = None,
        evaluator: ProposalEvaluator | None = None,
    ):
        self.interpreter = interpreter or RequestInterpreter()
        self.extractor = extractor or ProposalExtractor()
        self.evaluator = evaluator or ProposalEvaluator()

    async def interpret_request(
        self, free_text: str, today: date | None = None
    ) -> StructuredRequest:
        return self.interpreter.interpret(free_text, today=today)

    async def extract_proposal(
        self,
        reply_text: str,
        request: StructuredRequest,
        today: date | None = None,
    ) -> StructuredProposal:
        return self.extractor.extract(reply_text, request, today=today)

    async def evaluate_proposals(
        self,
        proposals: Sequence[StructuredProposal],
        request: StructuredRequest,
    ) -> ComparisonResult:
        return self.evaluator.evaluate(proposals, request)
