"""
Rule-based proposal evaluator.

Scores each proposal out of 100 against the request:

    price         0-40  budget ratio (0-20) + position in the batch (0-20)
    delivery      0-25  days early/late against the deadline
    warranty      0-15  length of cover
    terms         0-10  payment terms
    completeness  0-10  complete proposal or not

then checks compliance, derives pros/cons from fixed thresholds, ranks the
batch (stable on ties) and recommends the top-ranked proposal.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from . import catalogs
from .logging import get_logger
from .models.comparison import (
    Compliance,
    ComplianceLevel,
    ComparisonResult,
    ProposalAnalysis,
    Recommendation,
    ScoreBreakdown,
    rank_by_score,
    ranking_order,
)
from .models.proposal import StructuredProposal
from .models.request import StructuredRequest
from .utils import round_half_up

logger = get_logger(__name__)

DEFAULT_CONSIDERATION = 'Review final terms before acceptance'


@dataclass(frozen=True)
class PriceRange:
    """Lowest/highest total price among the priced proposals of a batch."""

    lowest: float | None
    highest: float | None
    count: int

    @classmethod
    def of(cls, proposals: Sequence[StructuredProposal]) -> 'PriceRange':
        prices = [p.total_price for p in proposals if p.total_price is not None]
        if not prices:
            return cls(None, None, 0)
        return cls(min(prices), max(prices), len(prices))


def proposal_refs(proposals: Sequence[StructuredProposal]) -> list[str]:
    """Vendor IDs, or 1-based positional refs for proposals without one."""
    return [p.proposal_ref or f'proposal-{i}' for i, p in enumerate(proposals, 1)]


# =============================================================================
# Category scores
# =============================================================================


def budget_ratio_score(price: float, budget: float | None) -> int:
    ratio = price / budget if budget else 0.0
    for max_ratio, points in catalogs.BUDGET_RATIO_STEPS:
        if ratio <= max_ratio:
            return points
    return catalogs.BUDGET_RATIO_FLOOR


def relative_price_score(price: float, prices: PriceRange) -> int:
    if prices.count > 1 and prices.highest > prices.lowest:
        position = (prices.highest - price) / (prices.highest - prices.lowest)
        return round_half_up(position * catalogs.RELATIVE_PRICE_MAX)
    return catalogs.RELATIVE_PRICE_MAX


def price_score(price: float | None, budget: float | None, prices: PriceRange) -> int:
    if price is None:
        return 0
    budget_points = budget_ratio_score(price, budget)
    relative_points = relative_price_score(price, prices)
    assert 0 <= budget_points + relative_points <= 40, (budget_points, relative_points)
    return budget_points + relative_points


def delivery_score(proposal: StructuredProposal, request: StructuredRequest) -> int:
    if proposal.delivery_date is None or request.delivery_deadline is None:
        return catalogs.DELIVERY_UNKNOWN
    days_late = (proposal.delivery_date - request.delivery_deadline).days
    for max_days_late, points in catalogs.DELIVERY_STEPS:
        if days_late <= max_days_late:
            return points
    return catalogs.DELIVERY_LATE


def warranty_score(warranty: str | None) -> int:
    if not warranty:
        return 0
    for pattern, points in catalogs.WARRANTY_STEPS:
        if pattern.search(warranty):
            return points
    return catalogs.WARRANTY_OTHER


def terms_score(payment_terms: str | None) -> int:
    if not payment_terms:
        return 0
    lowered = payment_terms.lower()
    for phrases, points in catalogs.TERMS_STEPS:
        if any(phrase in lowered for phrase in phrases):
            return points
    return catalogs.TERMS_OTHER


def compliance_check(
    proposal: StructuredProposal, request: StructuredRequest
) -> Compliance:
    meets_budget = proposal.total_price is not None and (
        request.budget is None or proposal.total_price <= request.budget
    )
    meets_delivery = (
        proposal.delivery_date is not None
        and request.delivery_deadline is not None
        and proposal.delivery_date <= request.delivery_deadline
    )
    meets_warranty = bool(proposal.warranty)

    met = sum([meets_budget, meets_delivery, meets_warranty])
    if met == 3:
        overall = ComplianceLevel.FULL
    elif met == 2:
        overall = ComplianceLevel.PARTIAL
    else:
        overall = ComplianceLevel.NON_COMPLIANT

    return Compliance(
        meets_budget=meets_budget,
        meets_delivery=meets_delivery,
        meets_warranty=meets_warranty,
        overall_compliance=overall,
    )


# =============================================================================
# Evaluator
# =============================================================================


class ProposalEvaluator:
    """Deterministic scoring and ranking of a batch of proposals."""

    def evaluate(
        self,
        proposals: Sequence[StructuredProposal],
        request: StructuredRequest,
    ) -> ComparisonResult:
        """
        Score, rank and recommend.

        Scores whatever it is given; the two-proposal minimum is the caller's
        concern.
        """
        if not proposals:
            return ComparisonResult(summary='No proposals to compare.', source='rules')

        prices = PriceRange.of(proposals)
        refs = proposal_refs(proposals)
        analyses = [
            self.analyze(proposal, ref, request, prices)
            for proposal, ref in zip(proposals, refs)
        ]

        ranked = rank_by_score(analyses)
        ranked_proposals = [proposals[i] for i in ranking_order(analyses)]

        recommendation = self.recommend(ranked, ranked_proposals)
        top = ranked[0]

        if recommendation.price_savings:
            closing = (
                f'Potential savings of ${recommendation.price_savings:,.0f} '
                'vs next best option.'
            )
        else:
            closing = 'Recommendation based on comprehensive scoring across all criteria.'

        logger.info(
            'proposal_evaluation.rules',
            proposal_count=len(proposals),
            top_ref=top.proposal_ref,
            top_score=top.score,
        )

        return ComparisonResult(
            analysis=ranked,
            recommendation=recommendation,
            summary=(
                f'Analyzed {len(proposals)} proposals. Top proposal scores {top.score}/100 '
                f'with {top.compliance.overall_compliance.value} compliance. {closing}'
            ),
            source='rules',
        )

    def analyze(
        self,
        proposal: StructuredProposal,
        ref: str,
        request: StructuredRequest,
        prices: PriceRange,
    ) -> ProposalAnalysis:
        breakdown = ScoreBreakdown(
            price=price_score(proposal.total_price, request.budget, prices),
            delivery=delivery_score(proposal, request),
            warranty=warranty_score(proposal.warranty),
            terms=terms_score(proposal.terms.payment_terms),
            completeness=(
                catalogs.COMPLETENESS_FULL if proposal.is_complete
                else catalogs.COMPLETENESS_PARTIAL
            ),
        )
        compliance = compliance_check(proposal, request)

        pros: list[str] = []
        cons: list[str] = []
        risk_factors: list[str] = []

        if breakdown.price >= 30:
            pros.append('Competitive pricing within budget')
        else:
            cons.append('Price exceeds budget or not competitive')

        if breakdown.delivery >= 20:
            pros.append('Meets or exceeds delivery timeline')
        else:
            cons.append('Delivery timeline may not meet requirements')

        if breakdown.warranty >= 10:
            pros.append('Adequate warranty coverage')
        else:
            cons.append('Limited or no warranty information')

        if proposal.is_complete:
            pros.append('Complete proposal with all details')
        else:
            cons.append('Incomplete proposal - missing information')
            risk_factors.append('Incomplete information may hide additional costs')

        if not compliance.meets_budget:
            risk_factors.append('Over budget - requires additional approval')
        if not compliance.meets_delivery:
            risk_factors.append('Delivery timeline may cause project delays')

        score = breakdown.total
        return ProposalAnalysis(
            proposal_ref=ref,
            score=score,
            rank=1,
            score_breakdown=breakdown,
            pros=pros,
            cons=cons,
            compliance=compliance,
            value_adds=list(proposal.terms.additional_conditions) or ['Standard offering'],
            risk_factors=risk_factors,
            notes=(
                f'Score: {score}/100. {compliance.overall_compliance.value} '
                'compliance with RFP requirements.'
            ),
        )

    @staticmethod
    def recommend(
        ranked: list[ProposalAnalysis],
        ranked_proposals: list[StructuredProposal],
    ) -> Recommendation:
        top = ranked[0]
        breakdown = top.score_breakdown

        price_savings = None
        if len(ranked_proposals) > 1:
            top_price = ranked_proposals[0].total_price
            second_price = ranked_proposals[1].total_price
            if top_price is not None and second_price is not None:
                price_savings = second_price - top_price

        return Recommendation(
            recommended_proposal_ref=top.proposal_ref,
            reasoning=(
                f'{top.proposal_ref} ranks #1 with {top.score}/100 points. '
                f'{top.compliance.overall_compliance.value} compliance with RFP requirements. '
                f'Best overall value considering price ({breakdown.price}/40), '
                f'delivery ({breakdown.delivery}/25), warranty ({breakdown.warranty}/15), '
                f'and terms ({breakdown.terms}/10).'
            ),
            price_savings=price_savings,
            key_advantages=top.pros[:3],
            considerations=list(top.risk_factors) or [DEFAULT_CONSIDERATION],
        )
