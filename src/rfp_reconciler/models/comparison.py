"""
ComparisonResult and its parts.

Recomputed on every evaluation call and never persisted. The same models are
used to validate the remote service's comparison JSON.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Literal

from pydantic import Field

from .base import WireModel


class ComplianceLevel(str, Enum):
    FULL = 'FULL'
    PARTIAL = 'PARTIAL'
    NON_COMPLIANT = 'NON-COMPLIANT'


class ScoreBreakdown(WireModel):
    """Per-category points. Each category has its own cap."""

    price: int = Field(default=0, ge=0, le=40)
    delivery: int = Field(default=0, ge=0, le=25)
    warranty: int = Field(default=0, ge=0, le=15)
    terms: int = Field(default=0, ge=0, le=10)
    completeness: int = Field(default=0, ge=0, le=10)

    @property
    def total(self) -> int:
        return self.price + self.delivery + self.warranty + self.terms + self.completeness


class Compliance(WireModel):
    meets_budget: bool = False
    meets_delivery: bool = False
    meets_warranty: bool = False
    overall_compliance: ComplianceLevel = ComplianceLevel.NON_COMPLIANT


class ProposalAnalysis(WireModel):
    """Scored assessment of a single proposal."""

    proposal_ref: str
    score: int = Field(..., ge=0, le=100)
    rank: int = Field(default=1, ge=1)
    score_breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    compliance: Compliance = Field(default_factory=Compliance)
    value_adds: list[str] = Field(default_factory=list)
    risk_factors: list[str] = Field(default_factory=list)
    notes: str = ''


class Recommendation(WireModel):
    recommended_proposal_ref: str | None = None
    reasoning: str = ''
    price_savings: float | None = None
    key_advantages: list[str] = Field(default_factory=list)
    considerations: list[str] = Field(default_factory=list)


class ComparisonResult(WireModel):
    """Ranked analyses plus the overall recommendation."""

    analysis: list[ProposalAnalysis] = Field(default_factory=list)
    recommendation: Recommendation = Field(default_factory=Recommendation)
    summary: str = ''
    source: Literal['remote', 'rules'] = 'rules'


def ranking_order(analyses: Sequence[ProposalAnalysis]) -> list[int]:
    """
    Indexes of `analyses` by descending score.

    `sorted` is stable, so equal scores keep their input order.
    """
    return sorted(range(len(analyses)), key=lambda i: analyses[i].score, reverse=True)


def rank_by_score(analyses: Sequence[ProposalAnalysis]) -> list[ProposalAnalysis]:
    """Order analyses by descending score and assign ranks 1..N."""
    return [
        analyses[i].model_copy(update={'rank': rank})
        for rank, i in enumerate(ranking_order(analyses), 1)
    ]
