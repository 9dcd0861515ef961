"""
Data models for the RFP reconciler.

All documents serialize to camelCase JSON and accept either casing on input.
"""

from .request import RequestItem, StructuredRequest
from .proposal import (
    ItemPrice,
    ParseError,
    ProposalStatus,
    ProposalTerms,
    StructuredProposal,
    derive_status,
    eligible_for_comparison,
)
from .comparison import (
    Compliance,
    ComplianceLevel,
    ComparisonResult,
    ProposalAnalysis,
    Recommendation,
    ScoreBreakdown,
    rank_by_score,
    ranking_order,
)

__all__ = [
    'RequestItem',
    'StructuredRequest',
    'ItemPrice',
    'ParseError',
    'ProposalStatus',
    'ProposalTerms',
    'StructuredProposal',
    'derive_status',
    'eligible_for_comparison',
    'Compliance',
    'ComplianceLevel',
    'ComparisonResult',
    'ProposalAnalysis',
    'Recommendation',
    'ScoreBreakdown',
    'rank_by_score',
    'ranking_order',
]
