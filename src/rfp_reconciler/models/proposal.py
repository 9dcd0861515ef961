"""
StructuredProposal: a vendor reply reconciled against a request.

A later extraction for the same (request, vendor) pair is an update of the
same proposal, not a new one. Extraction over identical text yields identical
field values.
"""

from datetime import date
from enum import Enum

from pydantic import Field

from .base import WireModel


class ParseError(str, Enum):
    """Why a reply could not be fully reconciled."""

    NO_CONTENT = 'NO_CONTENT'
    INSUFFICIENT_DATA = 'INSUFFICIENT_DATA'


class ProposalStatus(str, Enum):
    """Lifecycle status a store records after extraction."""

    PARSED = 'PARSED'
    INCOMPLETE = 'INCOMPLETE'
    ERROR = 'ERROR'


# Statuses a proposal must have to take part in a comparison
ELIGIBLE_STATUSES = frozenset({ProposalStatus.PARSED, ProposalStatus.INCOMPLETE})


class ItemPrice(WireModel):
    """Pricing for one requested item as quoted by the vendor."""

    item: str
    quantity: int
    unit_price: float
    total_price: float


class ProposalTerms(WireModel):
    """Commercial terms quoted alongside the prices."""

    payment_terms: str | None = None
    delivery_terms: str | None = None
    additional_conditions: list[str] = Field(default_factory=list)


class StructuredProposal(WireModel):
    """
    Structured vendor proposal.

    `total_price` is either stated in the reply or the sum of the item
    totals. `is_complete` holds only when every requested item is priced and
    both a total price and a delivery date were found.
    """

    request_id: str | None = Field(default=None, description='Originating request')
    vendor_id: str | None = Field(default=None, description='Replying vendor')

    total_price: float | None = None
    item_prices: list[ItemPrice] = Field(default_factory=list)
    delivery_date: date | None = None
    warranty: str | None = None
    terms: ProposalTerms = Field(default_factory=ProposalTerms)

    summary: str = ''
    is_complete: bool = False
    parse_error: ParseError | None = None

    raw_content: str | None = Field(
        default=None, description='Reply text the proposal was extracted from'
    )

    @property
    def proposal_ref(self) -> str | None:
        """Identifier used to reference this proposal in a comparison."""
        return self.vendor_id

    @property
    def status(self) -> ProposalStatus:
        """Status derived from the parse outcome."""
        return derive_status(self)

    @classmethod
    def empty(cls, **kwargs) -> 'StructuredProposal':
        """The terminal result for a reply with no text."""
        return cls(
            summary='Empty or invalid email content',
            is_complete=False,
            parse_error=ParseError.NO_CONTENT,
            **kwargs,
        )


def derive_status(proposal: StructuredProposal) -> ProposalStatus:
    """
    Map a parse outcome onto a stored status.

    NO_CONTENT is an error; missing data or an incomplete proposal is
    INCOMPLETE; anything else is PARSED.
    """
    if proposal.parse_error == ParseError.NO_CONTENT:
        return ProposalStatus.ERROR
    if proposal.parse_error == ParseError.INSUFFICIENT_DATA or not proposal.is_complete:
        return ProposalStatus.INCOMPLETE
    return ProposalStatus.PARSED


def eligible_for_comparison(
    proposals: list[StructuredProposal],
) -> list[StructuredProposal]:
    """Keep the proposals whose status allows them into a comparison."""
    return [p for p in proposals if derive_status(p) in ELIGIBLE_STATUSES]
