"""
Proposal comparison prompt.

The model receives the request, every proposal's extracted fields and the
start of each raw reply, and must answer with an `analysis` array plus a
`recommendation` object. Ranks it returns are not trusted; the caller
re-ranks by score.
"""

import json
from collections.abc import Sequence

from ..models.proposal import StructuredProposal
from ..models.request import StructuredRequest

COMPARISON_SYSTEM_PROMPT = """You are a procurement expert. Analyze vendor proposals against a request and provide a comprehensive comparison.

Return ONLY a JSON object, no markdown and no commentary, in this exact format:
{
  "analysis": [
    {
      "proposalRef": "the proposal's ref",
      "score": <integer 0-100, the sum of scoreBreakdown>,
      "rank": <integer>,
      "scoreBreakdown": {"price": <0-40>, "delivery": <0-25>, "warranty": <0-15>, "terms": <0-10>, "completeness": <0-10>},
      "pros": ["advantages"],
      "cons": ["disadvantages"],
      "compliance": {"meetsBudget": <bool>, "meetsDelivery": <bool>, "meetsWarranty": <bool>, "overallCompliance": "FULL" | "PARTIAL" | "NON-COMPLIANT"},
      "valueAdds": ["additional benefits"],
      "riskFactors": ["potential risks"],
      "notes": "detailed assessment"
    }
  ],
  "recommendation": {
    "recommendedProposalRef": "ref of the best proposal",
    "reasoning": "explanation considering all factors",
    "priceSavings": <number or null>,
    "keyAdvantages": ["main reasons"],
    "considerations": ["things to check before accepting"]
  },
  "summary": "executive summary of the comparison"
}

Scoring criteria:
- Price (40 pts): best price = 40, scale down for higher prices and budget overruns
- Delivery (25 pts): meets or beats the deadline = 25, late = 0-15
- Warranty (15 pts): exceeds requirement = 15, meets = 10, below = 5
- Terms (10 pts): favorable payment and delivery terms
- Completeness (10 pts): all information provided = 10, incomplete = 5"""

COMPARISON_USER_PROMPT_TEMPLATE = """REQUEST:
Budget: {budget}
Delivery required by: {deadline}
Items: {items_json}

PROPOSALS:
{proposal_blocks}"""

PROPOSAL_BLOCK_TEMPLATE = """Proposal {position} (ref: {ref}):
- Total Price: {total_price}
- Item Prices: {item_prices}
- Delivery: {delivery}
- Warranty: {warranty}
- Payment Terms: {payment_terms}
- Status: {status}
- Raw Content: {raw_prefix}..."""


def _format_proposal(
    position: int,
    ref: str,
    proposal: StructuredProposal,
    prefix_chars: int,
) -> str:
    item_prices = [p.model_dump(by_alias=True, mode='json') for p in proposal.item_prices]
    return PROPOSAL_BLOCK_TEMPLATE.format(
        position=position,
        ref=ref,
        total_price=(
            f'${proposal.total_price:,.2f}' if proposal.total_price is not None else 'Not provided'
        ),
        item_prices=json.dumps(item_prices),
        delivery=proposal.delivery_date.isoformat() if proposal.delivery_date else 'Not specified',
        warranty=proposal.warranty or 'Not specified',
        payment_terms=proposal.terms.payment_terms or 'Not specified',
        status='Complete' if proposal.is_complete else 'Incomplete',
        raw_prefix=(proposal.raw_content or '')[:prefix_chars],
    )


def build_comparison_prompt(
    proposals: Sequence[StructuredProposal],
    refs: Sequence[str],
    request: StructuredRequest,
    prefix_chars: int = 200,
) -> list[dict[str, str]]:
    """
    Build the comparison prompt messages for OpenAI.

    Args:
        proposals: Proposals to compare, in input order
        refs: The ref the model must use for each proposal
        request: The request the proposals answer
        prefix_chars: How much of each raw reply to include

    Returns:
        List of message dicts for OpenAI chat completion
    """
    items = [item.model_dump(by_alias=True, mode='json') for item in request.items]
    blocks = [
        _format_proposal(i, ref, proposal, prefix_chars)
        for i, (proposal, ref) in enumerate(zip(proposals, refs), 1)
    ]
    user_prompt = COMPARISON_USER_PROMPT_TEMPLATE.format(
        budget=f'${request.budget:,.2f}' if request.budget is not None else 'Not specified',
        deadline=(
            request.delivery_deadline.isoformat() if request.delivery_deadline else 'Not specified'
        ),
        items_json=json.dumps(items, indent=2),
        proposal_blocks='\n\n'.join(blocks),
    )
    return [
        {'role': 'system', 'content': COMPARISON_SYSTEM_PROMPT},
        {'role': 'user', 'content': user_prompt},
    ]
