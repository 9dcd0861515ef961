"""
Proposal extraction prompt.

The model sees the vendor reply and the request's item list and must answer
with a single JSON object in the StructuredProposal shape.
"""

import json
from datetime import date

from ..models.request import StructuredRequest

EXTRACTION_SYSTEM_PROMPT = """You parse vendor proposal emails and extract ALL pricing information.

Return ONLY a JSON object, no markdown and no commentary, with this exact structure:
{
  "totalPrice": <number or null>,
  "itemPrices": [{"item": "name", "quantity": <integer>, "unitPrice": <number>, "totalPrice": <number>}],
  "deliveryDate": "YYYY-MM-DD" or null,
  "warranty": "text" or null,
  "terms": {"paymentTerms": "text or null", "deliveryTerms": "text or null", "additionalConditions": ["text"]},
  "summary": "brief summary",
  "isComplete": <true only if every requested item is priced and a total and delivery date are given>
}

Rules:
- Extract every individual item price, using the requested item names
- Calculate totalPrice from itemPrices if it is not stated explicitly
- Parse all price formats: $1,000 / 1000 / 1k
- Resolve relative delivery phrases ("in 25 days") against today's date"""

EXTRACTION_USER_PROMPT_TEMPLATE = """Today's date: {today}

Requested items:
{items_json}

<vendor_email>
{reply_text}
</vendor_email>"""


def build_extraction_prompt(
    reply_text: str,
    request: StructuredRequest,
    today: date | None = None,
) -> list[dict[str, str]]:
    """
    Build the proposal extraction prompt messages for OpenAI.

    Args:
        reply_text: Raw vendor reply
        request: The request being answered (only its items are sent)
        today: Reference date for relative delivery phrases

    Returns:
        List of message dicts for OpenAI chat completion
    """
    items = [item.model_dump(by_alias=True, mode='json') for item in request.items]
    user_prompt = EXTRACTION_USER_PROMPT_TEMPLATE.format(
        today=(today or date.today()).isoformat(),
        items_json=json.dumps(items, indent=2),
        reply_text=reply_text,
    )
    return [
        {'role': 'system', 'content': EXTRACTION_SYSTEM_PROMPT},
        {'role': 'user', 'content': user_prompt},
    ]
