"""
Request interpretation prompt.

The model must answer with a single JSON object in the StructuredRequest
shape (camelCase keys).
"""

from datetime import date

INTERPRET_SYSTEM_PROMPT = """You are a procurement assistant that turns a buyer's free-text purchasing need into a structured request.

Return ONLY a JSON object, no markdown and no commentary, with exactly these keys:
{
  "title": "short title for the request",
  "description": "the buyer's text, lightly cleaned up",
  "items": [
    {"name": "display name, plural (e.g. Laptops)", "quantity": <integer > 0>, "specification": "requested configuration", "estimatedUnitPrice": <number or null>}
  ],
  "budget": <number or null>,
  "deliveryDeadline": "YYYY-MM-DD" or null,
  "paymentTerms": "e.g. Net 30" or null,
  "requirements": {"other requirement": "value"}
}

Guidelines:
- One entry in items per distinct product; quantities are whole numbers
- Resolve relative deadlines ("within 30 days") against today's date
- Use null for anything the buyer did not state; do not invent a budget"""

INTERPRET_USER_PROMPT_TEMPLATE = """Today's date: {today}

<request>
{free_text}
</request>"""


def build_interpret_prompt(
    free_text: str,
    today: date | None = None,
) -> list[dict[str, str]]:
    """
    Build the interpretation prompt messages for OpenAI.

    Args:
        free_text: The buyer's description
        today: Reference date for relative deadlines

    Returns:
        List of message dicts for OpenAI chat completion
    """
    user_prompt = INTERPRET_USER_PROMPT_TEMPLATE.format(
        today=(today or date.today()).isoformat(),
        free_text=free_text,
    )
    return [
        {'role': 'system', 'content': INTERPRET_SYSTEM_PROMPT},
        {'role': 'user', 'content': user_prompt},
    ]
