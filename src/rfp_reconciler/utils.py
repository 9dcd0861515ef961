"""
Small numeric and date helpers shared by the rule-based components.
"""

from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def parse_amount(token: str) -> float:
    """Parse "$1,234.50" / "1,234" style tokens into a float."""
    cleaned = token.replace('$', '').replace(',', '').strip()
    return float(cleaned)


def days_from(today: date | None, days: int) -> date:
    """The date `days` days after `today` (defaults to the current date)."""
    return (today or date.today()) + timedelta(days=days)
