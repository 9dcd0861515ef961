"""
Rule-based request interpreter.

Turns a free-text procurement need into a StructuredRequest using the pattern
tables in `catalogs`. Always returns a usable request: when no known
equipment is mentioned, a single generic line item priced at the stated (or
default) budget stands in.
"""

from collections.abc import Sequence
from datetime import date

from . import catalogs
from .catalogs import EquipmentCategory, Qualifier
from .config import config
from .logging import get_logger
from .models.request import RequestItem, StructuredRequest
from .utils import days_from, parse_amount

logger = get_logger(__name__)


class RequestInterpreter:
    """
    Deterministic free text -> StructuredRequest conversion.

    The catalogs are injected so tests (and deployments with a different
    product range) can supply their own tables.
    """

    def __init__(
        self,
        categories: Sequence[EquipmentCategory] = catalogs.EQUIPMENT_CATALOG,
        qualifiers: Sequence[Qualifier] = catalogs.QUALIFIERS,
        min_budget: float | None = None,
        default_item_price: float | None = None,
    ):
        self.categories = tuple(categories)
        self.qualifiers = tuple(qualifiers)
        self.min_budget = config.MIN_BUDGET if min_budget is None else min_budget
        self.default_item_price = (
            config.DEFAULT_ITEM_PRICE if default_item_price is None else default_item_price
        )

    def interpret(self, free_text: str, today: date | None = None) -> StructuredRequest:
        """
        Interpret a procurement description.

        Args:
            free_text: The buyer's description
            today: Reference date for relative deadlines (defaults to today)

        Returns:
            StructuredRequest; never raises for string input
        """
        text = free_text or ''
        items = self.extract_items(text)
        budget = self.extract_budget(text)

        if not items:
            items = [
                RequestItem(
                    name=catalogs.FALLBACK_ITEM_NAME,
                    quantity=1,
                    specification=catalogs.FALLBACK_ITEM_SPECIFICATION,
                    estimated_unit_price=budget or self.default_item_price,
                )
            ]

        request = StructuredRequest(
            title=catalogs.DEFAULT_REQUEST_TITLE,
            description=text,
            items=items,
            budget=budget,
            delivery_deadline=self.extract_deadline(text, today),
            payment_terms=self.extract_payment_terms(text),
            requirements={},
        )

        logger.info(
            'request_interpretation.rules',
            item_count=len(request.items),
            has_budget=request.budget is not None,
            has_deadline=request.delivery_deadline is not None,
        )
        return request

    def extract_items(self, text: str) -> list[RequestItem]:
        """One item per catalog category mentioned with a quantity."""
        items = []
        for category in self.categories:
            match = category.pattern.search(text)
            if not match:
                continue

            start = max(0, match.start() - catalogs.QUALIFIER_WINDOW_BEFORE)
            end = min(len(text), match.end() + catalogs.QUALIFIER_WINDOW_AFTER)

            items.append(
                RequestItem(
                    name=category.name,
                    quantity=max(1, int(match.group(1))),
                    specification=self.refine_specification(text[start:end], category),
                    estimated_unit_price=category.default_unit_price,
                )
            )
        return items

    def refine_specification(self, context: str, category: EquipmentCategory) -> str:
        """First applicable qualifier found in the context window, else the default."""
        for qualifier in self.qualifiers:
            if qualifier.applies_to(category.name) and qualifier.pattern.search(context):
                return qualifier.specification
        return category.default_specification

    def extract_budget(self, text: str) -> float | None:
        """
        Budget from the first pattern whose first match is plausible.

        Each pattern is tried once, in order. A first match at or below
        `min_budget` moves on to the next pattern so stray small numbers such
        as quantities are not taken for a budget.
        """
        for pattern in catalogs.BUDGET_PATTERNS:
            match = pattern.search(text)
            if match:
                amount = parse_amount(match.group(1))
                if amount > self.min_budget:
                    return amount
        return None

    @staticmethod
    def extract_deadline(text: str, today: date | None = None) -> date | None:
        match = catalogs.DEADLINE_PATTERN.search(text)
        if not match:
            return None
        return days_from(today, int(match.group(1)))

    @staticmethod
    def extract_payment_terms(text: str) -> str | None:
        lowered = text.lower()
        for phrase, terms in catalogs.REQUEST_PAYMENT_TERMS:
            if phrase in lowered:
                return terms
        return None
