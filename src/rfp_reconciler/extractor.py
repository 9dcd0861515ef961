"""
Rule-based proposal extractor.

Line-oriented parsing of a vendor reply against the request it answers:
- Total price from the first "total"/"price:" line
- Per-item prices from the first line mentioning each requested item
- Delivery date, warranty and payment terms from ordered pattern tables
- Completeness flag and INSUFFICIENT_DATA classification

First match wins throughout: a later line mentioning the same item is never
aggregated into, or preferred over, the first one.
"""

from datetime import date

from . import catalogs
from .logging import get_logger
from .models.proposal import (
    ItemPrice,
    ParseError,
    ProposalTerms,
    StructuredProposal,
)
from .models.request import RequestItem, StructuredRequest
from .utils import days_from, parse_amount, round_half_up

logger = get_logger(__name__)


def currency_tokens(line: str) -> list[float]:
    """
    Amounts on a line, in order.

    If any amount carries a "$" only those are returned, so that quantities
    on the same line ("20 laptops at $1,200") are not read as prices.
    """
    matches = catalogs.CURRENCY_TOKEN.findall(line)
    dollar = [amount for sign, amount in matches if sign]
    return [parse_amount(a) for a in (dollar or [amount for _, amount in matches])]


def mentions_item(line: str, item_name: str) -> bool:
    """True if a lower-cased line refers to the (lower-cased) item name."""
    if item_name in line or (len(item_name) > 1 and item_name[:-1] in line):
        return True
    return any(kw in item_name and kw in line for kw in catalogs.ITEM_KEYWORDS)


class ProposalExtractor:
    """Deterministic reply text -> StructuredProposal conversion."""

    def extract(
        self,
        reply_text: str,
        request: StructuredRequest,
        today: date | None = None,
    ) -> StructuredProposal:
        """
        Extract a structured proposal from a vendor reply.

        Args:
            reply_text: Raw reply body
            request: The request the reply answers
            today: Reference date for relative delivery phrases

        Returns:
            StructuredProposal; never raises for string input
        """
        if not reply_text or not reply_text.strip():
            return StructuredProposal.empty(request_id=request.id)

        lines = reply_text.split('\n')

        total_price = self.find_total_price(lines)
        item_prices = self.find_item_prices(lines, request.items)
        if total_price is None and item_prices:
            total_price = sum(p.total_price for p in item_prices)

        delivery_days = self.find_delivery_days(reply_text)
        delivery_date = days_from(today, delivery_days) if delivery_days is not None else None

        all_items_priced = len(item_prices) >= len(request.items)
        is_complete = (
            total_price is not None
            and delivery_date is not None
            and (not item_prices or all_items_priced)
        )

        proposal = StructuredProposal(
            request_id=request.id,
            total_price=total_price,
            item_prices=item_prices,
            delivery_date=delivery_date,
            warranty=self.find_warranty(reply_text),
            terms=ProposalTerms(
                payment_terms=self.find_payment_terms(reply_text),
                delivery_terms=(
                    f'Delivery in {delivery_days} days' if delivery_days is not None else None
                ),
                additional_conditions=[],
            ),
            summary=self.summarize(is_complete, total_price, len(item_prices), delivery_date),
            is_complete=is_complete,
            parse_error=ParseError.INSUFFICIENT_DATA if total_price is None else None,
            raw_content=reply_text,
        )

        logger.info(
            'proposal_extraction.rules',
            has_total=total_price is not None,
            items_priced=len(item_prices),
            items_requested=len(request.items),
            is_complete=is_complete,
        )
        return proposal

    @staticmethod
    def find_total_price(lines: list[str]) -> float | None:
        """Last amount on the first total/price line that has one."""
        for line in lines:
            lowered = line.lower()
            if not any(cue in lowered for cue in catalogs.TOTAL_LINE_CUES):
                continue
            if any(ex in lowered for ex in catalogs.TOTAL_LINE_EXCLUSIONS):
                continue
            amounts = currency_tokens(line)
            if amounts:
                return amounts[-1]
        return None

    @staticmethod
    def find_item_prices(lines: list[str], items: list[RequestItem]) -> list[ItemPrice]:
        item_prices = []
        for item in items:
            name = item.name.lower()
            for line in lines:
                if not mentions_item(line.lower(), name):
                    continue

                amounts = currency_tokens(line)
                if len(amounts) >= 2:
                    unit_price, line_total = amounts[0], amounts[1]
                elif len(amounts) == 1:
                    line_total = amounts[0]
                    unit_price = float(round_half_up(line_total / item.quantity))
                else:
                    # Mentioned without a price: the item stays unpriced
                    break

                item_prices.append(
                    ItemPrice(
                        item=item.name,
                        quantity=item.quantity,
                        unit_price=unit_price,
                        total_price=line_total,
                    )
                )
                break
        return item_prices

    @staticmethod
    def find_delivery_days(text: str) -> int | None:
        for pattern in catalogs.DELIVERY_PATTERNS:
            match = pattern.search(text)
            if match:
                return int(match.group(1))
        return None

    @staticmethod
    def find_warranty(text: str) -> str | None:
        for pattern in catalogs.WARRANTY_PATTERNS:
            match = pattern.search(text)
            if match:
                return f'{int(match.group(1))}-year warranty'
        if 'warranty' in text.lower():
            return catalogs.GENERIC_WARRANTY
        return None

    @staticmethod
    def find_payment_terms(text: str) -> str | None:
        lowered = text.lower()
        for phrase, terms in catalogs.PROPOSAL_PAYMENT_TERMS:
            if phrase in lowered:
                return terms
        return None

    @staticmethod
    def summarize(
        is_complete: bool,
        total_price: float | None,
        items_priced: int,
        delivery_date: date | None,
    ) -> str:
        state = 'complete' if is_complete else 'incomplete'
        price = f'${total_price:,.0f} total, ' if total_price is not None else 'price not found, '
        delivery = 'delivery date provided' if delivery_date else 'no delivery date'
        return f'Proposal {state}: {price}{items_priced} items priced, {delivery}'
