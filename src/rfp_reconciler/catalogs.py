"""
Pattern tables for the rule-based interpreter and extractor.

Every recognizer is a table entry rather than a branch in code, so the
matching logic stays declarative and each entry can be tested on its own.
Tables are ordered; where more than one entry can match, the earlier entry
wins.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class EquipmentCategory:
    """A known kind of equipment the interpreter can recognize."""

    name: str
    pattern: re.Pattern[str]  # group 1 captures the quantity
    default_specification: str
    default_unit_price: float


@dataclass(frozen=True)
class Qualifier:
    """Keywords near an item mention that refine its specification."""

    pattern: re.Pattern[str]
    specification: str
    categories: frozenset[str] = frozenset()  # empty: applies to every category

    def applies_to(self, category_name: str) -> bool:
        return not self.categories or category_name in self.categories


def _ci(expr: str) -> re.Pattern[str]:
    return re.compile(expr, re.IGNORECASE)


# =============================================================================
# Request interpretation
# =============================================================================

EQUIPMENT_CATALOG: tuple[EquipmentCategory, ...] = (
    EquipmentCategory(
        'Office Chairs',
        _ci(r'(\d+)\s*(?:office\s+)?chairs?\b'),
        'Ergonomic design with lumbar support',
        300,
    ),
    EquipmentCategory(
        'Standing Desks',
        _ci(r'(\d+)\s*(?:standing\s+)?desks?\b(?!\s*lamps?\b)'),
        'Electric height adjustment',
        800,
    ),
    EquipmentCategory(
        'Desk Lamps',
        _ci(r'(\d+)\s*(?:desk\s+)?lamps?\b'),
        'LED lighting',
        50,
    ),
    EquipmentCategory(
        'Laptops',
        _ci(r'(\d+)\s*laptops?\b(?!\s*bags?\b)'),
        '16GB RAM, 512GB SSD',
        1500,
    ),
    EquipmentCategory(
        'Monitors',
        _ci(r'(\d+)\s*monitors?\b'),
        '24-inch LCD',
        300,
    ),
    EquipmentCategory(
        'Wireless Mice',
        _ci(r'(\d+)\s*(?:wireless\s+)?(?:mice|mouse)\b'),
        'Wireless connectivity',
        25,
    ),
    EquipmentCategory(
        'Wireless Keyboards',
        _ci(r'(\d+)\s*(?:wireless\s+)?keyboards?\b'),
        'Wireless connectivity',
        50,
    ),
    EquipmentCategory(
        'Laptop Bags',
        _ci(r'(\d+)\s*(?:laptop\s+)?bags?\b'),
        'Padded protection',
        40,
    ),
)

QUALIFIERS: tuple[Qualifier, ...] = (
    Qualifier(
        _ci(r'\b(?:ergonomic|lumbar)\b'),
        'Ergonomic design with lumbar support',
        frozenset({'Office Chairs'}),
    ),
    Qualifier(
        _ci(r'\b(?:electric|height\s+adjustment)\b'),
        'Electric height adjustment',
        frozenset({'Standing Desks'}),
    ),
    Qualifier(_ci(r'\bled\b'), 'LED lighting', frozenset({'Desk Lamps'})),
    Qualifier(
        _ci(r'\b(?:16\s*gb|i7)\b'),
        '16GB RAM, Intel i7 processor',
        frozenset({'Laptops'}),
    ),
)

# Characters scanned before/after an item mention when looking for qualifiers
QUALIFIER_WINDOW_BEFORE = 50
QUALIFIER_WINDOW_AFTER = 100

BUDGET_PATTERNS: tuple[re.Pattern[str], ...] = (
    _ci(r'budget[\s:is]*\$?(\d[\d,]*)'),
    _ci(r'\$(\d[\d,]*)\s*budget'),
    _ci(r'\$(\d[\d,]*)'),
)

DEADLINE_PATTERN = _ci(r'(\d+)\s*days?\b')

# Phrase -> canonical payment terms, for request text
REQUEST_PAYMENT_TERMS: tuple[tuple[str, str], ...] = (('net 30', 'Net 30'),)

FALLBACK_ITEM_NAME = 'General Items'
FALLBACK_ITEM_SPECIFICATION = 'As described'
DEFAULT_REQUEST_TITLE = 'Equipment Procurement Request'


# =============================================================================
# Proposal extraction
# =============================================================================

# group 1: optional "$", group 2: the amount
CURRENCY_TOKEN = re.compile(r'(\$)?\s?(\d[\d,]*(?:\.\d{1,2})?)')

TOTAL_LINE_CUES: tuple[str, ...] = ('total', 'price:')
TOTAL_LINE_EXCLUSIONS: tuple[str, ...] = ('per unit',)

# Category words that identify an item line even when the name differs
ITEM_KEYWORDS: tuple[str, ...] = ('laptop', 'monitor', 'chair', 'desk')

DELIVERY_PATTERNS: tuple[re.Pattern[str], ...] = (
    _ci(r'delivery[:\s]*(?:in\s+|within\s+)?(\d+)\s*days?\b'),
    _ci(r'within\s*(\d+)\s*days?\b'),
    _ci(r'\bin\s*(\d+)\s*days?\b'),
    _ci(r'(\d+)\s*days?\b'),
)

WARRANTY_PATTERNS: tuple[re.Pattern[str], ...] = (
    _ci(r'(\d+)[-\s]?year\s+warranty'),
    _ci(r'warranty[:\s]*(\d+)\s+years?'),
    _ci(r'(\d+)\s*yr\s+warranty'),
)
GENERIC_WARRANTY = 'Standard warranty included'

# Phrase -> canonical payment terms, for vendor replies
PROPOSAL_PAYMENT_TERMS: tuple[tuple[str, str], ...] = (
    ('net 30', 'Net 30'),
    ('net 45', 'Net 45'),
    ('net 60', 'Net 60'),
)


# =============================================================================
# Proposal evaluation
# =============================================================================

# (max price/budget ratio, points), checked in order
BUDGET_RATIO_STEPS: tuple[tuple[float, int], ...] = (
    (0.7, 20),
    (0.8, 18),
    (0.9, 16),
    (1.0, 14),
    (1.1, 8),
)
BUDGET_RATIO_FLOOR = 4
RELATIVE_PRICE_MAX = 20

# (max days late, points); negative means early
DELIVERY_STEPS: tuple[tuple[int, int], ...] = (
    (-5, 25),
    (0, 22),
    (5, 15),
)
DELIVERY_LATE = 5
DELIVERY_UNKNOWN = 10

WARRANTY_STEPS: tuple[tuple[re.Pattern[str], int], ...] = (
    (_ci(r'\b(?:3[-\s]?years?|36[-\s]?months?)\b'), 15),
    (_ci(r'\b(?:2[-\s]?years?|24[-\s]?months?)\b'), 12),
    (_ci(r'\b(?:1[-\s]?years?|12[-\s]?months?)\b'), 8),
)
WARRANTY_OTHER = 5

TERMS_STEPS: tuple[tuple[tuple[str, ...], int], ...] = (
    (('net 60', 'net 90'), 10),
    (('net 30',), 8),
)
TERMS_OTHER = 5

COMPLETENESS_FULL = 10
COMPLETENESS_PARTIAL = 5
