"""
Pytest configuration and shared fixtures.

Key fixtures:
- today: Fixed reference date so relative deadlines are deterministic
- sample_request: Laptops + monitors request with a $30,000 budget
- reply_a / reply_b: Two vendor replies answering sample_request
- openai_api_key: OpenAI API key from environment (live tests only)

Everything except the live tests runs without network access.
"""

import os
import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from rfp_reconciler.models import RequestItem, StructuredRequest


@pytest.fixture
def openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    key = os.getenv('OPENAI_API_KEY')
    if not key or key == 'your_openai_api_key_here':
        pytest.skip('OPENAI_API_KEY not set')
    return key


@pytest.fixture
def today() -> date:
    return date(2026, 1, 15)


@pytest.fixture
def sample_request(today: date) -> StructuredRequest:
    """Request for 20 laptops and 15 monitors, $30,000, 25 days."""
    return StructuredRequest(
        id='rfp_001',
        title='Equipment Procurement Request',
        description='20 laptops and 15 monitors, budget $30,000, delivery in 25 days, net 30',
        items=[
            RequestItem(
                name='Laptops',
                quantity=20,
                specification='16GB RAM, Intel i7 processor',
                estimated_unit_price=1500,
            ),
            RequestItem(
                name='Monitors',
                quantity=15,
                specification='24-inch LCD',
                estimated_unit_price=300,
            ),
        ],
        budget=30000,
        delivery_deadline=today + timedelta(days=25),
        payment_terms='Net 30',
    )


@pytest.fixture
def reply_a() -> str:
    """Itemized reply: under budget, on time, 2-year warranty, Net 30."""
    return """
Thank you for the opportunity. Our quote:
20 Laptops at $1,200 each = $24,000
15 Monitors at $350 each = $5,250
Total: $29,250
Delivery within 25 days.
2-year warranty on all items.
Payment terms: Net 30.
""".strip()


@pytest.fixture
def reply_b() -> str:
    """Lump-sum reply: over budget, early, 1-year warranty, no terms."""
    return """
We can supply the full order for $32,000 total.
Delivery in 20 days.
1-year warranty.
""".strip()
