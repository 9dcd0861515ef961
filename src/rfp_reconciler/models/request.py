"""
StructuredRequest: the buyer's procurement need in structured form.

Created once by the request interpreter and never mutated afterwards;
status transitions belong to whatever store persists it.
"""

from datetime import date
from typing import Any

from pydantic import ConfigDict, Field

from .base import WireModel


class RequestItem(WireModel):
    """A single requested line item."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description='Canonical display name, e.g. "Laptops"')
    quantity: int = Field(..., gt=0, description='Number of units requested')
    specification: str = Field(
        default='As described', description='Requested configuration or qualities'
    )
    estimated_unit_price: float | None = Field(
        default=None, description='Catalog estimate per unit, if known'
    )


class StructuredRequest(WireModel):
    """
    Structured procurement request.

    `id` is assigned by the external store; the interpreter leaves it unset.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description='External store identifier')
    title: str = Field(..., description='Short title for the request')
    description: str = Field(..., description='Original free-text description')
    items: list[RequestItem] = Field(
        default_factory=list, description='Requested items, in catalog order'
    )
    budget: float | None = Field(default=None, description='Total budget, if stated')
    delivery_deadline: date | None = Field(
        default=None, description='Latest acceptable delivery date'
    )
    payment_terms: str | None = Field(default=None, description='e.g. "Net 30"')
    requirements: dict[str, Any] = Field(
        default_factory=dict, description='Open key/value requirements'
    )
