"""
Shared pydantic base for reconciler documents.

Attributes are snake_case in Python; the JSON form exchanged with the
remote service and the HTTP API uses camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """BaseModel with camelCase aliases that also accepts field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
