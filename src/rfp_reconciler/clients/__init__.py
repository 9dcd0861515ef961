"""
External service clients for the RFP reconciler.
"""

from .openai_client import OpenAIClient, parse_json_object

__all__ = [
    'OpenAIClient',
    'parse_json_object',
]
