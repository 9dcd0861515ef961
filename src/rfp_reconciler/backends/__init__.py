"""
Reconciliation backends and the fallback policy that composes them.
"""

from .base import ReconcilerBackend
from .policy import FallbackBackend
from .remote import RemoteBackend
from .rules import RuleBasedBackend

__all__ = [
    'ReconcilerBackend',
    'FallbackBackend',
    'RemoteBackend',
    'RuleBasedBackend',
    'build_default_backend',
]


def build_default_backend() -> FallbackBackend:
    """OpenAI first (from environment settings), rule-based fallback."""
    return FallbackBackend(primary=RemoteBackend.from_env(), fallback=RuleBasedBackend())
