"""
Custom exceptions and error handling for the RFP reconciler.

Provides:
- Typed exception hierarchy for different failure modes
- Error context preservation for debugging
- Classification of OpenAI SDK failures into configuration,
  authentication and generic remote failures
"""

from typing import Any

import openai


class ReconcilerError(Exception):
    """Base exception for all reconciler errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Client Errors
# =============================================================================


class ClientError(ReconcilerError):
    """Base class for client-related errors."""

    pass


class RemoteServiceError(ClientError):
    """Generic failure of the remote semantic service. Always absorbed."""

    code = 'AI_SERVICE_ERROR'


class AIConfigError(RemoteServiceError):
    """The remote service is not configured (missing or placeholder API key)."""

    code = 'AI_CONFIG_ERROR'


class AIAuthError(RemoteServiceError):
    """The remote service rejected our credentials."""

    code = 'AI_AUTH_ERROR'


class RemoteResponseError(RemoteServiceError):
    """The remote service answered, but not with a parseable JSON object."""

    pass


# =============================================================================
# Pipeline Errors
# =============================================================================


class PipelineError(ReconcilerError):
    """Base class for pipeline-related errors."""

    pass


class ValidationError(PipelineError):
    """Input validation failed."""

    pass


class InsufficientProposalsError(PipelineError):
    """Fewer than two eligible proposals were supplied for a comparison."""

    pass


def is_surfaced(exc: BaseException) -> bool:
    """True for the failure classes that cross the component boundary."""
    return isinstance(exc, (AIConfigError, AIAuthError))


# =============================================================================
# Error Handling Utilities
# =============================================================================


def wrap_openai_error(
    exc: Exception, context: dict[str, Any] | None = None
) -> RemoteServiceError:
    """
    Wrap an OpenAI exception in our typed error hierarchy.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        Typed RemoteServiceError subclass
    """
    if isinstance(exc, RemoteServiceError):
        return exc

    error_str = str(exc).lower()
    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)) or (
        'invalid api key' in error_str or 'incorrect api key' in error_str
    ):
        return AIAuthError(
            f"AI_AUTH_ERROR: OpenAI rejected the API key: {exc}",
            context=ctx,
        )
    elif isinstance(exc, openai.OpenAIError) and 'api_key' in error_str:
        # Raised by the SDK itself when no key could be resolved
        return AIConfigError(
            f"AI_CONFIG_ERROR: OpenAI API key not configured: {exc}",
            context=ctx,
        )
    else:
        return RemoteServiceError(
            f"OpenAI API error: {exc}",
            context=ctx,
        )
