"""Mapping of reconciler errors onto HTTP responses."""

from fastapi import HTTPException

from ...errors import RemoteServiceError


def service_unavailable(exc: RemoteServiceError) -> HTTPException:
    """503 for a remote service that is unconfigured or rejects our key."""
    return HTTPException(
        status_code=503,
        detail={
            "error": "AI service unavailable. Please check API configuration.",
            "code": exc.code,
        },
    )
