"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """
    Liveness plus the state of the remote service.

    The rule-based path keeps serving when OpenAI is unreachable, so an
    unhealthy remote is reported but still answers 200.
    """
    openai = getattr(request.app.state, "openai", None)
    if openai is None:
        return {"status": "ok", "remote": False}

    check = await openai.health_check()
    return {"status": "ok", "remote": True, "remoteHealthy": bool(check.get("healthy"))}
