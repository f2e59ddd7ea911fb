"""Hello and health check endpoints.

Learn: /hello is a static smoke test. /health additionally pings
MongoDB so a load balancer can tell a live process from a working one.
"""

from fastapi import APIRouter, Request

from contactbook import __version__
from contactbook.db import ping

router = APIRouter()


@router.get("/hello")
async def hello():
    return {"message": "Hello from Python/FastAPI"}


@router.get("/health")
async def health_check(request: Request):
    """Check server health and MongoDB connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await ping(request.app.state.mongo)
        checks["mongo"] = "ok"
    except Exception as e:
        checks["mongo"] = f"error: {e}"

    status = "healthy" if checks["mongo"] == "ok" else "degraded"
    return {"status": status, **checks}
