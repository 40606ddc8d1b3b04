import time
from datetime import datetime, timezone

from fastapi import APIRouter

from clawmark import __version__

SERVICE_NAME = "ClawMark API"


def create_health_router() -> APIRouter:
    router = APIRouter(prefix="/health", tags=["health"])
    started = time.monotonic()

    @router.get("")
    async def health_check():
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.monotonic() - started,
        }

    @router.get("/ready")
    async def ready():
        return {"ready": True}

    @router.get("/live")
    async def live():
        return {"alive": True}

    return router
