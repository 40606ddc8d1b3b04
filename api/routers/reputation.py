from typing import Optional

from fastapi import APIRouter, Query

from clawmark.reputation import (
    MAX_SCORE,
    PLATFORM_TIER_BANDS,
    ReputationEngine,
    ReputationUpdate,
    tier_table,
)
from clawmark.reputation.engine import DEFAULT_LEADERBOARD_SIZE


def create_reputation_router(engine: ReputationEngine) -> APIRouter:
    router = APIRouter(prefix="/v1/reputation", tags=["reputation"])

    # Fixed paths are registered before /{did} so they are not captured by it
    @router.get("/leaderboard")
    async def leaderboard(limit: Optional[str] = Query(None), tier: Optional[str] = None):
        return engine.leaderboard(limit=limit or DEFAULT_LEADERBOARD_SIZE, tier=tier).model_dump(by_alias=True, mode="json")

    @router.get("/tiers")
    async def tiers():
        return {
            "tiers": tier_table(),
            "platformTiers": tier_table(PLATFORM_TIER_BANDS),
            "maxScore": MAX_SCORE,
        }

    @router.get("/{did}")
    async def get_reputation(did: str):
        return engine.get(did).model_dump(by_alias=True, mode="json")

    @router.post("/{did}")
    async def update_reputation(did: str, body: ReputationUpdate):
        record = engine.update(did, body)
        return {
            "did": did,
            "score": record.score,
            "tier": record.tier.value,
            "updatedAt": record.updated_at.isoformat() if record.updated_at else None,
            "message": "Reputation updated successfully",
        }

    return router
