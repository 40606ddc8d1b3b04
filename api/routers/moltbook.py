from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from clawmark.platform import MoltbookClient
from clawmark.platform.models import profile_response
from clawmark.reputation import PlatformReputationScorer
from clawmark.verification import ChallengeProtocol


class UsernameRequest(BaseModel):
    username: Optional[str] = None


def create_moltbook_router(
    platform_client: MoltbookClient,
    challenges: ChallengeProtocol,
    scorer: PlatformReputationScorer,
) -> APIRouter:
    router = APIRouter(prefix="/v1/moltbook", tags=["moltbook"])

    @router.get("/agent/{username}")
    async def get_platform_agent(username: str):
        profile = await platform_client.get_agent(username)
        return profile_response(profile)

    @router.post("/challenge")
    async def create_challenge(body: UsernameRequest):
        challenge = challenges.generate_challenge(body.username)
        return challenge.model_dump(by_alias=True, mode="json", exclude={"username"})

    @router.post("/verify")
    async def verify_ownership(body: UsernameRequest):
        result = await challenges.verify_ownership(body.username)
        return result.model_dump(by_alias=True, mode="json")

    @router.get("/reputation/{username}")
    async def platform_reputation(username: str):
        reputation = await scorer.derive(username)
        return reputation.model_dump(by_alias=True, mode="json")

    return router
