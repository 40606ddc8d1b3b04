"""
Reputation derived from public platform activity.

Independent of the oracle path: nothing is stored, and the result is
tiered with the platform tier table.
"""

import math
from datetime import datetime, timezone
from typing import Optional

from clawmark.identity.codec import Clock, utcnow
from clawmark.platform.client import MoltbookClient
from clawmark.platform.models import PlatformProfile

from .models import PlatformMetrics, PlatformReputation
from .tiers import MAX_SCORE, calculate_platform_tier

SECONDS_PER_DAY = 24 * 60 * 60

AGE_POINTS_CAP = 200
FOLLOWER_POINTS_CAP = 300
POST_POINTS_CAP = 200
RATIO_POINTS_CAP = 100
VERIFIED_BONUS = 200
RATIO_MIN_FOLLOWERS = 10


def account_age_days(profile: PlatformProfile, now: datetime) -> float:
    if profile.created_at is None:
        return 0.0
    created = profile.created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return max(0.0, (now - created).total_seconds() / SECONDS_PER_DAY)


def score_platform_profile(profile: PlatformProfile, now: datetime) -> PlatformReputation:
    """Pure scoring function over a normalised profile"""
    age_days = account_age_days(profile, now)

    score = min(AGE_POINTS_CAP, math.floor(age_days * 2))
    score += min(FOLLOWER_POINTS_CAP, math.floor(profile.followers * 0.5))
    score += min(POST_POINTS_CAP, math.floor(profile.posts * 0.2))

    if profile.followers > profile.following and profile.followers > RATIO_MIN_FOLLOWERS:
        ratio = profile.followers / max(1, profile.following)
        score += min(RATIO_POINTS_CAP, math.floor(ratio * 20))

    if profile.verified:
        score += VERIFIED_BONUS

    score = min(MAX_SCORE, score)
    return PlatformReputation(
        username=profile.username,
        score=score,
        tier=calculate_platform_tier(score),
        metrics=PlatformMetrics(
            age_days=math.floor(age_days),
            followers=profile.followers,
            following=profile.following,
            posts=profile.posts,
            platform_verified=profile.verified,
        ),
        calculated_at=now,
    )


class PlatformReputationScorer:
    def __init__(self, platform_client: MoltbookClient, clock: Optional[Clock] = None):
        self.platform_client = platform_client
        self.clock: Clock = clock or utcnow

    async def derive(self, username: str) -> PlatformReputation:
        """Fetch the profile and score it; unknown users raise AgentNotFoundError"""
        profile = await self.platform_client.get_agent(username)
        return score_platform_profile(profile, self.clock())
