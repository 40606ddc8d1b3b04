"""
Reputation data models
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .tiers import MAX_SCORE, ReputationTier

Number = Union[int, float]


class ReputationMetrics(BaseModel):
    reliability: Number = 0
    task_completion: Number = Field(0, alias="taskCompletion")
    security: Number = 0
    timeliness: Number = 0
    peer_endorsements: Number = Field(0, alias="peerEndorsements")

    class Config:
        populate_by_name = True


class InteractionCounts(BaseModel):
    total: int = 0
    successful: int = 0
    disputed: int = 0
    failed: int = 0


class ReputationRecord(BaseModel):
    """Oracle-maintained reputation; an absent record reads as the zero default"""
    did: str
    score: int = 0
    max_score: int = Field(MAX_SCORE, alias="maxScore")
    tier: ReputationTier = ReputationTier.UNRATED
    metrics: ReputationMetrics = Field(default_factory=ReputationMetrics)
    interactions: InteractionCounts = Field(default_factory=InteractionCounts)
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    class Config:
        populate_by_name = True

    @classmethod
    def default(cls, did: str) -> "ReputationRecord":
        return cls(did=did)


class ReputationUpdate(BaseModel):
    """Oracle-supplied fields; ``disputed`` and ``failed`` are not accepted"""
    score: Optional[int] = None
    reliability: Optional[Number] = None
    task_completion: Optional[Number] = Field(None, alias="taskCompletion")
    security: Optional[Number] = None
    timeliness: Optional[Number] = None
    peer_endorsements: Optional[Number] = Field(None, alias="peerEndorsements")
    total_interactions: Optional[int] = Field(None, alias="totalInteractions")
    successful_interactions: Optional[int] = Field(None, alias="successfulInteractions")

    class Config:
        populate_by_name = True


class LeaderboardFilters(BaseModel):
    tier: Optional[str] = None


class Leaderboard(BaseModel):
    agents: List[ReputationRecord] = Field(default_factory=list)
    count: int = 0
    filters: LeaderboardFilters = Field(default_factory=LeaderboardFilters)


class PlatformMetrics(BaseModel):
    age_days: int = Field(..., alias="ageDays")
    followers: int
    following: int
    posts: int
    platform_verified: bool = Field(..., alias="platformVerified")

    class Config:
        populate_by_name = True


class PlatformReputation(BaseModel):
    """Score derived from public platform activity, tiered with the platform table"""
    username: str
    score: int
    max_score: int = Field(MAX_SCORE, alias="maxScore")
    tier: ReputationTier
    metrics: PlatformMetrics
    calculated_at: datetime = Field(..., alias="calculatedAt")

    class Config:
        populate_by_name = True
