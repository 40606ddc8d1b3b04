"""
Reputation tier tables.

Two independent tables exist. Oracle-set scores use ``ORACLE_TIER_BANDS``,
five contiguous inclusive bands partitioning [0, 1000]. Scores derived
from platform metrics use ``PLATFORM_TIER_BANDS``, which has no
"unrated" band and different boundaries. The two are kept apart on
purpose until product intent says they should agree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

MIN_SCORE = 0
MAX_SCORE = 1000


class ReputationTier(str, Enum):
    UNRATED = "unrated"
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


@dataclass(frozen=True)
class TierBand:
    tier: ReputationTier
    min_score: int
    max_score: int

    def contains(self, score: int) -> bool:
        return self.min_score <= score <= self.max_score

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min_score, "max": self.max_score}


ORACLE_TIER_BANDS: Tuple[TierBand, ...] = (
    TierBand(ReputationTier.UNRATED, 0, 199),
    TierBand(ReputationTier.BRONZE, 200, 399),
    TierBand(ReputationTier.SILVER, 400, 699),
    TierBand(ReputationTier.GOLD, 700, 899),
    TierBand(ReputationTier.PLATINUM, 900, 1000),
)

PLATFORM_TIER_BANDS: Tuple[TierBand, ...] = (
    TierBand(ReputationTier.BRONZE, 0, 399),
    TierBand(ReputationTier.SILVER, 400, 599),
    TierBand(ReputationTier.GOLD, 600, 799),
    TierBand(ReputationTier.PLATINUM, 800, 1000),
)


def calculate_tier(score: int) -> ReputationTier:
    """Tier for an oracle-set score"""
    for band in ORACLE_TIER_BANDS:
        if band.contains(score):
            return band.tier
    return ReputationTier.UNRATED


def calculate_platform_tier(score: int) -> ReputationTier:
    """Tier for a platform-derived score; anything under 400 is bronze"""
    if score >= 800:
        return ReputationTier.PLATINUM
    if score >= 600:
        return ReputationTier.GOLD
    if score >= 400:
        return ReputationTier.SILVER
    return ReputationTier.BRONZE


def tier_table(bands: Tuple[TierBand, ...] = ORACLE_TIER_BANDS) -> Dict[str, Dict[str, int]]:
    return {band.tier.value: band.to_dict() for band in bands}
