from .engine import ReputationEngine
from .models import (
    InteractionCounts,
    Leaderboard,
    PlatformMetrics,
    PlatformReputation,
    ReputationMetrics,
    ReputationRecord,
    ReputationUpdate,
)
from .platform_scoring import PlatformReputationScorer, score_platform_profile
from .tiers import (
    MAX_SCORE,
    ORACLE_TIER_BANDS,
    PLATFORM_TIER_BANDS,
    ReputationTier,
    calculate_platform_tier,
    calculate_tier,
    tier_table,
)

__all__ = [
    "ReputationEngine",
    "InteractionCounts",
    "Leaderboard",
    "PlatformMetrics",
    "PlatformReputation",
    "ReputationMetrics",
    "ReputationRecord",
    "ReputationUpdate",
    "PlatformReputationScorer",
    "score_platform_profile",
    "MAX_SCORE",
    "ORACLE_TIER_BANDS",
    "PLATFORM_TIER_BANDS",
    "ReputationTier",
    "calculate_platform_tier",
    "calculate_tier",
    "tier_table",
]
