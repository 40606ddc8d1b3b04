from datetime import timedelta

import pytest

from clawmark.exceptions import ValidationError
from clawmark.platform import AgentNotFoundError, PlatformProfile
from clawmark.reputation import (
    ORACLE_TIER_BANDS,
    PlatformReputationScorer,
    ReputationEngine,
    ReputationTier,
    calculate_platform_tier,
    calculate_tier,
    score_platform_profile,
    tier_table,
)


@pytest.mark.parametrize(
    "score,tier",
    [
        (0, "unrated"),
        (199, "unrated"),
        (200, "bronze"),
        (399, "bronze"),
        (400, "silver"),
        (699, "silver"),
        (700, "gold"),
        (899, "gold"),
        (900, "platinum"),
        (1000, "platinum"),
    ],
)
def test_oracle_tier_boundaries(score, tier):
    assert calculate_tier(score).value == tier


def test_oracle_bands_partition_the_score_range():
    for score in range(0, 1001):
        matching = [band for band in ORACLE_TIER_BANDS if band.contains(score)]
        assert len(matching) == 1


@pytest.mark.parametrize(
    "score,tier",
    [(0, "bronze"), (399, "bronze"), (400, "silver"), (599, "silver"), (600, "gold"), (799, "gold"), (800, "platinum")],
)
def test_platform_tier_table_is_separate(score, tier):
    assert calculate_platform_tier(score).value == tier


def test_tier_table_shape():
    assert tier_table()["silver"] == {"min": 400, "max": 699}


def test_missing_record_reads_as_default():
    record = ReputationEngine().get("did:agent:x")
    assert record.score == 0
    assert record.tier == ReputationTier.UNRATED
    assert record.interactions.total == 0
    assert record.updated_at is None


def test_update_derives_tier_and_interactions(clock):
    engine = ReputationEngine(clock=clock)
    record = engine.update(
        "did:agent:x",
        {"score": 1000, "totalInteractions": 10, "successfulInteractions": 7, "reliability": 90},
    )

    assert record.tier == ReputationTier.PLATINUM
    assert record.interactions.failed == 3
    assert record.interactions.disputed == 0
    assert record.metrics.reliability == 90
    assert record.metrics.security == 0
    assert record.updated_at == clock()
    assert engine.get("did:agent:x") == record


def test_update_overwrites_without_merging():
    engine = ReputationEngine()
    engine.update("did:agent:x", {"score": 500, "reliability": 80, "totalInteractions": 4})
    record = engine.update("did:agent:x", {"score": 300})

    assert record.metrics.reliability == 0
    assert record.interactions.total == 0
    assert record.tier == ReputationTier.BRONZE


@pytest.mark.parametrize("fields", [{"score": -1}, {"score": 1001}, {}, {"score": "lots"}])
def test_update_rejects_invalid_scores(fields):
    with pytest.raises(ValidationError):
        ReputationEngine().update("did:agent:x", fields)


def test_leaderboard_filters_sorts_and_truncates():
    engine = ReputationEngine()
    engine.update("a", {"score": 720})
    engine.update("b", {"score": 880})
    engine.update("c", {"score": 950})
    engine.update("d", {"score": 800})
    engine.update("e", {"score": 100})

    board = engine.leaderboard(limit=2, tier="gold")
    assert [a.did for a in board.agents] == ["b", "d"]
    assert all(a.tier == ReputationTier.GOLD for a in board.agents)
    assert board.count == 2
    assert board.filters.tier == "gold"

    everyone = engine.leaderboard(limit=10)
    assert [a.did for a in everyone.agents] == ["c", "b", "d", "a", "e"]


def test_leaderboard_ties_keep_insertion_order():
    engine = ReputationEngine()
    for did in ["x", "y", "z"]:
        engine.update(did, {"score": 500})
    assert [a.did for a in engine.leaderboard().agents] == ["x", "y", "z"]


def _profile(**overrides) -> PlatformProfile:
    data = dict(username="alice", display_name="alice", followers=0, following=0, posts=0, verified=False)
    data.update(overrides)
    return PlatformProfile(**data)


def test_platform_score_components(clock):
    profile = _profile(
        created_at=clock() - timedelta(days=30, hours=12),
        followers=100,
        following=20,
        posts=50,
    )
    reputation = score_platform_profile(profile, clock())

    # age 61 + followers 50 + posts 10 + ratio min(100, 5 * 20)
    assert reputation.score == 61 + 50 + 10 + 100
    assert reputation.metrics.age_days == 30
    assert reputation.tier == ReputationTier.BRONZE


def test_platform_score_caps_and_clamps(clock):
    profile = _profile(
        created_at=clock() - timedelta(days=365),
        followers=10000,
        following=1,
        posts=5000,
        verified=True,
    )
    reputation = score_platform_profile(profile, clock())

    assert reputation.score == 1000
    assert reputation.tier == ReputationTier.PLATINUM
    assert reputation.metrics.platform_verified is True


def test_ratio_bonus_requires_more_than_ten_followers(clock):
    profile = _profile(created_at=clock(), followers=10, following=0)
    assert score_platform_profile(profile, clock()).score == 5


def test_missing_creation_date_scores_no_age(clock):
    assert score_platform_profile(_profile(verified=True), clock()).score == 200


@pytest.mark.asyncio
async def test_derive_fetches_profile(platform_client, moltbook, clock):
    moltbook.profiles["alice"] = {
        "username": "alice",
        "createdAt": (clock() - timedelta(days=200)).isoformat(),
        "followersCount": 900,
        "followingCount": None,
        "postsCount": 1000,
        "verified": True,
    }
    scorer = PlatformReputationScorer(platform_client, clock=clock)

    reputation = await scorer.derive("alice")
    # every component at its cap
    assert reputation.score == 1000
    assert reputation.metrics.following == 0
    assert reputation.calculated_at == clock()


@pytest.mark.asyncio
async def test_derive_unknown_user(platform_client):
    with pytest.raises(AgentNotFoundError):
        await PlatformReputationScorer(platform_client).derive("ghost")


@pytest.mark.parametrize("limit", [0, -5, "abc", None])
def test_leaderboard_unusable_limit_uses_default(limit):
    engine = ReputationEngine()
    for i in range(12):
        engine.update(f"did:{i}", {"score": i * 10})

    board = engine.leaderboard(limit=limit)
    assert board.count == 10
    assert board.agents[0].did == "did:11"
