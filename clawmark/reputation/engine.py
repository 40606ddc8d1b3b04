"""
Reputation engine for oracle-supplied scores
"""

import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from clawmark.exceptions import ValidationError
from clawmark.identity.codec import Clock, utcnow
from clawmark.storage import InMemoryStore, KeyValueStore
from clawmark.utils.paging import positive_int

from .models import (
    InteractionCounts,
    Leaderboard,
    LeaderboardFilters,
    ReputationMetrics,
    ReputationRecord,
    ReputationUpdate,
)
from .tiers import MAX_SCORE, MIN_SCORE, calculate_tier

logger = logging.getLogger(__name__)

DEFAULT_LEADERBOARD_SIZE = 10


class ReputationEngine:
    """Owns the did -> reputation key space. Updates replace the whole record."""

    def __init__(self, store: Optional[KeyValueStore[ReputationRecord]] = None, clock: Optional[Clock] = None):
        self.store: KeyValueStore[ReputationRecord] = store if store is not None else InMemoryStore()
        self.clock: Clock = clock or utcnow

    def get(self, did: str) -> ReputationRecord:
        record = self.store.get(did)
        if record is None:
            return ReputationRecord.default(did)
        return record

    def update(self, did: str, fields: Union[ReputationUpdate, Dict[str, Any]]) -> ReputationRecord:
        """
        Overwrite the reputation for ``did``.

        The tier is recomputed from the score, ``failed`` is derived as
        ``total - successful`` and ``disputed`` resets to 0.
        """
        if not isinstance(fields, ReputationUpdate):
            try:
                fields = ReputationUpdate.model_validate(fields)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid reputation fields: {e.error_count()} error(s)") from e

        score = fields.score
        if score is None or score < MIN_SCORE or score > MAX_SCORE:
            raise ValidationError(f"Score must be between {MIN_SCORE} and {MAX_SCORE}")

        total = fields.total_interactions or 0
        successful = fields.successful_interactions or 0
        record = ReputationRecord(
            did=did,
            score=score,
            tier=calculate_tier(score),
            metrics=ReputationMetrics(
                reliability=fields.reliability or 0,
                task_completion=fields.task_completion or 0,
                security=fields.security or 0,
                timeliness=fields.timeliness or 0,
                peer_endorsements=fields.peer_endorsements or 0,
            ),
            interactions=InteractionCounts(
                total=total,
                successful=successful,
                disputed=0,
                failed=total - successful,
            ),
            updated_at=self.clock(),
        )
        self.store.put(did, record)
        logger.info(f"Reputation for {did} set to {score} ({record.tier.value})")
        return record

    def leaderboard(self, limit: Any = DEFAULT_LEADERBOARD_SIZE, tier: Optional[str] = None) -> Leaderboard:
        limit = positive_int(limit, DEFAULT_LEADERBOARD_SIZE)

        agents = self.store.values()
        if tier:
            agents = [a for a in agents if a.tier.value == tier]
        # sorted() is stable, so equal scores keep store order
        top = sorted(agents, key=lambda a: a.score, reverse=True)[:limit]
        return Leaderboard(agents=top, count=len(top), filters=LeaderboardFilters(tier=tier))
