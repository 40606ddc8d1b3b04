"""
Challenge-response ownership verification.

An agent proves control of a platform account by publishing a
server-issued challenge string; verification looks for that exact string
in the account's most recent posts.

Expiry is evaluated lazily on every read, so a stale challenge can never
verify even if the periodic sweep has not run yet.
"""

import logging
from typing import Optional

from clawmark.exceptions import ExpiredError, NotFoundError, ValidationError
from clawmark.identity.codec import IdentifierGenerator, epoch_millis
from clawmark.platform.client import MoltbookClient
from clawmark.storage import InMemoryStore, KeyValueStore

from .models import Challenge, OwnershipVerification

logger = logging.getLogger(__name__)

CHALLENGE_NAMESPACE = "clawmark-verify"
CHALLENGE_TTL_SECONDS = 15 * 60
DEFAULT_POSTS_LIMIT = 5


class ChallengeNotFoundError(NotFoundError):
    """No challenge is stored for the username"""


class ChallengeExpiredError(ExpiredError):
    """The stored challenge outlived its TTL and was discarded"""


class ChallengeProtocol:
    def __init__(
        self,
        platform_client: MoltbookClient,
        store: Optional[KeyValueStore[Challenge]] = None,
        id_generator: Optional[IdentifierGenerator] = None,
        ttl_seconds: int = CHALLENGE_TTL_SECONDS,
        namespace: str = CHALLENGE_NAMESPACE,
        posts_limit: int = DEFAULT_POSTS_LIMIT,
    ):
        self.platform_client = platform_client
        self.store: KeyValueStore[Challenge] = store if store is not None else InMemoryStore()
        self.id_generator = id_generator or IdentifierGenerator()
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace
        self.posts_limit = posts_limit

    def _now_millis(self) -> int:
        return epoch_millis(self.id_generator.now())

    def generate_challenge(self, username: Optional[str]) -> Challenge:
        """Issue a fresh challenge, replacing any earlier one for the same username"""
        if not username:
            raise ValidationError("Username required")

        nonce = self.id_generator.random_token()
        timestamp = self._now_millis()
        text = f"{self.namespace}:{username}:{nonce}:{timestamp}"
        challenge = Challenge(
            username=username,
            challenge=text,
            nonce=nonce,
            timestamp=timestamp,
            expires_at=timestamp + self.ttl_seconds * 1000,
            instructions=f'Post this exact string to Moltbook: "{text}"',
        )
        self.store.put(username, challenge)
        logger.info(f"Issued ownership challenge for {username}")
        return challenge

    async def verify_ownership(self, username: Optional[str]) -> OwnershipVerification:
        """
        Check the user's recent posts for the stored challenge string.

        The challenge is consumed only when it is found; a failed check
        leaves it in place for a retry until it expires. Platform failures
        propagate as ExternalServiceError without touching the store.
        """
        if not username:
            raise ValidationError("Username required")

        stored = self.store.get(username)
        if stored is None:
            raise ChallengeNotFoundError("No challenge found. Generate one first.", username=username)

        if stored.is_expired(self._now_millis()):
            self.store.delete_if(username, lambda current: current.challenge == stored.challenge)
            raise ChallengeExpiredError("Challenge expired. Generate a new one.", username=username)

        posts = await self.platform_client.get_recent_posts(username, limit=self.posts_limit)
        verified = any(post.content and stored.challenge in post.content for post in posts)

        if verified:
            # A challenge regenerated while the posts were being fetched stays live
            self.store.delete_if(username, lambda current: current.challenge == stored.challenge)
            logger.info(f"Verified ownership of {username}")
        else:
            logger.info(f"Challenge for {username} not found in {len(posts)} recent posts")

        return OwnershipVerification(
            username=username,
            verified=verified,
            checked_at=self.id_generator.now(),
            posts_checked=len(posts),
            challenge=stored.challenge,
        )

    def purge_expired(self) -> int:
        """Drop expired challenges. Only reclaims memory; reads already ignore them."""
        now = self._now_millis()
        removed = 0
        for username, challenge in self.store.items():
            if challenge.is_expired(now) and self.store.delete_if(
                username, lambda current: current.challenge == challenge.challenge
            ):
                removed += 1
        if removed:
            logger.debug(f"Purged {removed} expired challenges")
        return removed
