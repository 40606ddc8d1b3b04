"""
Wiring for the trust-state services shared by the HTTP layer
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from clawmark.config import ClawMarkSettings
from clawmark.credentials import CredentialAnchorStore
from clawmark.identity import DIDRegistry, IdentifierGenerator
from clawmark.maintenance import MaintenanceScheduler
from clawmark.platform import MoltbookClient
from clawmark.reputation import PlatformReputationScorer, ReputationEngine
from clawmark.verification import ChallengeProtocol

logger = logging.getLogger(__name__)

CHALLENGE_SWEEP_JOB = "challenge-sweep"


@dataclass
class ClawMarkServices:
    settings: ClawMarkSettings
    platform_client: MoltbookClient
    did_registry: DIDRegistry
    credential_store: CredentialAnchorStore
    challenges: ChallengeProtocol
    reputation: ReputationEngine
    platform_reputation: PlatformReputationScorer
    scheduler: MaintenanceScheduler

    @classmethod
    def build(
        cls,
        settings: Optional[ClawMarkSettings] = None,
        id_generator: Optional[IdentifierGenerator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ClawMarkServices":
        settings = settings or ClawMarkSettings.load()
        id_generator = id_generator or IdentifierGenerator()
        platform_client = MoltbookClient.from_settings(settings, transport=transport)
        return cls(
            settings=settings,
            platform_client=platform_client,
            did_registry=DIDRegistry(id_generator=id_generator),
            credential_store=CredentialAnchorStore(clock=id_generator.now),
            challenges=ChallengeProtocol(
                platform_client,
                id_generator=id_generator,
                ttl_seconds=settings.challenge_ttl_seconds,
                namespace=settings.challenge_namespace,
                posts_limit=settings.posts_page_size,
            ),
            reputation=ReputationEngine(clock=id_generator.now),
            platform_reputation=PlatformReputationScorer(platform_client, clock=id_generator.now),
            scheduler=MaintenanceScheduler(),
        )

    def start(self) -> None:
        interval = self.settings.cleanup_interval_minutes
        if interval > 0:
            self.scheduler.add_job(CHALLENGE_SWEEP_JOB, self.challenges.purge_expired, interval)
            self.scheduler.start()
        else:
            logger.info("Challenge sweep disabled")

    async def aclose(self) -> None:
        self.scheduler.stop()
        await self.platform_client.aclose()
