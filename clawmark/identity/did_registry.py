"""
DID Registry for ClawMark Agents
Owns the did -> record key space; records are never physically deleted
"""

import logging
import math
from typing import Any, Optional, Union

from clawmark.exceptions import ConflictError, NotFoundError, ValidationError
from clawmark.storage import InMemoryStore, KeyValueStore
from clawmark.utils.paging import positive_int

from .codec import IdentifierGenerator, calculate_did_hash
from .did_models import (
    AgentMetadata,
    DIDDocument,
    DidPage,
    DidRecord,
    DidStatus,
    DidSummary,
    Pagination,
    ServiceEndpoint,
    ServiceType,
    VERIFICATION_SERVICE_ENDPOINT,
    VerificationMethod,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


class DIDRegistry:
    """
    Registers, resolves and deactivates agent DIDs.
    Deactivation performs no signature or controller check.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore[DidRecord]] = None,
        id_generator: Optional[IdentifierGenerator] = None,
    ):
        self.store: KeyValueStore[DidRecord] = store if store is not None else InMemoryStore()
        self.id_generator = id_generator or IdentifierGenerator()

    def register(
        self,
        platform: Optional[str],
        agent_name: Optional[str],
        public_key: Optional[str],
        stake: Union[str, int, float, None] = None,
    ) -> DidRecord:
        """
        Register a new agent DID

        Args:
            platform: Platform the agent lives on (becomes part of the DID)
            agent_name: Human-readable agent name, slugged into the DID
            public_key: Multibase public key, the sole verification method
            stake: Opaque stake amount, "0" when omitted

        Returns:
            The stored DidRecord
        """
        if not platform or not agent_name or not public_key:
            raise ValidationError("Missing required fields: platform, agentName, publicKey")

        now = self.id_generator.now()
        did = self.id_generator.new_did(platform, agent_name, now)
        did_hash = calculate_did_hash(did)

        document = DIDDocument(
            id=did,
            created=now,
            controller=f"did:key:{public_key}",
            verification_method=[
                VerificationMethod(
                    id=f"{did}#keys-1",
                    controller=did,
                    public_key_multibase=public_key,
                )
            ],
            authentication=["#keys-1"],
            assertion_method=["#keys-1"],
            service=[
                ServiceEndpoint(
                    id="#avs",
                    type=ServiceType.AGENT_VERIFICATION,
                    service_endpoint=VERIFICATION_SERVICE_ENDPOINT,
                )
            ],
            agent_metadata=AgentMetadata(name=agent_name, platform=platform, created=now),
        )
        record = DidRecord(
            did=did,
            did_hash=did_hash,
            document=document,
            stake=stake or "0",
            active=True,
            created_at=now,
        )

        # Suffix collisions are treated as negligible; an existing DID is never overwritten.
        if not self.store.put_if_absent(did, record):
            raise ConflictError("Generated DID collided with an existing record, retry", did=did)

        logger.info(f"Registered DID {did} ({did_hash})")
        return record

    def get_record(self, did: str) -> DidRecord:
        record = self.store.get(did)
        if record is None:
            raise NotFoundError("DID not found", did=did)
        return record

    def resolve(self, did: str) -> DIDDocument:
        """Resolve DID to its document. Only the local registry is consulted."""
        return self.get_record(did).document

    def status(self, did: str) -> DidStatus:
        record = self.get_record(did)
        return DidStatus(
            did=record.did,
            did_hash=record.did_hash,
            active=record.active,
            stake=record.stake,
            created_at=record.created_at,
        )

    def deactivate(self, did: str) -> DidRecord:
        def _deactivate(record: DidRecord) -> DidRecord:
            document = record.document.model_copy(update={"active": False})
            return record.model_copy(update={"active": False, "document": document})

        updated = self.store.update(did, _deactivate)
        if updated is None:
            raise NotFoundError("DID not found", did=did)
        logger.info(f"Deactivated DID {did}")
        return updated

    def list(self, page: Any = 1, limit: Any = DEFAULT_PAGE_SIZE) -> DidPage:
        """List registered DIDs in insertion order. Unusable paging values fall back to the defaults."""
        page = positive_int(page, 1)
        limit = positive_int(limit, DEFAULT_PAGE_SIZE)

        records = self.store.values()
        offset = (page - 1) * limit
        window = records[offset:offset + limit]
        return DidPage(
            dids=[
                DidSummary(
                    did=r.did,
                    name=r.document.agent_metadata.name,
                    platform=r.document.agent_metadata.platform,
                    active=r.active,
                    created_at=r.created_at,
                )
                for r in window
            ],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=len(records),
                pages=math.ceil(len(records) / limit),
            ),
        )
