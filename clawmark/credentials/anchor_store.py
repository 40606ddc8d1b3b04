"""
Credential anchor store
Anchors credential hashes against a DID hash and tracks one-way revocation
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from clawmark.exceptions import ConflictError, NotFoundError, ValidationError
from clawmark.identity.codec import Clock, utcnow
from clawmark.storage import InMemoryStore, KeyValueStore

from .models import CredentialAnchor, CredentialList, CredentialSummary, CredentialVerification

logger = logging.getLogger(__name__)

DEFAULT_REVOCATION_REASON = "No reason provided"

_datetime_adapter = TypeAdapter(datetime)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Accept ISO-8601 strings, epoch numbers or datetimes; naive values are taken as UTC"""
    if value is None or value == "":
        return None
    try:
        parsed = _datetime_adapter.validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class CredentialAnchorStore:
    """Owns the credentialHash -> anchor key space. Anchors are never deleted."""

    def __init__(self, store: Optional[KeyValueStore[CredentialAnchor]] = None, clock: Optional[Clock] = None):
        self.store: KeyValueStore[CredentialAnchor] = store if store is not None else InMemoryStore()
        self.clock: Clock = clock or utcnow

    def anchor(
        self,
        credential_hash: Optional[str],
        did_hash: Optional[str],
        credential_type: Optional[str],
        expires_at: Any = None,
    ) -> CredentialAnchor:
        if not credential_hash or not did_hash or not credential_type:
            raise ValidationError("Missing required fields: credentialHash, didHash, credentialType")

        anchor = CredentialAnchor(
            credential_hash=credential_hash,
            did_hash=did_hash,
            credential_type=credential_type,
            issued_at=self.clock(),
            expires_at=parse_timestamp(expires_at),
            revoked=False,
        )
        if not self.store.put_if_absent(credential_hash, anchor):
            raise ConflictError("Credential already anchored", credentialHash=credential_hash)

        logger.info(f"Anchored {credential_type} credential {credential_hash} for {did_hash}")
        return anchor

    def verify(self, credential_hash: Optional[str]) -> CredentialVerification:
        """
        Verify an anchored credential.

        An unknown hash is reported as an invalid result rather than raised.
        Revocation is checked before expiry.
        """
        if not credential_hash:
            raise ValidationError("credentialHash required")

        anchor = self.store.get(credential_hash)
        if anchor is None:
            return CredentialVerification(valid=False, reason=CredentialVerification.NOT_FOUND)

        if anchor.revoked:
            return CredentialVerification(
                valid=False,
                reason=CredentialVerification.REVOKED,
                anchored_at=anchor.issued_at,
            )

        if anchor.is_expired(self.clock()):
            return CredentialVerification(
                valid=False,
                reason=CredentialVerification.EXPIRED,
                anchored_at=anchor.issued_at,
                expired_at=anchor.expires_at,
            )

        return CredentialVerification(
            valid=True,
            reason=CredentialVerification.VALID,
            anchored_at=anchor.issued_at,
            expires_at=anchor.expires_at,
            did_hash=anchor.did_hash,
            type=anchor.credential_type,
        )

    def revoke(self, credential_hash: Optional[str], reason: Optional[str] = None) -> CredentialAnchor:
        """Revoke a credential. Revoking again succeeds and overwrites the reason."""
        if not credential_hash:
            raise ValidationError("credentialHash required")

        revoked_at = self.clock()

        def _revoke(anchor: CredentialAnchor) -> CredentialAnchor:
            return anchor.model_copy(
                update={
                    "revoked": True,
                    "revoked_at": revoked_at,
                    "revocation_reason": reason or DEFAULT_REVOCATION_REASON,
                }
            )

        updated = self.store.update(credential_hash, _revoke)
        if updated is None:
            raise NotFoundError("Credential not found", credentialHash=credential_hash)

        logger.info(f"Revoked credential {credential_hash}: {updated.revocation_reason}")
        return updated

    def list_by_did(self, did_hash: str) -> CredentialList:
        now = self.clock()
        credentials = [
            CredentialSummary(
                credential_hash=a.credential_hash,
                type=a.credential_type,
                issued_at=a.issued_at,
                expires_at=a.expires_at,
                revoked=a.revoked,
                status=a.status_at(now),
            )
            for a in self.store.values()
            if a.did_hash == did_hash
        ]
        return CredentialList(did_hash=did_hash, credentials=credentials, count=len(credentials))
