"""
Credential anchor data models
"""

from datetime import datetime
from enum import Enum
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field


class CredentialStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"


class CredentialAnchor(BaseModel):
    """Anchored credential hash and its revocation state"""
    credential_hash: str = Field(..., alias="credentialHash")
    did_hash: str = Field(..., alias="didHash", description="Subject DID hash, not checked against the registry")
    credential_type: str = Field(..., alias="credentialType")
    issued_at: datetime = Field(..., alias="issuedAt")
    expires_at: Optional[datetime] = Field(None, alias="expiresAt")
    revoked: bool = False
    revoked_at: Optional[datetime] = Field(None, alias="revokedAt")
    revocation_reason: Optional[str] = Field(None, alias="revocationReason")

    class Config:
        populate_by_name = True

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now > self.expires_at

    def status_at(self, now: datetime) -> CredentialStatus:
        # Revocation takes precedence over expiry
        if self.revoked:
            return CredentialStatus.REVOKED
        if self.is_expired(now):
            return CredentialStatus.EXPIRED
        return CredentialStatus.ACTIVE


class CredentialVerification(BaseModel):
    """Outcome of a verification; only the fields set for the outcome are serialised"""
    NOT_FOUND: ClassVar[str] = "Credential not found"
    REVOKED: ClassVar[str] = "Credential revoked"
    EXPIRED: ClassVar[str] = "Credential expired"
    VALID: ClassVar[str] = "Valid"

    valid: bool
    reason: str
    anchored_at: Optional[datetime] = Field(None, alias="anchoredAt")
    expires_at: Optional[datetime] = Field(None, alias="expiresAt")
    expired_at: Optional[datetime] = Field(None, alias="expiredAt")
    did_hash: Optional[str] = Field(None, alias="didHash")
    type: Optional[str] = None

    class Config:
        populate_by_name = True

    @property
    def found(self) -> bool:
        return self.reason != self.NOT_FOUND

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class CredentialSummary(BaseModel):
    credential_hash: str = Field(..., alias="credentialHash")
    type: str
    issued_at: datetime = Field(..., alias="issuedAt")
    expires_at: Optional[datetime] = Field(None, alias="expiresAt")
    revoked: bool
    status: CredentialStatus

    class Config:
        populate_by_name = True


class CredentialList(BaseModel):
    did_hash: str = Field(..., alias="didHash")
    credentials: List[CredentialSummary] = Field(default_factory=list)
    count: int = 0

    class Config:
        populate_by_name = True
