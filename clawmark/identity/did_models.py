"""
DID Data Models for ClawMark Agents
Following the W3C DID Core document layout
"""

from typing import List, Dict, Optional, Any, Union
from datetime import datetime
from pydantic import BaseModel, Field
from enum import Enum


DID_CONTEXT = [
    "https://www.w3.org/ns/did/v1",
    "https://agentverify.io/v1",
]
VERIFICATION_SERVICE_ENDPOINT = "https://api.agentverify.io/v1"


class VerificationMethodType(str, Enum):
    """Supported verification method types"""
    ED25519 = "Ed25519VerificationKey2020"


class ServiceType(str, Enum):
    """Agent service endpoint types"""
    AGENT_VERIFICATION = "AgentVerificationService"


class VerificationMethod(BaseModel):
    """Cryptographic verification method for DID authentication"""
    id: str = Field(..., description="Method identifier (DID#keys-1)")
    type: VerificationMethodType = Field(VerificationMethodType.ED25519, description="Cryptographic suite")
    controller: str = Field(..., description="DID that controls this method")
    public_key_multibase: str = Field(..., alias="publicKeyMultibase")

    class Config:
        populate_by_name = True


class ServiceEndpoint(BaseModel):
    """Service endpoint for agent interaction"""
    id: str = Field(..., description="Service identifier")
    type: ServiceType = Field(..., description="Service type")
    service_endpoint: str = Field(..., alias="serviceEndpoint", description="URL or URI")

    class Config:
        populate_by_name = True


class AgentMetadata(BaseModel):
    name: str
    platform: str
    created: datetime


class DIDDocument(BaseModel):
    """
    W3C DID Document for a registered agent
    """
    context: List[str] = Field(
        default_factory=lambda: list(DID_CONTEXT),
        alias="@context",
        description="JSON-LD context"
    )
    id: str = Field(..., description="DID identifier (did:agent:<platform>:<slug>)")
    created: datetime
    controller: str = Field(..., description="did:key controller derived from the public key")
    verification_method: List[VerificationMethod] = Field(
        default_factory=list,
        alias="verificationMethod",
        description="Verification methods"
    )
    authentication: List[str] = Field(
        default_factory=list,
        description="Authentication method references"
    )
    assertion_method: List[str] = Field(
        default_factory=list,
        alias="assertionMethod",
        description="Assertion method references"
    )
    service: List[ServiceEndpoint] = Field(
        default_factory=list,
        description="Service endpoints"
    )
    agent_metadata: AgentMetadata = Field(..., alias="agentMetadata")
    # Only present once the DID has been deactivated
    active: Optional[bool] = None

    class Config:
        populate_by_name = True

    def to_did_document(self) -> Dict[str, Any]:
        """Export as standard W3C DID Document"""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class DidRecord(BaseModel):
    """Registry entry owning a DID and its document"""
    did: str
    did_hash: str = Field(..., alias="didHash", description="Keccak256 hash of DID")
    document: DIDDocument
    stake: Union[str, int, float] = "0"
    active: bool = True
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        populate_by_name = True


class DidStatus(BaseModel):
    did: str
    did_hash: str = Field(..., alias="didHash")
    active: bool
    stake: Union[str, int, float]
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        populate_by_name = True


class DidSummary(BaseModel):
    did: str
    name: str
    platform: str
    active: bool
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        populate_by_name = True


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class DidPage(BaseModel):
    dids: List[DidSummary] = Field(default_factory=list)
    pagination: Pagination
