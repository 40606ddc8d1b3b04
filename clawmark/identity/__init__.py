"""
ClawMark Agent DID Identity Module
DID construction, hashing and the in-process registry
"""

from .codec import IdentifierGenerator, build_did, calculate_did_hash, sanitize_agent_name
from .did_models import (
    AgentMetadata,
    DIDDocument,
    DidPage,
    DidRecord,
    DidStatus,
    DidSummary,
    Pagination,
    ServiceEndpoint,
    VerificationMethod,
)
from .did_registry import DIDRegistry

__all__ = [
    "IdentifierGenerator",
    "build_did",
    "calculate_did_hash",
    "sanitize_agent_name",
    "AgentMetadata",
    "DIDDocument",
    "DidPage",
    "DidRecord",
    "DidStatus",
    "DidSummary",
    "Pagination",
    "ServiceEndpoint",
    "VerificationMethod",
    "DIDRegistry",
]
