from .anchor_store import CredentialAnchorStore, parse_timestamp
from .models import (
    CredentialAnchor,
    CredentialList,
    CredentialStatus,
    CredentialSummary,
    CredentialVerification,
)

__all__ = [
    "CredentialAnchorStore",
    "parse_timestamp",
    "CredentialAnchor",
    "CredentialList",
    "CredentialStatus",
    "CredentialSummary",
    "CredentialVerification",
]
