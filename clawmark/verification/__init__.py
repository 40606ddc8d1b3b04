from .challenge import (
    CHALLENGE_NAMESPACE,
    CHALLENGE_TTL_SECONDS,
    ChallengeExpiredError,
    ChallengeNotFoundError,
    ChallengeProtocol,
)
from .models import Challenge, OwnershipVerification

__all__ = [
    "CHALLENGE_NAMESPACE",
    "CHALLENGE_TTL_SECONDS",
    "ChallengeExpiredError",
    "ChallengeNotFoundError",
    "ChallengeProtocol",
    "Challenge",
    "OwnershipVerification",
]
