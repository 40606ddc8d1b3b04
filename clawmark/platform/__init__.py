from .client import AgentNotFoundError, MoltbookClient
from .models import PlatformAgentPayload, PlatformPost, PlatformProfile, extract_posts

__all__ = [
    "AgentNotFoundError",
    "MoltbookClient",
    "PlatformAgentPayload",
    "PlatformPost",
    "PlatformProfile",
    "extract_posts",
]
