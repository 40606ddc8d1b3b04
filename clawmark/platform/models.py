"""
Explicit schema for the external agent platform (Moltbook).

Defaulting rules for optional upstream fields are applied here, once,
so callers always see fully populated profiles.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

PLATFORM_NAME = "moltbook"


class PlatformAgentPayload(BaseModel):
    """Body of ``GET /agents/{username}`` as the platform sends it"""
    username: str
    display_name: Optional[str] = Field(None, alias="displayName")
    bio: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    followers_count: int = Field(0, alias="followersCount")
    following_count: int = Field(0, alias="followingCount")
    posts_count: int = Field(0, alias="postsCount")
    verified: bool = False

    class Config:
        populate_by_name = True
        extra = "ignore"

    @field_validator("followers_count", "following_count", "posts_count", mode="before")
    @classmethod
    def _missing_count_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("verified", mode="before")
    @classmethod
    def _missing_flag_is_false(cls, value: Any) -> Any:
        return False if value is None else value


class PlatformProfile(BaseModel):
    """Normalised agent profile"""
    found: bool = True
    username: str
    display_name: str = Field(..., alias="displayName")
    bio: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    followers: int = 0
    following: int = 0
    posts: int = 0
    verified: bool = False
    platform: str = PLATFORM_NAME

    class Config:
        populate_by_name = True

    @classmethod
    def from_payload(cls, payload: PlatformAgentPayload) -> "PlatformProfile":
        return cls(
            username=payload.username,
            display_name=payload.display_name or payload.username,
            bio=payload.bio,
            avatar=payload.avatar,
            created_at=payload.created_at,
            followers=payload.followers_count,
            following=payload.following_count,
            posts=payload.posts_count,
            verified=payload.verified,
        )


class PlatformPost(BaseModel):
    content: Optional[str] = None

    class Config:
        extra = "allow"

    @field_validator("content", mode="before")
    @classmethod
    def _text_only(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None


def extract_posts(data: Any) -> List[PlatformPost]:
    """The posts endpoint answers with either a bare list or ``{"posts": [...]}``"""
    if isinstance(data, dict):
        data = data.get("posts") or []
    if not isinstance(data, list):
        return []
    posts: List[PlatformPost] = []
    for item in data:
        if isinstance(item, dict):
            posts.append(PlatformPost.model_validate(item))
    return posts


def profile_response(profile: PlatformProfile) -> Dict[str, Any]:
    return profile.model_dump(by_alias=True, mode="json")
