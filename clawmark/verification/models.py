from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Challenge(BaseModel):
    """Live ownership challenge; timestamps are epoch milliseconds"""
    username: str
    challenge: str
    nonce: str
    timestamp: int
    expires_at: int = Field(..., alias="expiresAt")
    instructions: Optional[str] = None

    class Config:
        populate_by_name = True

    def is_expired(self, now_millis: int) -> bool:
        return now_millis > self.expires_at


class OwnershipVerification(BaseModel):
    username: str
    verified: bool
    checked_at: datetime = Field(..., alias="checkedAt")
    posts_checked: int = Field(..., alias="postsChecked")
    challenge: str

    class Config:
        populate_by_name = True
