from typing import Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from clawmark.credentials import CredentialAnchorStore


class AnchorRequest(BaseModel):
    credential_hash: Optional[str] = Field(None, alias="credentialHash")
    did_hash: Optional[str] = Field(None, alias="didHash")
    credential_type: Optional[str] = Field(None, alias="credentialType")
    expires_at: Optional[Any] = Field(None, alias="expiresAt")

    class Config:
        populate_by_name = True


class CredentialRequest(BaseModel):
    credential_hash: Optional[str] = Field(None, alias="credentialHash")
    reason: Optional[str] = None

    class Config:
        populate_by_name = True


def create_credentials_router(store: CredentialAnchorStore) -> APIRouter:
    router = APIRouter(prefix="/v1/credentials", tags=["credentials"])

    @router.post("/anchor", status_code=201)
    async def anchor_credential(body: AnchorRequest):
        anchor = store.anchor(body.credential_hash, body.did_hash, body.credential_type, body.expires_at)
        return {
            "credentialHash": anchor.credential_hash,
            "status": "anchored",
            "issuedAt": anchor.issued_at.isoformat(),
            "message": "Credential anchored successfully",
        }

    @router.post("/verify")
    async def verify_credential(body: CredentialRequest):
        result = store.verify(body.credential_hash)
        if not result.found:
            return JSONResponse(status_code=404, content=result.to_response())
        return result.to_response()

    @router.post("/revoke")
    async def revoke_credential(body: CredentialRequest):
        anchor = store.revoke(body.credential_hash, body.reason)
        return {
            "credentialHash": anchor.credential_hash,
            "status": "revoked",
            "revokedAt": anchor.revoked_at.isoformat() if anchor.revoked_at else None,
            "reason": anchor.revocation_reason,
        }

    @router.get("/agent/{did_hash}")
    async def list_agent_credentials(did_hash: str):
        return store.list_by_did(did_hash).model_dump(by_alias=True, mode="json")

    return router
