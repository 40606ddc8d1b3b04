from typing import Optional, Union

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from clawmark.identity import DIDRegistry
from clawmark.identity.did_registry import DEFAULT_PAGE_SIZE


class RegisterRequest(BaseModel):
    platform: Optional[str] = None
    agent_name: Optional[str] = Field(None, alias="agentName")
    public_key: Optional[str] = Field(None, alias="publicKey")
    stake: Optional[Union[str, int, float]] = None

    class Config:
        populate_by_name = True


def create_did_router(registry: DIDRegistry) -> APIRouter:
    router = APIRouter(prefix="/v1/did", tags=["did"])

    @router.post("/register", status_code=201)
    async def register_did(body: RegisterRequest):
        record = registry.register(body.platform, body.agent_name, body.public_key, body.stake)
        return {
            "did": record.did,
            "didHash": record.did_hash,
            "document": record.document.to_did_document(),
            "message": "DID registered successfully",
        }

    @router.get("")
    async def list_dids(page: Optional[str] = Query(None), limit: Optional[str] = Query(None)):
        return registry.list(page=page or 1, limit=limit or DEFAULT_PAGE_SIZE).model_dump(by_alias=True, mode="json")

    @router.get("/{did}")
    async def resolve_did(did: str):
        return registry.resolve(did).to_did_document()

    @router.get("/{did}/status")
    async def did_status(did: str):
        return registry.status(did).model_dump(by_alias=True, mode="json")

    @router.post("/{did}/deactivate")
    async def deactivate_did(did: str):
        registry.deactivate(did)
        return {"did": did, "status": "deactivated", "message": "DID deactivated successfully"}

    return router
