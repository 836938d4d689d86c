"""
Version Router - latest published client build (v2, bare JSON)
"""

from fastapi import APIRouter, Depends, HTTPException

from sandbox_api.dependencies import dump, get_store
from sandbox_api.store import SandboxStore

router = APIRouter()


@router.get("/api/version/latest")
async def get_latest_version(store: SandboxStore = Depends(get_store)) -> dict:
    if store.latest_version is None:
        raise HTTPException(status_code=404, detail="No published version")
    return dump(store.latest_version)
