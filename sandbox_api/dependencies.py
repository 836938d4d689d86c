"""
Sandbox Dependencies - store access, bearer-token auth and response helpers
"""

import logging
from typing import Any, Optional

from fastapi import Depends, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from sandbox_api.store import SandboxStore
from smartshop.models import User

logger = logging.getLogger(__name__)


def get_store(request: Request) -> SandboxStore:
    """
    FastAPI dependency to access the backend state.

    Usage in routers:
        @router.get("/example")
        async def example(store: SandboxStore = Depends(get_store)):
            ...
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Sandbox store not initialized")
    return store


def bearer_token(authorization: Optional[str] = Header(None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return authorization[len("Bearer "):]


def current_user(token: str = Depends(bearer_token), store: SandboxStore = Depends(get_store)) -> User:
    user = store.user_for_token(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user


def optional_user(authorization: Optional[str] = Header(None),
                  store: SandboxStore = Depends(get_store)) -> Optional[User]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return store.user_for_token(authorization[len("Bearer "):])


def dump(value: Any) -> Any:
    """Serialize models (or sequences of them) with their canonical wire names."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [dump(v) for v in value]
    return value


def envelope(data: Any = None) -> dict:
    return {"success": True, "data": dump(data)}


def envelope_error(message: str, error_code: int, status_code: int = 200) -> JSONResponse:
    logger.info(f"Envelope failure {error_code}: {message}")
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "errorCode": error_code},
    )
