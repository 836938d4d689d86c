"""
Auth Router - v2 account endpoints, bare JSON responses
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Response

from sandbox_api.dependencies import bearer_token, current_user, dump, get_store
from sandbox_api.schemas.auth import LoginRequest, RegisterRequest, VerifyEmailRequest
from sandbox_api.store import SandboxStore
from smartshop.models import AuthSession, Registration, User

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/auth/login")
async def login(request: LoginRequest, store: SandboxStore = Depends(get_store)) -> dict:
    user = store.check_password(request.email, request.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = store.issue_token(user.id)
    logger.info(f"User {user.id} logged in")
    return dump(AuthSession(token=token, user=user))


@router.post("/api/auth/register")
async def register(request: RegisterRequest, store: SandboxStore = Depends(get_store)) -> dict:
    if request.password != request.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")
    if store.user_by_email(request.email) is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    user = User(id=f"user-{len(store.users) + 1}", username=request.username, email=request.email)
    store.add_user(user, request.password)
    store.new_verification_code(user.id)
    token = store.issue_token(user.id)
    logger.info(f"Registered user {user.id}")
    return dump(Registration(token=token, user=user, verification_sent=True))


@router.post("/api/auth/verify-email")
async def verify_email(
    request: VerifyEmailRequest,
    user: User = Depends(current_user),
    store: SandboxStore = Depends(get_store)
) -> dict:
    expected = store.verification_codes.get(user.id)
    if expected is None or request.verification_code != expected:
        store.users[user.id] = user.model_copy(
            update={"verification_attempts": user.verification_attempts + 1}
        )
        raise HTTPException(status_code=400, detail="Invalid verification code")

    verified = user.model_copy(update={"is_verified": True})
    store.users[user.id] = verified
    del store.verification_codes[user.id]
    return dump(verified)


@router.post("/api/auth/logout", status_code=204)
async def logout(token: str = Depends(bearer_token), store: SandboxStore = Depends(get_store)) -> Response:
    if store.sessions.pop(token, None) is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return Response(status_code=204)


@router.get("/api/user/profile")
async def get_user_profile(user: User = Depends(current_user)) -> dict:
    return dump(user)
