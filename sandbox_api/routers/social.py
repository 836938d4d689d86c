"""
Social Router - comments, favorites and user settings (v1, enveloped)
"""

import logging
import secrets
from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends, Form, Query

from sandbox_api.dependencies import current_user, envelope, envelope_error, get_store
from sandbox_api.store import SandboxStore, paginate
from smartshop.models import Comment, User, UserSettings

router = APIRouter()
logger = logging.getLogger(__name__)

# Business error codes returned inside the envelope
ERROR_INVALID_RATING = 4001
ERROR_ALREADY_COMMENTED = 4002


def _now() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@router.get("/apps/{app_id}/comments")
async def get_app_comments(
    app_id: str,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, alias="pageSize"),
    store: SandboxStore = Depends(get_store)
):
    if app_id not in store.apps:
        return envelope_error(f"App {app_id} not found", 404, status_code=404)
    comments = sorted(store.comments.get(app_id, []), key=lambda c: c.date, reverse=True)
    return envelope(paginate(comments, page, page_size))


@router.post("/apps/{app_id}/comments")
async def post_comment(
    app_id: str,
    rating: int = Form(...),
    content: str = Form(...),
    user: User = Depends(current_user),
    store: SandboxStore = Depends(get_store)
):
    if user.is_banned:
        return envelope_error("Account is banned", 403, status_code=403)
    if app_id not in store.apps:
        return envelope_error(f"App {app_id} not found", 404, status_code=404)
    if not 1 <= rating <= 5:
        return envelope_error("Rating must be between 1 and 5", ERROR_INVALID_RATING)
    existing = store.comments.setdefault(app_id, [])
    if any(c.user_id == user.id for c in existing):
        return envelope_error("You have already reviewed this app", ERROR_ALREADY_COMMENTED)

    comment = Comment(
        id=f"comment-{secrets.token_hex(4)}",
        app_id=app_id,
        user_id=user.id,
        username=user.username,
        user_avatar=user.avatar,
        rating=rating,
        content=content,
        date=_now(),
    )
    existing.append(comment)
    logger.info(f"User {user.id} reviewed {app_id} ({rating}/5)")
    return envelope(comment)


@router.post("/apps/{app_id}/favorite")
async def toggle_favorite(
    app_id: str,
    favorite: bool = Query(...),
    user: User = Depends(current_user),
    store: SandboxStore = Depends(get_store)
):
    if user.is_banned:
        return envelope_error("Account is banned", 403, status_code=403)
    if app_id not in store.apps:
        return envelope_error(f"App {app_id} not found", 404, status_code=404)

    favorites = store.favorites.setdefault(user.id, set())
    if favorite:
        favorites.add(app_id)
    else:
        favorites.discard(app_id)
    return envelope(favorite)


@router.get("/user/favorites")
async def get_favorite_apps(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, alias="pageSize"),
    user: User = Depends(current_user),
    store: SandboxStore = Depends(get_store)
) -> dict:
    favorite_ids = store.favorites.get(user.id, set())
    apps = [a for a in store.apps.values() if a.id in favorite_ids]
    return envelope(paginate(store.apps_for_user(apps, user), page, page_size))


@router.put("/user/settings")
async def update_user_settings(
    settings: UserSettings = Body(..., embed=True),
    user: User = Depends(current_user),
    store: SandboxStore = Depends(get_store)
):
    if user.is_banned:
        return envelope_error("Account is banned", 403, status_code=403)
    store.user_settings[user.id] = settings
    return envelope(True)
