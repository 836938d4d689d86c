"""
Catalog Router - apps, categories, rankings, search and the home screen
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from sandbox_api.dependencies import dump, envelope, envelope_error, get_store, optional_user
from sandbox_api.store import SandboxStore, paginate
from smartshop.models import HomeData, RankingType, SearchResult, User

router = APIRouter()
logger = logging.getLogger(__name__)

FEATURED_LIMIT = 3


# ---- v2, bare JSON (declared before apps/{app_id}) ----

@router.get("/apps/featured")
async def get_featured_apps(store: SandboxStore = Depends(get_store)) -> list:
    apps = sorted(store.apps.values(), key=lambda a: a.rating, reverse=True)
    return dump(apps[:FEATURED_LIMIT])


@router.get("/apps/new")
async def get_new_apps(store: SandboxStore = Depends(get_store)) -> list:
    apps = sorted(
        (a for a in store.apps.values() if a.release_date is not None),
        key=lambda a: a.release_date,
        reverse=True,
    )
    return dump(apps[:FEATURED_LIMIT])


@router.get("/apps/recommended")
async def get_recommended_apps(store: SandboxStore = Depends(get_store)) -> list:
    apps = sorted(store.apps.values(), key=lambda a: a.download_count, reverse=True)
    return dump(apps[:FEATURED_LIMIT])


@router.get("/categories/{category_id}")
async def get_category_detail(category_id: str, store: SandboxStore = Depends(get_store)) -> dict:
    category = store.categories.get(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return dump(store.refreshed_category(category))


# ---- v1, enveloped ----

@router.get("/home")
async def get_home_data(store: SandboxStore = Depends(get_store)) -> dict:
    by_rating = sorted(store.apps.values(), key=lambda a: a.rating, reverse=True)
    by_date = sorted(store.apps.values(), key=lambda a: a.release_date or a.last_update_date, reverse=True)
    home = HomeData(
        banners=tuple(store.banners),
        recommended_apps=tuple(by_rating[:FEATURED_LIMIT]),
        new_apps=tuple(by_date[:FEATURED_LIMIT]),
        popular_categories=tuple(store.refreshed_category(c) for c in store.categories.values()),
        promotion_apps=tuple(a for a in store.apps.values() if a.price > 0),
    )
    return envelope(home)


@router.get("/categories")
async def get_categories(store: SandboxStore = Depends(get_store)) -> dict:
    categories = sorted(store.categories.values(), key=lambda c: c.sort_order or 0)
    return envelope([store.refreshed_category(c) for c in categories])


@router.get("/categories/{category_id}/apps")
async def get_category_apps(
    category_id: str,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, alias="pageSize"),
    store: SandboxStore = Depends(get_store),
    user: Optional[User] = Depends(optional_user)
):
    if category_id not in store.categories:
        return envelope_error(f"Category {category_id} not found", 404, status_code=404)
    apps = store.apps_for_user(store.category_apps(category_id), user)
    return envelope(paginate(apps, page, page_size))


@router.get("/ranking")
async def get_ranking_apps(
    type: RankingType = Query(...),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, alias="pageSize"),
    store: SandboxStore = Depends(get_store)
) -> dict:
    apps = list(store.apps.values())
    if type is RankingType.HOT:
        apps.sort(key=lambda a: a.download_count, reverse=True)
    elif type is RankingType.NEW:
        apps.sort(key=lambda a: a.release_date or a.last_update_date, reverse=True)
    else:
        apps.sort(key=lambda a: a.rating, reverse=True)
    return envelope(paginate(apps, page, page_size))


@router.get("/apps/{app_id}")
async def get_app_detail(
    app_id: str,
    store: SandboxStore = Depends(get_store),
    user: Optional[User] = Depends(optional_user)
):
    app = store.apps.get(app_id)
    if app is None:
        return envelope_error(f"App {app_id} not found", 404, status_code=404)
    return envelope(store.apps_for_user([app], user)[0])


@router.get("/search")
async def search_apps(
    keyword: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, alias="pageSize"),
    store: SandboxStore = Depends(get_store)
) -> dict:
    term = keyword.lower()
    matches = [
        a for a in store.apps.values()
        if term in a.name.lower() or term in a.short_description.lower() or term in a.developer.lower()
    ]
    start = (page - 1) * page_size
    categories = {a.category_id for a in matches}
    result = SearchResult(
        apps=tuple(matches[start:start + page_size]),
        total_count=len(matches),
        search_term=keyword,
        categories=tuple(store.refreshed_category(c) for c in store.categories.values() if c.id in categories),
        suggestions=tuple(a.name for a in matches[:3]),
    )
    logger.debug(f"Search '{keyword}': {len(matches)} matches")
    return envelope(result)
