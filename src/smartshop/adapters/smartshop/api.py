# Executes the declared SmartShop endpoints
import asyncio
import logging
from typing import Any, Optional

from smartshop.adapters.smartshop import endpoints as ep
from smartshop.adapters.smartshop.client import SmartShopHTTPClient
from smartshop.models import (
    ApiResponse,
    App,
    AuthSession,
    Category,
    Comment,
    HomeData,
    PagedResponse,
    RankingType,
    Registration,
    Report,
    ReportReason,
    ReportType,
    SearchResult,
    User,
    UserSettings,
    VersionInfo,
)

logger = logging.getLogger(__name__)


class SmartShopApi:
    """
    Typed, awaitable access to every SmartShop endpoint.

    Each method returns the decoded envelope (bare endpoints are wrapped) and
    raises the ``smartshop.errors`` taxonomy for transport, status and decode
    failures. It does not interpret ``success=false``; that is the
    repository's job.

    The blocking HTTP round-trip runs in a worker thread so the event loop
    keeps serving other operations. Cancelling the awaiting task abandons the
    result; no state in this class is touched by a call.
    """

    def __init__(self, client: Optional[SmartShopHTTPClient] = None):
        self._client: SmartShopHTTPClient = client or SmartShopHTTPClient()

    async def call(self, endpoint: ep.Endpoint, token: Optional[str] = None, **arguments: Any) -> ApiResponse:
        prepared = endpoint.prepare(token=token, **arguments)
        payload = await asyncio.to_thread(self._client.send, prepared)
        response = endpoint.decode(payload)
        logger.debug(f"{endpoint.operation}: success={response.success}")
        return response

    # ---- auth ----

    async def login(self, email: str, password: str, remember_me: bool = False) -> ApiResponse[AuthSession]:
        return await self.call(ep.LOGIN, email=email, password=password, remember_me=remember_me)

    async def register(self, username: str, email: str, password: str,
                       confirm_password: str) -> ApiResponse[Registration]:
        return await self.call(ep.REGISTER, username=username, email=email,
                               password=password, confirm_password=confirm_password)

    async def verify_email(self, token: str, code: str) -> ApiResponse[User]:
        return await self.call(ep.VERIFY_EMAIL, token=token, code=code)

    async def logout(self, token: str) -> ApiResponse[Any]:
        return await self.call(ep.LOGOUT, token=token)

    async def get_user_profile(self, token: str) -> ApiResponse[User]:
        return await self.call(ep.GET_USER_PROFILE, token=token)

    async def update_user_settings(self, token: str, settings: UserSettings) -> ApiResponse[bool]:
        return await self.call(ep.UPDATE_USER_SETTINGS, token=token, settings=settings)

    # ---- catalog ----

    async def get_featured_apps(self) -> ApiResponse[tuple[App, ...]]:
        return await self.call(ep.GET_FEATURED_APPS)

    async def get_new_apps(self) -> ApiResponse[tuple[App, ...]]:
        return await self.call(ep.GET_NEW_APPS)

    async def get_recommended_apps(self) -> ApiResponse[tuple[App, ...]]:
        return await self.call(ep.GET_RECOMMENDED_APPS)

    async def get_home_data(self) -> ApiResponse[HomeData]:
        return await self.call(ep.GET_HOME_DATA)

    async def get_app_detail(self, app_id: str) -> ApiResponse[App]:
        return await self.call(ep.GET_APP_DETAIL, app_id=app_id)

    async def search_apps(self, keyword: str, page: int = ep.DEFAULT_PAGE,
                          page_size: int = ep.DEFAULT_PAGE_SIZE) -> ApiResponse[SearchResult]:
        return await self.call(ep.SEARCH_APPS, keyword=keyword, page=page, page_size=page_size)

    async def get_categories(self) -> ApiResponse[tuple[Category, ...]]:
        return await self.call(ep.GET_CATEGORIES)

    async def get_category_detail(self, category_id: str) -> ApiResponse[Category]:
        return await self.call(ep.GET_CATEGORY_DETAIL, category_id=category_id)

    async def get_category_apps(self, category_id: str, page: int = ep.DEFAULT_PAGE,
                                page_size: int = ep.DEFAULT_PAGE_SIZE) -> ApiResponse[PagedResponse[App]]:
        return await self.call(ep.GET_CATEGORY_APPS, category_id=category_id, page=page, page_size=page_size)

    async def get_ranking_apps(self, ranking_type: RankingType, page: int = ep.DEFAULT_PAGE,
                               page_size: int = ep.DEFAULT_PAGE_SIZE) -> ApiResponse[PagedResponse[App]]:
        return await self.call(ep.GET_RANKING_APPS, ranking_type=ranking_type, page=page, page_size=page_size)

    # ---- social ----

    async def get_app_comments(self, app_id: str, page: int = ep.DEFAULT_PAGE,
                               page_size: int = ep.DEFAULT_PAGE_SIZE) -> ApiResponse[PagedResponse[Comment]]:
        return await self.call(ep.GET_APP_COMMENTS, app_id=app_id, page=page, page_size=page_size)

    async def post_comment(self, token: str, app_id: str, rating: int, content: str) -> ApiResponse[Comment]:
        return await self.call(ep.POST_COMMENT, token=token, app_id=app_id, rating=rating, content=content)

    async def toggle_favorite(self, token: str, app_id: str, favorite: bool) -> ApiResponse[bool]:
        return await self.call(ep.TOGGLE_FAVORITE, token=token, app_id=app_id, favorite=favorite)

    async def get_favorite_apps(self, token: str, page: int = ep.DEFAULT_PAGE,
                                page_size: int = ep.DEFAULT_PAGE_SIZE) -> ApiResponse[PagedResponse[App]]:
        return await self.call(ep.GET_FAVORITE_APPS, token=token, page=page, page_size=page_size)

    # ---- governance ----

    async def submit_report(self, token: str, report_type: ReportType, target_id: str,
                            reason: ReportReason, description: str = "") -> ApiResponse[Report]:
        return await self.call(ep.SUBMIT_REPORT, token=token, report_type=report_type,
                               target_id=target_id, reason=reason, description=description)

    # ---- versioning ----

    async def get_latest_version(self) -> ApiResponse[VersionInfo]:
        return await self.call(ep.GET_LATEST_VERSION)

    def close(self) -> None:
        self._client.close()
