"""
Remote Repository - BaseRepository backed by the SmartShop HTTP API

Validates what can be checked locally, delegates to ``SmartShopApi``, unwraps
the envelope and turns every expected failure into ``Result.fail``.
"""

import functools
import logging
from typing import Optional

from smartshop import downloads
from smartshop.adapters.smartshop.api import SmartShopApi
from smartshop.adapters.smartshop.endpoints import DEFAULT_PAGE_SIZE
from smartshop.downloads import DownloadManager
from smartshop.errors import (
    AuthError,
    DecodeError,
    NotFoundError,
    RepositoryError,
    ServerError,
    ValidationError,
)
from smartshop.models import (
    ApiResponse,
    App,
    AuthSession,
    Category,
    Comment,
    Download,
    DownloadStatus,
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
from smartshop.repository.base import BaseRepository
from smartshop.result import Result
from smartshop.utils import validators

logger = logging.getLogger(__name__)


def returns_result(method):
    """Wrap a coroutine method: its return value becomes Result.ok, a RepositoryError becomes Result.fail."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            value = await method(self, *args, **kwargs)
        except RepositoryError as e:
            logger.warning(f"{method.__name__} failed: {type(e).__name__}: {e.message}")
            return Result.fail(e)
        return Result.ok(value)

    return wrapper


def unwrap(response: ApiResponse, allow_empty: bool = False):
    """
    Return the envelope's data or raise the matching failure.

    Raises:
        AuthError: errorCode 401/403
        NotFoundError: errorCode 404
        ServerError: any other success=false
        DecodeError: success=true without data where data is required
    """
    if response.success:
        if response.data is None and not allow_empty:
            raise DecodeError("Response reported success but carried no data")
        return response.data

    message = response.message or "Request failed"
    code = response.error_code
    if code in (401, 403):
        raise AuthError(message, code)
    if code == 404:
        raise NotFoundError(message, code)
    raise ServerError(message, code)


class RemoteRepository(BaseRepository):
    """Repository implementation talking to the SmartShop backend"""

    def __init__(self,
                 api: SmartShopApi,
                 download_manager: Optional[DownloadManager] = None,
                 default_page_size: int = DEFAULT_PAGE_SIZE):
        if api is None:
            raise TypeError("RemoteRepository requires a SmartShopApi instance")
        self._api = api
        self._download_manager = download_manager
        self._default_page_size = default_page_size
        # replaced, never mutated, so concurrent readers see a whole session or none
        self._session: Optional[AuthSession] = None

        logger.info("RemoteRepository initialized")

    # ---- session helpers ----

    @property
    def current_user(self) -> Optional[User]:
        return self._session.user if self._session is not None else None

    def _token(self) -> str:
        if self._session is None:
            raise AuthError("Not logged in", error_code=401)
        return self._session.token

    def _active_token(self) -> str:
        """Token for a mutating operation; banned accounts are refused here."""
        token = self._token()
        if self._session.user.is_banned:
            raise AuthError("This account has been banned", error_code=403)
        return token

    def _page_size(self, page: int, page_size: Optional[int]) -> int:
        size = self._default_page_size if page_size is None else page_size
        validators.require_page(page, size)
        return size

    def _downloads(self) -> DownloadManager:
        if self._download_manager is None:
            raise TypeError("RemoteRepository was built without a DownloadManager")
        return self._download_manager

    # ---- account ----

    @returns_result
    async def login(self, email: str, password: str) -> User:
        validators.require_email(email)
        validators.require_text(password, "password")

        session: AuthSession = unwrap(await self._api.login(email, password))
        self._session = session
        logger.info(f"Logged in as user {session.user.id}")
        return session.user

    @returns_result
    async def register(self, username: str, email: str, password: str, confirm_password: str) -> Registration:
        validators.require_text(username, "username")
        validators.require_text(password, "password")
        if not validators.is_valid_email(email):
            raise ValidationError(f"'{email}' is not a supported email address")
        if password != confirm_password:
            raise ValidationError("Passwords do not match")

        registration: Registration = unwrap(
            await self._api.register(username, email, password, confirm_password)
        )
        self._session = AuthSession(token=registration.token, user=registration.user)
        logger.info(f"Registered user {registration.user.id} (code sent: {registration.verification_sent})")
        return registration

    @returns_result
    async def verify_email(self, code: str) -> User:
        validators.require_text(code, "verification code")
        token = self._active_token()
        attempts = self._session.user.verification_attempts
        if attempts >= validators.VERIFICATION_ATTEMPTS_LIMIT:
            raise ValidationError(
                f"Too many verification attempts ({attempts}); request a new code"
            )

        try:
            user: User = unwrap(await self._api.verify_email(token, code))
        except ServerError:
            # the backend counts the rejected code too; mirror it on the session user
            if self._session is not None and self._session.token == token:
                counted = self._session.user.model_copy(update={"verification_attempts": attempts + 1})
                self._session = AuthSession(token=token, user=counted)
            raise
        if self._session is not None and self._session.token == token:
            self._session = AuthSession(token=token, user=user)
        return user

    @returns_result
    async def logout(self) -> None:
        session = self._session
        if session is None:
            return None
        try:
            unwrap(await self._api.logout(session.token), allow_empty=True)
        finally:
            self._session = None
            logger.info(f"Logged out user {session.user.id}")
        return None

    @returns_result
    async def get_user_profile(self) -> User:
        token = self._token()
        user: User = unwrap(await self._api.get_user_profile(token))
        if self._session is not None and self._session.token == token:
            self._session = AuthSession(token=token, user=user)
        return user

    @returns_result
    async def update_user_settings(self, settings: UserSettings) -> bool:
        token = self._active_token()
        return unwrap(await self._api.update_user_settings(token, settings))

    # ---- catalog ----

    @returns_result
    async def get_home_data(self) -> HomeData:
        return unwrap(await self._api.get_home_data())

    @returns_result
    async def get_featured_apps(self) -> tuple[App, ...]:
        return unwrap(await self._api.get_featured_apps())

    @returns_result
    async def get_new_apps(self) -> tuple[App, ...]:
        return unwrap(await self._api.get_new_apps())

    @returns_result
    async def get_recommended_apps(self) -> tuple[App, ...]:
        return unwrap(await self._api.get_recommended_apps())

    @returns_result
    async def get_app_detail(self, app_id: str) -> App:
        validators.require_text(app_id, "app_id")
        return unwrap(await self._api.get_app_detail(app_id))

    @returns_result
    async def search_apps(self, keyword: str, page: int = 1, page_size: Optional[int] = None) -> SearchResult:
        validators.require_text(keyword, "keyword")
        size = self._page_size(page, page_size)
        return unwrap(await self._api.search_apps(keyword.strip(), page, size))

    @returns_result
    async def get_categories(self) -> tuple[Category, ...]:
        return unwrap(await self._api.get_categories())

    @returns_result
    async def get_category_detail(self, category_id: str) -> Category:
        validators.require_text(category_id, "category_id")
        return unwrap(await self._api.get_category_detail(category_id))

    @returns_result
    async def get_category_apps(self, category_id: str, page: int = 1,
                                page_size: Optional[int] = None) -> PagedResponse[App]:
        validators.require_text(category_id, "category_id")
        size = self._page_size(page, page_size)
        return unwrap(await self._api.get_category_apps(category_id, page, size))

    @returns_result
    async def get_ranking_apps(self, ranking_type: RankingType, page: int = 1,
                               page_size: Optional[int] = None) -> PagedResponse[App]:
        if not isinstance(ranking_type, RankingType):
            raise ValidationError(f"Unknown ranking type: {ranking_type!r}")
        size = self._page_size(page, page_size)
        return unwrap(await self._api.get_ranking_apps(ranking_type, page, size))

    # ---- social ----

    @returns_result
    async def get_app_comments(self, app_id: str, page: int = 1,
                               page_size: Optional[int] = None) -> PagedResponse[Comment]:
        validators.require_text(app_id, "app_id")
        size = self._page_size(page, page_size)
        return unwrap(await self._api.get_app_comments(app_id, page, size))

    @returns_result
    async def post_comment(self, app_id: str, rating: int, content: str) -> Comment:
        validators.require_text(app_id, "app_id")
        validators.require_rating(rating)
        validators.require_text(content, "content")
        token = self._active_token()
        return unwrap(await self._api.post_comment(token, app_id, rating, content))

    @returns_result
    async def toggle_favorite(self, app_id: str, favorite: bool) -> bool:
        validators.require_text(app_id, "app_id")
        token = self._active_token()
        return unwrap(await self._api.toggle_favorite(token, app_id, bool(favorite)))

    @returns_result
    async def get_favorite_apps(self, page: int = 1, page_size: Optional[int] = None) -> PagedResponse[App]:
        size = self._page_size(page, page_size)
        token = self._token()
        return unwrap(await self._api.get_favorite_apps(token, page, size))

    # ---- governance ----

    @returns_result
    async def submit_report(self, report_type: ReportType, target_id: str,
                            reason: ReportReason, description: str = "") -> Report:
        if not isinstance(report_type, ReportType):
            raise ValidationError(f"Unknown report type: {report_type!r}")
        if not isinstance(reason, ReportReason):
            raise ValidationError(f"Unknown report reason: {reason!r}")
        validators.require_text(target_id, "target_id")
        token = self._active_token()
        return unwrap(await self._api.submit_report(token, report_type, target_id, reason, description))

    # ---- versioning ----

    @returns_result
    async def get_latest_version(self) -> VersionInfo:
        return unwrap(await self._api.get_latest_version())

    @returns_result
    async def check_for_update(self, current_version: str) -> bool:
        validators.require_text(current_version, "current_version")
        latest: VersionInfo = unwrap(await self._api.get_latest_version())
        return latest.is_newer_than(current_version)

    # ---- downloads ----

    @returns_result
    async def download_app(self, app: App) -> Download:
        manager = self._downloads()
        download = downloads.new_download(app)
        await manager.enqueue(download)
        logger.info(f"Queued download {download.id} for app {app.id}")
        return download

    @returns_result
    async def get_downloads(self) -> list[Download]:
        return await self._downloads().list_all()

    async def _move(self, download_id: str, target: DownloadStatus) -> Download:
        manager = self._downloads()
        validators.require_text(download_id, "download_id")
        current = await manager.get(download_id)
        if current is None:
            raise NotFoundError(f"Download {download_id} not found", error_code=404)
        updated = downloads.transition(current, target)
        await manager.apply(updated)
        return updated

    @returns_result
    async def pause_download(self, download_id: str) -> Download:
        return await self._move(download_id, DownloadStatus.PAUSED)

    @returns_result
    async def resume_download(self, download_id: str) -> Download:
        return await self._move(download_id, DownloadStatus.DOWNLOADING)

    @returns_result
    async def cancel_download(self, download_id: str) -> Download:
        return await self._move(download_id, DownloadStatus.CANCELED)

    @returns_result
    async def install_app(self, download_id: str) -> Download:
        return await self._move(download_id, DownloadStatus.INSTALLING)
