"""
Base Repository - Abstract interface the rest of the app depends on

Every operation is awaitable and returns a ``Result``: either the validated
entity or one of the ``smartshop.errors`` failures. Expected failures are
never raised to the caller.
"""

from abc import ABC, abstractmethod
from typing import Optional

from smartshop.models import (
    App,
    Category,
    Comment,
    Download,
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
from smartshop.result import Result


class BaseRepository(ABC):
    """Abstract base class for the SmartShop data layer"""

    # ---- account ----

    @property
    @abstractmethod
    def current_user(self) -> Optional[User]:
        """User of the active session, or None when logged out."""
        pass

    @property
    def is_logged_in(self) -> bool:
        return self.current_user is not None

    @abstractmethod
    async def login(self, email: str, password: str) -> Result[User]:
        """
        Authenticate and start a session.

        Args:
            email: Account email
            password: Account password

        Returns:
            The logged-in User; later authenticated calls carry its bearer token
        """
        pass

    @abstractmethod
    async def register(self, username: str, email: str, password: str,
                       confirm_password: str) -> Result[Registration]:
        """
        Create an account and start a session with it.

        Returns:
            Registration with token, user and whether a verification code was sent
        """
        pass

    @abstractmethod
    async def verify_email(self, code: str) -> Result[User]:
        """Confirm the session user's email with the code they received."""
        pass

    @abstractmethod
    async def logout(self) -> Result[None]:
        """End the session. Local session state is cleared even if the backend call fails."""
        pass

    @abstractmethod
    async def get_user_profile(self) -> Result[User]:
        pass

    @abstractmethod
    async def update_user_settings(self, settings: UserSettings) -> Result[bool]:
        pass

    # ---- catalog ----

    @abstractmethod
    async def get_home_data(self) -> Result[HomeData]:
        pass

    @abstractmethod
    async def get_featured_apps(self) -> Result[tuple[App, ...]]:
        pass

    @abstractmethod
    async def get_new_apps(self) -> Result[tuple[App, ...]]:
        pass

    @abstractmethod
    async def get_recommended_apps(self) -> Result[tuple[App, ...]]:
        pass

    @abstractmethod
    async def get_app_detail(self, app_id: str) -> Result[App]:
        pass

    @abstractmethod
    async def search_apps(self, keyword: str, page: int = 1,
                          page_size: Optional[int] = None) -> Result[SearchResult]:
        """
        Full-text search over the catalog.

        Args:
            keyword: Non-empty search term
            page: 1-based page number
            page_size: Items per page (settings default when None)
        """
        pass

    @abstractmethod
    async def get_categories(self) -> Result[tuple[Category, ...]]:
        pass

    @abstractmethod
    async def get_category_detail(self, category_id: str) -> Result[Category]:
        pass

    @abstractmethod
    async def get_category_apps(self, category_id: str, page: int = 1,
                                page_size: Optional[int] = None) -> Result[PagedResponse[App]]:
        pass

    @abstractmethod
    async def get_ranking_apps(self, ranking_type: RankingType, page: int = 1,
                               page_size: Optional[int] = None) -> Result[PagedResponse[App]]:
        pass

    # ---- social ----

    @abstractmethod
    async def get_app_comments(self, app_id: str, page: int = 1,
                               page_size: Optional[int] = None) -> Result[PagedResponse[Comment]]:
        pass

    @abstractmethod
    async def post_comment(self, app_id: str, rating: int, content: str) -> Result[Comment]:
        """
        Publish a review.

        Args:
            app_id: Reviewed app
            rating: Integer from 1 to 5; anything else fails before a request is sent
            content: Review text
        """
        pass

    @abstractmethod
    async def toggle_favorite(self, app_id: str, favorite: bool) -> Result[bool]:
        pass

    @abstractmethod
    async def get_favorite_apps(self, page: int = 1,
                                page_size: Optional[int] = None) -> Result[PagedResponse[App]]:
        pass

    # ---- governance ----

    @abstractmethod
    async def submit_report(self, report_type: ReportType, target_id: str,
                            reason: ReportReason, description: str = "") -> Result[Report]:
        pass

    # ---- versioning ----

    @abstractmethod
    async def get_latest_version(self) -> Result[VersionInfo]:
        pass

    @abstractmethod
    async def check_for_update(self, current_version: str) -> Result[bool]:
        """True when the published client version is newer than ``current_version``."""
        pass

    # ---- downloads ----

    @abstractmethod
    async def download_app(self, app: App) -> Result[Download]:
        """Create a PENDING download for ``app`` and hand it to the download manager."""
        pass

    @abstractmethod
    async def get_downloads(self) -> Result[list[Download]]:
        pass

    @abstractmethod
    async def pause_download(self, download_id: str) -> Result[Download]:
        pass

    @abstractmethod
    async def resume_download(self, download_id: str) -> Result[Download]:
        pass

    @abstractmethod
    async def cancel_download(self, download_id: str) -> Result[Download]:
        pass

    @abstractmethod
    async def install_app(self, download_id: str) -> Result[Download]:
        """Start installing a COMPLETED download."""
        pass
