"""
Domain models - immutable, JSON-mapped value snapshots returned by the repository.

Wire names for every field live in ``smartshop.models.wire``.
"""

from smartshop.models.catalog import App, Banner, Category, HomeData, Permission, SearchResult
from smartshop.models.download import Download
from smartshop.models.enums import (
    DownloadStatus,
    PermissionGroup,
    RankingType,
    ReportReason,
    ReportStatus,
    ReportType,
    UserRole,
    UserStatus,
)
from smartshop.models.envelope import ApiResponse, PagedResponse
from smartshop.models.social import Comment, DeveloperResponse, Report
from smartshop.models.user import AuthSession, Registration, User, UserSettings
from smartshop.models.version import VersionInfo

__all__ = [
    "ApiResponse",
    "App",
    "AuthSession",
    "Banner",
    "Category",
    "Comment",
    "DeveloperResponse",
    "Download",
    "DownloadStatus",
    "HomeData",
    "PagedResponse",
    "Permission",
    "PermissionGroup",
    "RankingType",
    "Registration",
    "Report",
    "ReportReason",
    "ReportStatus",
    "ReportType",
    "SearchResult",
    "User",
    "UserRole",
    "UserSettings",
    "UserStatus",
    "VersionInfo",
]
