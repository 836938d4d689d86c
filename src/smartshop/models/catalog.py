"""
Catalog entities - apps, categories, banners and search results.

App reconciles the two App shapes served by the backend: the store family
(screenshots, permissions, price ...) and the package family (packageName,
versionCode, apkUrl, updatedAt). Fields only one family sends are optional.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from smartshop.models.enums import PermissionGroup
from smartshop.models.wire import (
    APP_WIRE_NAMES,
    BANNER_WIRE_NAMES,
    CATEGORY_WIRE_NAMES,
    HOME_DATA_WIRE_NAMES,
    PERMISSION_WIRE_NAMES,
    SEARCH_RESULT_WIRE_NAMES,
    EpochMillis,
    wire_config,
)


class Permission(BaseModel):
    model_config = wire_config(PERMISSION_WIRE_NAMES, "Permission")

    id: str
    name: str
    description: str = ""
    is_required: bool = False
    group: PermissionGroup = PermissionGroup.OTHER


class App(BaseModel):
    """
    A catalog application as shown in listings and on the detail screen.

    ``is_free`` is derived from ``price`` and is never read from the payload.
    """

    model_config = wire_config(APP_WIRE_NAMES, "App")

    # Identity
    id: str = Field(..., description="Backend application id")
    name: str = Field(..., description="Display name")
    package_name: Optional[str] = Field(None, description="Installable package name")
    developer: str = Field(..., description="Developer or publisher name")

    # Release
    version: str = Field(..., description="Human readable version name")
    version_code: int = Field(default=0, ge=0, description="Monotonic build number per app id")
    release_date: Optional[EpochMillis] = Field(None, description="First release")
    last_update_date: Optional[EpochMillis] = Field(None, description="Latest update")
    min_wear_os_version: Optional[str] = Field(None, description="Minimum Wear OS version")

    # Presentation
    icon: str = Field(..., description="Icon URL")
    screenshots: tuple[str, ...] = Field(default=(), description="Screenshot URLs in display order")
    description: str = Field(default="", description="Full description")
    short_description: str = Field(default="", description="One line summary")
    tags: tuple[str, ...] = Field(default=())
    compatible_devices: tuple[str, ...] = Field(default=())

    # Catalog metrics
    size: int = Field(default=0, ge=0, description="Package size in bytes")
    category_id: Optional[str] = Field(None, description="Owning category id")
    rating: float = Field(default=0.0, ge=0.0, le=5.0, description="Average rating (0-5)")
    download_count: int = Field(default=0, ge=0)
    price: float = Field(default=0.0, ge=0.0)

    permissions: tuple[Permission, ...] = Field(default=(), description="Requested permissions")
    download_url: str = Field(..., description="Package download URL")

    # Per-user flags
    is_installed: bool = False
    is_favorite: bool = False

    @computed_field
    @property
    def is_free(self) -> bool:
        return self.price == 0

    def supersedes(self, other: "App") -> bool:
        """True when this is a later release of the same app."""
        return self.id == other.id and self.version_code > other.version_code


class Category(BaseModel):
    model_config = wire_config(CATEGORY_WIRE_NAMES, "Category")

    id: str
    name: str
    icon: str = ""
    description: str = ""
    # Denormalized; refreshed whenever the category is re-read
    app_count: int = Field(default=0, ge=0)
    color: Optional[int] = None
    sort_order: Optional[int] = None


class Banner(BaseModel):
    model_config = wire_config(BANNER_WIRE_NAMES, "Banner")

    id: str
    app_id: str
    image_url: str
    title: str = ""
    description: str = ""
    start_date: Optional[EpochMillis] = None
    end_date: Optional[EpochMillis] = None

    def is_active(self, at: datetime) -> bool:
        if at.tzinfo is None:
            at = at.replace(tzinfo=timezone.utc)
        if self.start_date is not None and at < self.start_date:
            return False
        if self.end_date is not None and at > self.end_date:
            return False
        return True


class SearchResult(BaseModel):
    model_config = wire_config(SEARCH_RESULT_WIRE_NAMES, "SearchResult")

    apps: tuple[App, ...] = ()
    total_count: int = Field(default=0, ge=0)
    search_term: str = ""
    categories: tuple[Category, ...] = ()
    suggestions: tuple[str, ...] = ()


class HomeData(BaseModel):
    model_config = wire_config(HOME_DATA_WIRE_NAMES, "HomeData")

    banners: tuple[Banner, ...] = ()
    recommended_apps: tuple[App, ...] = ()
    new_apps: tuple[App, ...] = ()
    popular_categories: tuple[Category, ...] = ()
    promotion_apps: tuple[App, ...] = ()
