"""
Wire name mapping for every SmartShop entity.

Each table maps a model field to the JSON names it travels under. The first
name is canonical and is the one written when encoding; every name in the
tuple is accepted when decoding. The v1 endpoints speak camelCase, the v2
endpoints speak snake_case, and both decode into the same entity through
these tables.

Models never derive wire names from their own attribute names: a field that
is missing from its table fails at import time.
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, AliasChoices, AliasGenerator, BeforeValidator, ConfigDict, PlainSerializer

WireTable = dict[str, tuple[str, ...]]

PERMISSION_WIRE_NAMES: WireTable = {
    "id": ("id",),
    "name": ("name",),
    "description": ("description",),
    "is_required": ("is_required", "isRequired"),
    "group": ("group",),
}

APP_WIRE_NAMES: WireTable = {
    "id": ("id",),
    "name": ("name",),
    "package_name": ("package_name", "packageName"),
    "developer": ("developer",),
    "version": ("version",),
    "version_code": ("version_code", "versionCode"),
    "icon": ("icon",),
    "screenshots": ("screenshots",),
    "description": ("description",),
    "short_description": ("short_description", "shortDescription"),
    "size": ("size",),
    "category_id": ("category_id", "categoryId", "category"),
    "rating": ("rating",),
    "download_count": ("download_count", "downloadCount"),
    "price": ("price",),
    "is_free": ("is_free",),
    "release_date": ("release_date", "releaseDate"),
    "last_update_date": ("last_update_date", "lastUpdateDate", "updatedAt", "updated_at"),
    "permissions": ("permissions",),
    "tags": ("tags",),
    "compatible_devices": ("compatible_devices", "compatibleDevices"),
    "min_wear_os_version": ("min_wear_os_version", "minWearOsVersion"),
    "download_url": ("download_url", "downloadUrl", "apkUrl", "apk_url"),
    "is_installed": ("is_installed", "isInstalled"),
    "is_favorite": ("is_favorite", "isFavorite"),
}

# appCount and appsCount are the two spellings used by the two Category families
CATEGORY_WIRE_NAMES: WireTable = {
    "id": ("id",),
    "name": ("name",),
    "icon": ("icon",),
    "description": ("description",),
    "app_count": ("app_count", "appCount", "appsCount", "apps_count"),
    "color": ("color",),
    "sort_order": ("sort_order", "sortOrder"),
}

BANNER_WIRE_NAMES: WireTable = {
    "id": ("id",),
    "app_id": ("app_id", "appId"),
    "image_url": ("image_url", "imageUrl"),
    "title": ("title",),
    "description": ("description",),
    "start_date": ("start_date", "startDate"),
    "end_date": ("end_date", "endDate"),
}

SEARCH_RESULT_WIRE_NAMES: WireTable = {
    "apps": ("apps",),
    "total_count": ("total_count", "totalCount"),
    "search_term": ("search_term", "searchTerm"),
    "categories": ("categories",),
    "suggestions": ("suggestions",),
}

HOME_DATA_WIRE_NAMES: WireTable = {
    "banners": ("banners",),
    "recommended_apps": ("recommended_apps", "recommendedApps"),
    "new_apps": ("new_apps", "newApps"),
    "popular_categories": ("popular_categories", "popularCategories"),
    "promotion_apps": ("promotion_apps", "promotionApps"),
}

USER_WIRE_NAMES: WireTable = {
    "id": ("id",),
    "username": ("username",),
    "email": ("email",),
    "is_verified": ("is_verified", "isVerified"),
    "verification_attempts": ("verification_attempts", "verificationAttempts"),
    "avatar": ("avatar",),
    "created_at": ("created_at", "createdAt", "registerDate", "register_date"),
    "status": ("status",),
    "role": ("role",),
    "favorite_apps": ("favorite_apps", "favoriteApps"),
    "installed_apps": ("installed_apps", "installedApps"),
}

USER_SETTINGS_WIRE_NAMES: WireTable = {
    "dark_mode": ("dark_mode", "darkMode"),
    "notifications_enabled": ("notifications_enabled", "notificationsEnabled"),
    "auto_update": ("auto_update", "autoUpdate"),
    "download_over_wifi_only": ("download_over_wifi_only", "downloadOverWifiOnly"),
    "language": ("language",),
}

AUTH_SESSION_WIRE_NAMES: WireTable = {
    "token": ("token",),
    "user": ("user",),
}

REGISTRATION_WIRE_NAMES: WireTable = {
    "token": ("token",),
    "user": ("user",),
    "verification_sent": ("verification_code_sent", "verificationCodeSent", "verification_sent"),
}

DEVELOPER_RESPONSE_WIRE_NAMES: WireTable = {
    "content": ("content",),
    "date": ("date",),
}

COMMENT_WIRE_NAMES: WireTable = {
    "id": ("id",),
    "app_id": ("app_id", "appId"),
    "user_id": ("user_id", "userId"),
    "username": ("username",),
    "user_avatar": ("user_avatar", "userAvatar"),
    "rating": ("rating",),
    "content": ("content",),
    "date": ("date", "timestamp", "created_at", "createdAt"),
    "likes": ("likes",),
    "dislikes": ("dislikes",),
    "developer_response": ("developer_response", "developerResponse"),
}

REPORT_WIRE_NAMES: WireTable = {
    "id": ("id",),
    "report_type": ("report_type", "reportType", "type"),
    "target_id": ("target_id", "targetId"),
    "reason": ("reason",),
    "description": ("description",),
    "user_id": ("user_id", "userId", "reporter_user_id"),
    "created_at": ("created_at", "createdAt", "date"),
    "status": ("status",),
}

DOWNLOAD_WIRE_NAMES: WireTable = {
    "id": ("id",),
    "app_id": ("app_id", "appId"),
    "app_name": ("app_name", "appName"),
    "app_icon": ("app_icon", "appIcon"),
    "download_url": ("download_url", "downloadUrl"),
    "start_time": ("start_time", "startTime"),
    "end_time": ("end_time", "endTime"),
    "progress": ("progress",),
    "status": ("status",),
    "file_path": ("file_path", "filePath"),
    "file_size": ("file_size", "fileSize"),
    "downloaded_size": ("downloaded_size", "downloadedSize"),
}

VERSION_INFO_WIRE_NAMES: WireTable = {
    "version_name": ("version_name", "versionName"),
    "version_code": ("version_code", "versionCode"),
    "release_date": ("release_date", "releaseDate"),
    "download_url": ("download_url", "downloadUrl"),
    "force_update": ("force_update", "forceUpdate"),
    "update_description": ("update_description", "updateDescription"),
    "min_android_version": ("min_android_version", "minAndroidVersion"),
}

API_RESPONSE_WIRE_NAMES: WireTable = {
    "success": ("success",),
    "data": ("data",),
    "message": ("message",),
    "error_code": ("errorCode", "error_code"),
}

PAGED_RESPONSE_WIRE_NAMES: WireTable = {
    "items": ("items",),
    "total_count": ("totalCount", "total_count"),
    "page": ("page",),
    "page_size": ("pageSize", "page_size"),
    "has_more": ("hasMore",),
}


def _names(table: WireTable, field_name: str, owner: str) -> tuple[str, ...]:
    try:
        return table[field_name]
    except KeyError:
        raise KeyError(f"{owner}: field '{field_name}' has no wire name mapping") from None


def wire_config(table: WireTable, owner: str) -> ConfigDict:
    """
    Build the model config for an immutable entity whose wire names come from ``table``.

    Unknown payload keys are ignored so the backend can add fields; missing
    required fields and unknown enum values still fail validation.
    """
    return ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        alias_generator=AliasGenerator(
            validation_alias=lambda name: AliasChoices(*_names(table, name, owner)),
            serialization_alias=lambda name: _names(table, name, owner)[0],
        ),
    )


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _from_millis(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return _EPOCH + timedelta(milliseconds=value)
    if isinstance(value, float):
        return _EPOCH + timedelta(milliseconds=round(value))
    return value


def to_utc_millis(value: datetime) -> datetime:
    """Aware UTC at millisecond precision, the only form a timestamp can take on the wire."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def _to_millis(value: datetime) -> int:
    value = to_utc_millis(value)
    return (value - _EPOCH) // timedelta(milliseconds=1)


# Timestamps travel as epoch milliseconds; ISO strings are accepted on input.
# Naive values are read as UTC.
EpochMillis = Annotated[
    datetime,
    BeforeValidator(_from_millis),
    AfterValidator(to_utc_millis),
    PlainSerializer(_to_millis, return_type=int),
]
