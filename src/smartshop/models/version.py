from typing import Optional

from pydantic import BaseModel, Field

from smartshop.models.wire import VERSION_INFO_WIRE_NAMES, EpochMillis, wire_config
from smartshop.utils.versions import compare_versions

# Android 4.4
DEFAULT_MIN_ANDROID_VERSION = 19


class VersionInfo(BaseModel):
    """Latest published build of the store client itself."""

    model_config = wire_config(VERSION_INFO_WIRE_NAMES, "VersionInfo")

    version_name: str
    version_code: int = Field(..., ge=0)
    release_date: Optional[EpochMillis] = None
    download_url: str
    force_update: bool = False
    update_description: str = ""
    min_android_version: int = DEFAULT_MIN_ANDROID_VERSION

    def is_newer_than(self, current_version: str) -> bool:
        return compare_versions(self.version_name, current_version) > 0
