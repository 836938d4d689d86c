from typing import Optional

from pydantic import BaseModel, Field

from smartshop.models.enums import DownloadStatus
from smartshop.models.wire import DOWNLOAD_WIRE_NAMES, EpochMillis, wire_config


class Download(BaseModel):
    """One package download. Status changes go through ``smartshop.downloads``."""

    model_config = wire_config(DOWNLOAD_WIRE_NAMES, "Download")

    id: str
    app_id: str
    app_name: str = ""
    app_icon: str = ""
    download_url: str
    start_time: EpochMillis
    end_time: Optional[EpochMillis] = None
    progress: float = Field(default=0.0, ge=0.0, le=1.0)
    status: DownloadStatus = DownloadStatus.PENDING
    file_path: Optional[str] = None
    file_size: int = Field(default=0, ge=0)
    downloaded_size: int = Field(default=0, ge=0)
