"""
Download status state machine and the download-manager collaborator contract.

The repository owns the rules; a DownloadManager implementation (platform
specific, not part of this package) owns the records and performs the actual
transfer. Records are immutable: every change produces a new Download.

    PENDING -> DOWNLOADING -> {PAUSED <-> DOWNLOADING} -> COMPLETED -> INSTALLING -> INSTALLED
    DOWNLOADING/PAUSED -> FAILED | CANCELED

COMPLETED, FAILED, CANCELED and INSTALLED admit no way back; a retry is a new
Download.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from smartshop.errors import InvalidTransitionError, ValidationError
from smartshop.models.catalog import App
from smartshop.models.download import Download
from smartshop.models.enums import DownloadStatus

logger = logging.getLogger(__name__)

S = DownloadStatus

ALLOWED_TRANSITIONS: dict[DownloadStatus, frozenset[DownloadStatus]] = {
    S.PENDING: frozenset({S.DOWNLOADING, S.FAILED, S.CANCELED}),
    S.DOWNLOADING: frozenset({S.PAUSED, S.COMPLETED, S.FAILED, S.CANCELED}),
    S.PAUSED: frozenset({S.DOWNLOADING, S.FAILED, S.CANCELED}),
    S.COMPLETED: frozenset({S.INSTALLING}),
    S.INSTALLING: frozenset({S.INSTALLED, S.FAILED}),
    S.INSTALLED: frozenset(),
    S.FAILED: frozenset(),
    S.CANCELED: frozenset(),
}

TERMINAL_STATUSES = frozenset(status for status, targets in ALLOWED_TRANSITIONS.items() if not targets)


def can_transition(current: DownloadStatus, target: DownloadStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def _now() -> datetime:
    # millisecond precision, matching the wire format
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def new_download(app: App, download_id: Optional[str] = None) -> Download:
    """Create the PENDING record for a fresh download of ``app``."""
    return Download(
        id=download_id or str(uuid.uuid4()),
        app_id=app.id,
        app_name=app.name,
        app_icon=app.icon,
        download_url=app.download_url,
        start_time=_now(),
        status=S.PENDING,
        file_size=app.size,
    )


def transition(download: Download, target: DownloadStatus, *, file_path: Optional[str] = None) -> Download:
    """
    Return a copy of ``download`` moved to ``target``.

    Raises:
        InvalidTransitionError: the state machine has no edge current -> target
    """
    if not can_transition(download.status, target):
        raise InvalidTransitionError(
            f"Download {download.id}: cannot go from {download.status.value} to {target.value}"
        )

    update: dict = {"status": target}
    if target == S.COMPLETED:
        update.update(progress=1.0, downloaded_size=download.file_size, end_time=_now())
        if file_path is not None:
            update["file_path"] = file_path
    elif target in (S.FAILED, S.CANCELED):
        update["end_time"] = _now()

    logger.debug(f"Download {download.id}: {download.status.value} -> {target.value}")
    return Download.model_validate({**dict(download), **update})


def with_progress(download: Download, progress: float) -> Download:
    """
    Return a copy of ``download`` with new progress.

    Progress only moves while DOWNLOADING and never goes backwards.
    """
    if download.status != S.DOWNLOADING:
        raise InvalidTransitionError(
            f"Download {download.id}: progress can only change while DOWNLOADING (is {download.status.value})"
        )
    if not 0.0 <= progress <= 1.0:
        raise ValidationError(f"progress must be within [0, 1], got {progress}")
    if progress < download.progress:
        raise InvalidTransitionError(
            f"Download {download.id}: progress cannot decrease ({download.progress} -> {progress})"
        )
    downloaded = int(download.file_size * progress)
    return Download.model_validate({**dict(download), "progress": progress, "downloaded_size": downloaded})


class DownloadManager(ABC):
    """Collaborator that stores download records and performs the transfers."""

    @abstractmethod
    async def enqueue(self, download: Download) -> None:
        """Accept a new PENDING download and start working on it."""
        pass

    @abstractmethod
    async def get(self, download_id: str) -> Optional[Download]:
        """Current record for ``download_id``, or None if unknown."""
        pass

    @abstractmethod
    async def apply(self, download: Download) -> None:
        """
        Replace the stored record with ``download`` and act on its status
        (pause, resume, cancel or install the package).
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[Download]:
        """All known downloads, most recent first."""
        pass
