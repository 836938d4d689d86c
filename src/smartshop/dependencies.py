"""
Composition root - builds the repository and its collaborators explicitly.

Construct one repository at startup and pass it to whatever needs it:

    repository = build_repository()
    result = await repository.get_featured_apps()
"""

import logging
from typing import Optional

import requests

from smartshop.adapters.smartshop.api import SmartShopApi
from smartshop.adapters.smartshop.client import SmartShopHTTPClient
from smartshop.downloads import DownloadManager
from smartshop.repository.remote import RemoteRepository
from smartshop.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_api(settings: Optional[Settings] = None,
              session: Optional[requests.Session] = None) -> SmartShopApi:
    cfg = settings or get_settings()
    client = SmartShopHTTPClient(cfg.api, session=session)
    return SmartShopApi(client)


def build_repository(settings: Optional[Settings] = None,
                     download_manager: Optional[DownloadManager] = None,
                     session: Optional[requests.Session] = None) -> RemoteRepository:
    """
    Build a RemoteRepository wired to the configured backend.

    Args:
        settings: Settings to use (read from environment/.env when None)
        download_manager: Platform download collaborator; download operations
            are unavailable without one
        session: Pre-configured requests.Session (proxies, test transports)

    Returns:
        A ready RemoteRepository with no active session
    """
    cfg = settings or get_settings()
    logger.info(f"Building repository for {cfg.api.base_url} (env={cfg.env})")
    return RemoteRepository(
        build_api(cfg, session=session),
        download_manager=download_manager,
        default_page_size=cfg.default_page_size,
    )
