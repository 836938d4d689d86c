"""
In-memory backend state for the sandbox API.

Seeded with a handful of categories, apps, comments and two accounts:
a regular verified user and a banned one (both with password "secret").
"""

import logging
import secrets
from datetime import datetime, timezone
from typing import Optional

from smartshop.models import (
    App,
    Banner,
    Category,
    Comment,
    PagedResponse,
    Permission,
    PermissionGroup,
    Report,
    User,
    UserSettings,
    UserStatus,
    VersionInfo,
)

logger = logging.getLogger(__name__)

SEED_PASSWORD = "secret"


def _ts(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


class SandboxStore:
    """Mutable backend state. Only the sandbox routers touch it."""

    def __init__(self):
        self.apps: dict[str, App] = {}
        self.categories: dict[str, Category] = {}
        self.banners: list[Banner] = []
        self.users: dict[str, User] = {}
        self.passwords: dict[str, str] = {}           # email -> password
        self.sessions: dict[str, str] = {}            # token -> user id
        self.verification_codes: dict[str, str] = {}  # user id -> pending code
        self.comments: dict[str, list[Comment]] = {}  # app id -> comments
        self.favorites: dict[str, set[str]] = {}      # user id -> app ids
        self.user_settings: dict[str, UserSettings] = {}
        self.reports: list[Report] = []
        self.latest_version: Optional[VersionInfo] = None

    # ---- users & sessions ----

    def add_user(self, user: User, password: str) -> None:
        self.users[user.id] = user
        self.passwords[user.email.lower()] = password

    def user_by_email(self, email: str) -> Optional[User]:
        for user in self.users.values():
            if user.email.lower() == email.lower():
                return user
        return None

    def check_password(self, email: str, password: str) -> Optional[User]:
        if self.passwords.get(email.lower()) != password:
            return None
        return self.user_by_email(email)

    def issue_token(self, user_id: str) -> str:
        token = secrets.token_hex(16)
        self.sessions[token] = user_id
        return token

    def user_for_token(self, token: str) -> Optional[User]:
        user_id = self.sessions.get(token)
        return self.users.get(user_id) if user_id is not None else None

    def new_verification_code(self, user_id: str) -> str:
        code = f"{secrets.randbelow(10**6):06d}"
        self.verification_codes[user_id] = code
        return code

    # ---- catalog ----

    def apps_for_user(self, apps, user: Optional[User]) -> list[App]:
        """Apply per-user flags to catalog apps."""
        if user is None:
            return list(apps)
        favorites = self.favorites.get(user.id, set())
        return [a.model_copy(update={"is_favorite": a.id in favorites}) for a in apps]

    def category_apps(self, category_id: str) -> list[App]:
        return [a for a in self.apps.values() if a.category_id == category_id]

    def refreshed_category(self, category: Category) -> Category:
        return category.model_copy(update={"app_count": len(self.category_apps(category.id))})


def paginate(items: list, page: int, page_size: int) -> PagedResponse:
    start = (page - 1) * page_size
    return PagedResponse(
        items=tuple(items[start:start + page_size]),
        total_count=len(items),
        page=page,
        page_size=page_size,
    )


def _seed_apps() -> list[App]:
    camera = Permission(id="p-camera", name="Camera", description="Take photos", is_required=True,
                        group=PermissionGroup.CAMERA)
    storage = Permission(id="p-storage", name="Storage", description="Save files", is_required=False,
                         group=PermissionGroup.STORAGE)
    return [
        App(id="app-1", name="Pixel Runner", package_name="com.smartshop.pixelrunner", developer="Arcade Co",
            version="2.1.0", version_code=21, icon="https://cdn.smartshop.com/icons/app-1.png",
            screenshots=("https://cdn.smartshop.com/shots/app-1-1.png",), description="Endless runner.",
            short_description="Run forever", size=48_000_000, category_id="games", rating=4.6,
            download_count=120_000, price=0.0, release_date=_ts(2023, 3, 1), last_update_date=_ts(2024, 5, 2),
            permissions=(storage,), tags=("arcade", "offline"), compatible_devices=("watch", "phone"),
            download_url="https://cdn.smartshop.com/apk/app-1.apk"),
        App(id="app-2", name="Chess Master", developer="Board Labs", version="1.4.2", version_code=14,
            icon="https://cdn.smartshop.com/icons/app-2.png", description="Classic chess.",
            short_description="Play chess", size=12_000_000, category_id="games", rating=4.2,
            download_count=56_000, price=1.99, release_date=_ts(2022, 11, 20),
            download_url="https://cdn.smartshop.com/apk/app-2.apk"),
        App(id="app-3", name="Pocket Notes", developer="Tiny Tools", version="3.0.0", version_code=30,
            icon="https://cdn.smartshop.com/icons/app-3.png", description="Notes on your wrist.",
            short_description="Quick notes", size=5_500_000, category_id="tools", rating=3.9,
            download_count=8_000, release_date=_ts(2024, 1, 10),
            download_url="https://cdn.smartshop.com/apk/app-3.apk"),
        App(id="app-4", name="Snap Scanner", developer="Tiny Tools", version="1.0.1", version_code=2,
            icon="https://cdn.smartshop.com/icons/app-4.png", description="Scan documents.",
            short_description="Scan anything", size=22_000_000, category_id="tools", rating=4.8,
            download_count=300_000, price=2.49, release_date=_ts(2024, 6, 1), permissions=(camera, storage),
            download_url="https://cdn.smartshop.com/apk/app-4.apk"),
        App(id="app-5", name="Step Counter", developer="Fit Inc", version="5.2", version_code=52,
            icon="https://cdn.smartshop.com/icons/app-5.png", description="Counts steps.",
            short_description="Walk more", size=3_000_000, category_id="health", rating=4.0,
            download_count=42_000, release_date=_ts(2021, 8, 15),
            download_url="https://cdn.smartshop.com/apk/app-5.apk"),
    ]


def seed_store() -> SandboxStore:
    store = SandboxStore()

    for category in (
        Category(id="games", name="Games", icon="https://cdn.smartshop.com/cat/games.png",
                 description="Play on your wrist", sort_order=1),
        Category(id="tools", name="Tools", icon="https://cdn.smartshop.com/cat/tools.png",
                 description="Everyday utilities", sort_order=2),
        Category(id="health", name="Health", icon="https://cdn.smartshop.com/cat/health.png",
                 description="Fitness and wellbeing", sort_order=3),
    ):
        store.categories[category.id] = category

    for app in _seed_apps():
        store.apps[app.id] = app

    store.banners.append(
        Banner(id="banner-1", app_id="app-1", image_url="https://cdn.smartshop.com/banners/1.png",
               title="Pixel Runner 2", description="New levels", start_date=_ts(2024, 1, 1),
               end_date=_ts(2030, 1, 1))
    )

    store.add_user(
        User(id="user-1", username="alice", email="alice@gmail.com", is_verified=True,
             created_at=_ts(2023, 1, 5)),
        SEED_PASSWORD,
    )
    store.add_user(
        User(id="user-2", username="mallory", email="mallory@gmail.com", is_verified=True,
             status=UserStatus.BANNED, created_at=_ts(2023, 2, 9)),
        SEED_PASSWORD,
    )

    store.comments["app-1"] = [
        Comment(id="comment-1", app_id="app-1", user_id="user-2", username="mallory", rating=5,
                content="Love it", date=_ts(2024, 5, 3), likes=3),
    ]

    store.latest_version = VersionInfo(
        version_name="1.2.0", version_code=120, release_date=_ts(2024, 7, 1),
        download_url="https://cdn.smartshop.com/client/smartshop-1.2.0.apk",
        update_description="Faster search",
    )

    logger.info(f"Sandbox store seeded: {len(store.apps)} apps, {len(store.users)} users")
    return store
