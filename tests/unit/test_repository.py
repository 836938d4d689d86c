"""
Integration-style tests for RemoteRepository against the in-process sandbox
backend. Every operation returns a Result; failures never raise.
"""
import asyncio
from typing import Optional

import pytest

from sandbox_api.store import SEED_PASSWORD
from smartshop.dependencies import build_repository
from smartshop.downloads import DownloadManager
from smartshop.errors import AuthError, DecodeError, NotFoundError, ServerError, TransportError, ValidationError
from smartshop.models import Download, DownloadStatus, RankingType, ReportReason, ReportType, UserSettings
from smartshop.repository import RemoteRepository
from smartshop.result import Result
from smartshop.utils.validators import VERIFICATION_ATTEMPTS_LIMIT


def run(coro):
    return asyncio.run(coro)


def login(repository, email="alice@gmail.com") -> Result:
    return run(repository.login(email, SEED_PASSWORD))


class InMemoryDownloadManager(DownloadManager):
    def __init__(self):
        self.records: dict[str, Download] = {}
        self.applied: list[DownloadStatus] = []

    async def enqueue(self, download: Download) -> None:
        self.records[download.id] = download

    async def get(self, download_id: str) -> Optional[Download]:
        return self.records.get(download_id)

    async def apply(self, download: Download) -> None:
        self.records[download.id] = download
        self.applied.append(download.status)

    async def list_all(self) -> list[Download]:
        return sorted(self.records.values(), key=lambda d: d.start_time, reverse=True)


class TestAccount:
    """Test login, session handling and profile operations."""

    def test_login_sets_current_user_and_token(self, repository, sandbox, store):
        result = login(repository)

        assert result.is_ok
        assert result.value.email == "alice@gmail.com"
        assert repository.is_logged_in
        assert repository.current_user.id == "user-1"

        (issued,) = store.sessions
        run(repository.get_favorite_apps())
        assert sandbox.sent[-1].headers["Authorization"] == f"Bearer {issued}"

    def test_wrong_password(self, repository):
        result = run(repository.login("alice@gmail.com", "wrong"))
        assert isinstance(result.error, AuthError)
        assert not repository.is_logged_in

    def test_invalid_email_sends_nothing(self, repository, sandbox):
        result = run(repository.login("not-an-email", "pw"))
        assert isinstance(result.error, ValidationError)
        assert sandbox.sent == []

    def test_logout_clears_session(self, repository, store):
        login(repository)
        assert store.sessions

        assert run(repository.logout()).is_ok
        assert repository.current_user is None
        assert not store.sessions

    def test_logout_clears_session_even_when_backend_fails(self, repository, store):
        login(repository)
        store.sessions.clear()  # backend already forgot the token

        result = run(repository.logout())
        assert isinstance(result.error, AuthError)
        assert repository.current_user is None

    def test_logout_when_logged_out_is_ok(self, repository, sandbox):
        assert run(repository.logout()).is_ok
        assert sandbox.sent == []

    def test_register_then_verify(self, repository, store):
        result = run(repository.register("carol", "carol@qq.com", "pw1", "pw1"))
        assert result.is_ok
        assert result.value.verification_sent
        user_id = result.value.user.id

        wrong = run(repository.verify_email("000000x"))
        assert isinstance(wrong.error, ServerError)
        assert store.users[user_id].verification_attempts == 1

        verified = run(repository.verify_email(store.verification_codes[user_id]))
        assert verified.value.is_verified
        assert repository.current_user.is_verified

    def test_verification_attempts_are_limited(self, repository, sandbox, store):
        """Test that verify_email stops sending codes once the attempt limit is reached."""
        user_id = run(repository.register("dave", "dave@qq.com", "pw1", "pw1")).value.user.id

        for _ in range(VERIFICATION_ATTEMPTS_LIMIT):
            assert isinstance(run(repository.verify_email("bad-code")).error, ServerError)
        assert repository.current_user.verification_attempts == VERIFICATION_ATTEMPTS_LIMIT
        sent_before = len(sandbox.sent)

        result = run(repository.verify_email(store.verification_codes[user_id]))

        assert isinstance(result.error, ValidationError)
        assert len(sandbox.sent) == sent_before
        assert store.users[user_id].verification_attempts == VERIFICATION_ATTEMPTS_LIMIT

    def test_register_checks_locally(self, repository, sandbox):
        mismatch = run(repository.register("carol", "carol@qq.com", "pw1", "pw2"))
        unsupported = run(repository.register("carol", "carol@unknown.org", "pw1", "pw1"))
        assert isinstance(mismatch.error, ValidationError)
        assert isinstance(unsupported.error, ValidationError)
        assert sandbox.sent == []

    def test_duplicate_registration(self, repository):
        result = run(repository.register("alice2", "alice@gmail.com", "pw", "pw"))
        assert isinstance(result.error, ServerError)
        assert result.error.error_code == 409

    def test_profile_requires_login(self, repository):
        result = run(repository.get_user_profile())
        assert isinstance(result.error, AuthError)

    def test_profile_and_settings(self, repository, store):
        login(repository)
        assert run(repository.get_user_profile()).value.username == "alice"

        result = run(repository.update_user_settings(UserSettings(dark_mode=False, language="en_US")))
        assert result.value is True
        assert store.user_settings["user-1"].language == "en_US"


class TestCatalog:
    """Test catalog browsing on both path conventions."""

    def test_featured_apps(self, repository):
        result = run(repository.get_featured_apps())
        assert result.is_ok
        assert [a.id for a in result.value] == ["app-4", "app-1", "app-2"]

    def test_new_and_recommended(self, repository):
        assert run(repository.get_new_apps()).value[0].id == "app-4"
        assert run(repository.get_recommended_apps()).value[0].id == "app-4"

    def test_home_data(self, repository):
        home = run(repository.get_home_data()).value
        assert home.banners[0].app_id == "app-1"
        assert {a.id for a in home.promotion_apps} == {"app-2", "app-4"}

    def test_app_detail(self, repository):
        app = run(repository.get_app_detail("app-1")).value
        assert app.package_name == "com.smartshop.pixelrunner"
        assert app.is_free
        assert app.permissions[0].name == "Storage"

    def test_unknown_app(self, repository):
        result = run(repository.get_app_detail("nope"))
        assert isinstance(result.error, NotFoundError)

    def test_search(self, repository):
        result = run(repository.search_apps("zzz"))
        assert result.is_ok
        assert result.value.total_count == 0

        found = run(repository.search_apps("tiny")).value
        assert {a.id for a in found.apps} == {"app-3", "app-4"}
        assert found.search_term == "tiny"

    def test_empty_keyword_sends_nothing(self, repository, sandbox):
        result = run(repository.search_apps("   "))
        assert isinstance(result.error, ValidationError)
        assert sandbox.sent == []

    def test_categories_carry_fresh_counts(self, repository):
        categories = run(repository.get_categories()).value
        assert [c.id for c in categories] == ["games", "tools", "health"]
        assert categories[0].app_count == 2

        detail = run(repository.get_category_detail("health")).value
        assert detail.app_count == 1

    def test_unknown_category_detail(self, repository):
        result = run(repository.get_category_detail("music"))
        assert isinstance(result.error, NotFoundError)

    def test_category_apps_paging(self, repository):
        first = run(repository.get_category_apps("games", page=1, page_size=1)).value
        second = run(repository.get_category_apps("games", page=2, page_size=1)).value
        assert first.has_more and not second.has_more
        assert first.items[0].id != second.items[0].id
        assert first.total_count == 2

    def test_default_page_size_comes_from_settings(self, repository, sandbox):
        run(repository.get_category_apps("games"))
        assert "pageSize=20" in sandbox.sent[-1].url

    def test_bad_paging_sends_nothing(self, repository, sandbox):
        result = run(repository.get_ranking_apps(RankingType.HOT, page=0))
        assert isinstance(result.error, ValidationError)
        assert sandbox.sent == []

    @pytest.mark.parametrize("ranking,first", [
        (RankingType.HOT, "app-4"),
        (RankingType.NEW, "app-4"),
        (RankingType.RATING, "app-4"),
    ])
    def test_rankings(self, repository, ranking, first):
        assert run(repository.get_ranking_apps(ranking)).value.items[0].id == first

    def test_ranking_type_must_be_enum(self, repository):
        result = run(repository.get_ranking_apps("HOTTEST"))
        assert isinstance(result.error, ValidationError)


class TestSocial:
    """Test comments, favorites and reports."""

    def test_comments_listing(self, repository):
        comments = run(repository.get_app_comments("app-1")).value
        assert comments.total_count == 1
        assert comments.items[0].rating == 5

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range_sends_nothing(self, repository, sandbox, rating):
        login(repository)
        sent_before = len(sandbox.sent)

        result = run(repository.post_comment("app-1", rating, "meh"))

        assert isinstance(result.error, ValidationError)
        assert len(sandbox.sent) == sent_before

    def test_post_comment(self, repository, store):
        login(repository)
        result = run(repository.post_comment("app-2", 4, "Solid"))
        assert result.value.user_id == "user-1"
        assert result.value.rating == 4
        assert len(store.comments["app-2"]) == 1

        again = run(repository.post_comment("app-2", 3, "Changed my mind"))
        assert isinstance(again.error, ServerError)
        assert again.error.message == "You have already reviewed this app"

    def test_post_comment_requires_login(self, repository, sandbox):
        result = run(repository.post_comment("app-1", 4, "hi"))
        assert isinstance(result.error, AuthError)
        assert sandbox.sent == []

    def test_favorites_round_trip(self, repository):
        login(repository)
        assert run(repository.toggle_favorite("app-3", True)).value is True

        favorites = run(repository.get_favorite_apps()).value
        assert [a.id for a in favorites.items] == ["app-3"]
        assert favorites.items[0].is_favorite

        run(repository.toggle_favorite("app-3", False))
        assert run(repository.get_favorite_apps()).value.total_count == 0

    def test_favorite_unknown_app(self, repository):
        login(repository)
        result = run(repository.toggle_favorite("nope", True))
        assert isinstance(result.error, NotFoundError)

    def test_banned_user_cannot_mutate(self, repository, sandbox):
        login(repository, "mallory@gmail.com")
        assert repository.current_user.is_banned
        sent_before = len(sandbox.sent)

        results = [
            run(repository.post_comment("app-1", 5, "spam")),
            run(repository.toggle_favorite("app-1", True)),
            run(repository.submit_report(ReportType.APP, "app-2", ReportReason.SPAM)),
        ]

        assert all(isinstance(r.error, AuthError) and r.error.error_code == 403 for r in results)
        assert len(sandbox.sent) == sent_before

    def test_submit_report(self, repository, store):
        login(repository)
        result = run(repository.submit_report(ReportType.COMMENT, "comment-1", ReportReason.INAPPROPRIATE,
                                              "rude"))
        report = result.value
        assert report.report_type is ReportType.COMMENT
        assert report.user_id == "user-1"
        assert report.status.value == "PENDING"
        assert [r.id for r in store.reports] == [report.id]

    def test_report_unknown_target(self, repository):
        login(repository)
        result = run(repository.submit_report(ReportType.APP, "nope", ReportReason.MALWARE))
        assert isinstance(result.error, NotFoundError)


class TestVersioning:

    def test_latest_version(self, repository):
        info = run(repository.get_latest_version()).value
        assert info.version_name == "1.2.0"
        assert info.min_android_version == 19

    @pytest.mark.parametrize("current,expected", [("1.1.0", True), ("1.2.0", False), ("2.0", False)])
    def test_check_for_update(self, repository, current, expected):
        assert run(repository.check_for_update(current)).value is expected

    def test_no_published_version(self, repository, store):
        store.latest_version = None
        result = run(repository.check_for_update("1.0"))
        assert isinstance(result.error, NotFoundError)


class TestDownloads:
    """Test download operations through a DownloadManager collaborator."""

    @pytest.fixture
    def manager(self):
        return InMemoryDownloadManager()

    @pytest.fixture
    def downloads_repo(self, settings, session, manager):
        return build_repository(settings, download_manager=manager, session=session)

    def test_download_lifecycle(self, downloads_repo, manager):
        app = run(downloads_repo.get_app_detail("app-3")).value
        download = run(downloads_repo.download_app(app)).value
        assert download.status is DownloadStatus.PENDING

        # the manager starts the transfer on its own
        manager.records[download.id] = download.model_copy(update={"status": DownloadStatus.DOWNLOADING})

        assert run(downloads_repo.pause_download(download.id)).value.status is DownloadStatus.PAUSED
        assert run(downloads_repo.resume_download(download.id)).value.status is DownloadStatus.DOWNLOADING
        assert run(downloads_repo.cancel_download(download.id)).value.status is DownloadStatus.CANCELED
        assert manager.applied == [DownloadStatus.PAUSED, DownloadStatus.DOWNLOADING, DownloadStatus.CANCELED]
        assert run(downloads_repo.get_downloads()).value[0].id == download.id

    def test_install_requires_completed(self, downloads_repo, manager):
        app = run(downloads_repo.get_app_detail("app-1")).value
        download = run(downloads_repo.download_app(app)).value

        result = run(downloads_repo.install_app(download.id))
        assert isinstance(result.error, ValidationError)
        assert manager.applied == []

    def test_unknown_download(self, downloads_repo):
        result = run(downloads_repo.pause_download("missing"))
        assert isinstance(result.error, NotFoundError)

    def test_download_ops_need_a_manager(self, repository):
        with pytest.raises(TypeError):
            run(repository.get_downloads())


class TestFailureMapping:
    """Test envelope and transport failures surfacing as Result errors."""

    class StubApi:
        def __init__(self, response=None, exc=None):
            self.response, self.exc = response, exc

        async def get_categories(self):
            if self.exc is not None:
                raise self.exc
            return self.response

    def test_envelope_failure_is_server_error(self):
        from smartshop.models import ApiResponse
        api = self.StubApi(ApiResponse(success=False, message="maintenance", error_code=5001))
        result = run(RemoteRepository(api).get_categories())
        assert result.error == ServerError("maintenance", 5001)

    def test_success_without_data_is_decode_error(self):
        from smartshop.models import ApiResponse
        result = run(RemoteRepository(self.StubApi(ApiResponse(success=True))).get_categories())
        assert isinstance(result.error, DecodeError)

    def test_transport_error_is_returned(self):
        result = run(RemoteRepository(self.StubApi(exc=TransportError("down"))).get_categories())
        assert isinstance(result.error, TransportError)

    def test_repository_requires_api(self):
        with pytest.raises(TypeError):
            RemoteRepository(None)

    def test_failure_with_stray_data_is_server_error(self):
        from smartshop.adapters.smartshop import endpoints as ep
        response = ep.GET_CATEGORIES.decode({"success": False, "message": "m", "errorCode": 5, "data": []})
        result = run(RemoteRepository(self.StubApi(response)).get_categories())
        assert result.error == ServerError("m", 5)
