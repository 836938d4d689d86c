"""
Unit tests for the download status state machine.
"""
import pytest

from smartshop import downloads
from smartshop.errors import InvalidTransitionError, ValidationError
from smartshop.models import App, DownloadStatus as S


@pytest.fixture
def app():
    return App(id="app-1", name="Pixel Runner", developer="Arcade Co", version="2.1.0",
               icon="icon.png", download_url="https://cdn.example.com/app-1.apk", size=1000)


@pytest.fixture
def pending(app):
    return downloads.new_download(app, download_id="dl-1")


class TestNewDownload:

    def test_starts_pending_with_app_snapshot(self, pending, app):
        assert pending.status is S.PENDING
        assert pending.app_id == app.id
        assert pending.download_url == app.download_url
        assert pending.file_size == 1000
        assert pending.progress == 0.0
        assert pending.end_time is None

    def test_generates_id_when_missing(self, app):
        a, b = downloads.new_download(app), downloads.new_download(app)
        assert a.id and b.id and a.id != b.id


class TestTransitions:
    """Test allowed and rejected status changes."""

    def test_happy_path_to_installed(self, pending):
        d = pending
        for target in (S.DOWNLOADING, S.PAUSED, S.DOWNLOADING, S.COMPLETED, S.INSTALLING, S.INSTALLED):
            d = downloads.transition(d, target)
            assert d.status is target
        assert d.progress == 1.0
        assert d.downloaded_size == d.file_size

    def test_completed_cannot_resume(self, pending):
        """Test that COMPLETED -> DOWNLOADING is rejected."""
        d = downloads.transition(downloads.transition(pending, S.DOWNLOADING), S.COMPLETED)
        with pytest.raises(InvalidTransitionError):
            downloads.transition(d, S.DOWNLOADING)

    def test_pending_cannot_complete(self, pending):
        with pytest.raises(InvalidTransitionError):
            downloads.transition(pending, S.COMPLETED)

    @pytest.mark.parametrize("status", sorted(downloads.TERMINAL_STATUSES, key=lambda s: s.value))
    def test_terminal_statuses_admit_nothing(self, status):
        assert not any(downloads.can_transition(status, target) for target in S)

    def test_completed_records_end_time_and_file_path(self, pending):
        d = downloads.transition(pending, S.DOWNLOADING)
        d = downloads.transition(d, S.COMPLETED, file_path="/data/app-1.apk")
        assert d.end_time is not None
        assert d.file_path == "/data/app-1.apk"

    def test_cancel_sets_end_time(self, pending):
        d = downloads.transition(pending, S.CANCELED)
        assert d.end_time is not None

    def test_transition_returns_a_copy(self, pending):
        downloads.transition(pending, S.DOWNLOADING)
        assert pending.status is S.PENDING

    def test_invalid_transition_is_a_validation_error(self):
        assert issubclass(InvalidTransitionError, ValidationError)


class TestProgress:

    def test_progress_only_while_downloading(self, pending):
        with pytest.raises(InvalidTransitionError):
            downloads.with_progress(pending, 0.5)

    def test_progress_never_decreases(self, pending):
        d = downloads.with_progress(downloads.transition(pending, S.DOWNLOADING), 0.6)
        assert d.downloaded_size == 600
        with pytest.raises(InvalidTransitionError):
            downloads.with_progress(d, 0.4)

    def test_progress_bounds(self, pending):
        d = downloads.transition(pending, S.DOWNLOADING)
        with pytest.raises(ValidationError):
            downloads.with_progress(d, 1.5)
