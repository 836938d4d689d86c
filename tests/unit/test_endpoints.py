"""
Unit tests for the declarative endpoint contract: request preparation and
response decoding. No I/O.
"""
import pytest

from smartshop.adapters.smartshop import endpoints as ep
from smartshop.errors import AuthError, DecodeError
from smartshop.models import App, RankingType, ReportReason, ReportType, UserSettings

APP = {
    "id": "app-1", "name": "Pixel Runner", "developer": "Arcade Co", "version": "1",
    "icon": "i.png", "download_url": "d.apk",
}


class TestPrepare:
    """Test that arguments land in the right place under their wire names."""

    def test_path_ids_are_percent_encoded(self):
        call = ep.GET_APP_DETAIL.prepare(app_id="a/b c?")
        assert call.path == "apps/a%2Fb%20c%3F"

    def test_page_defaults(self):
        call = ep.SEARCH_APPS.prepare(keyword="chess")
        assert call.query == {"keyword": "chess", "page": 1, "pageSize": 20}

    def test_enum_query_value(self):
        call = ep.GET_RANKING_APPS.prepare(ranking_type=RankingType.HOT, page=2, page_size=5)
        assert call.query == {"type": "HOT", "page": 2, "pageSize": 5}

    def test_form_fields(self):
        call = ep.SUBMIT_REPORT.prepare(token="t", report_type=ReportType.COMMENT, target_id="c-1",
                                        reason=ReportReason.SPAM)
        assert call.form == {"reportType": "comment", "targetId": "c-1", "reason": "SPAM", "description": ""}
        assert call.json is None

    def test_bool_query_is_spelled_out(self):
        call = ep.TOGGLE_FAVORITE.prepare(token="t", app_id="app-1", favorite=False)
        assert call.query == {"favorite": "false"}

    def test_json_body_keeps_booleans_and_models(self):
        login = ep.LOGIN.prepare(email="a@gmail.com", password="pw")
        assert login.json == {"email": "a@gmail.com", "password": "pw", "remember_me": False}

        settings = ep.UPDATE_USER_SETTINGS.prepare(token="t", settings=UserSettings(dark_mode=False))
        assert settings.json["settings"]["dark_mode"] is False
        assert settings.json["settings"]["language"] == "zh_CN"

    def test_missing_required_argument(self):
        with pytest.raises(TypeError):
            ep.GET_APP_DETAIL.prepare()

    def test_unknown_argument(self):
        with pytest.raises(TypeError):
            ep.GET_CATEGORIES.prepare(page=1)

    def test_auth_endpoint_needs_token(self):
        with pytest.raises(AuthError):
            ep.GET_FAVORITE_APPS.prepare()

    def test_bearer_header(self):
        call = ep.GET_USER_PROFILE.prepare(token="abc")
        assert call.headers == {"Authorization": "Bearer abc"}
        assert ep.GET_FEATURED_APPS.prepare().headers == {}

    def test_only_get_is_idempotent(self):
        assert ep.GET_APP_DETAIL.idempotent
        assert not ep.POST_COMMENT.idempotent
        assert not ep.UPDATE_USER_SETTINGS.idempotent

    def test_retry_policy_follows_idempotency(self):
        assert ep.RETRYABLE_METHODS == frozenset({"GET"})


class TestDecode:

    def test_bare_response_is_wrapped(self):
        response = ep.GET_FEATURED_APPS.decode([APP])
        assert response.success
        assert isinstance(response.data[0], App)

    def test_bare_empty_response(self):
        response = ep.LOGOUT.decode(None)
        assert response.success and response.data is None

    def test_enveloped_failure(self):
        response = ep.GET_APP_DETAIL.decode({"success": False, "message": "gone", "errorCode": 404})
        assert not response.success
        assert response.error_code == 404

    def test_paged_response(self):
        response = ep.GET_CATEGORY_APPS.decode({
            "success": True,
            "data": {"items": [APP], "totalCount": 21, "page": 1, "pageSize": 20},
        })
        assert response.data.total_count == 21
        assert response.data.has_more

    def test_shape_mismatch_is_decode_error(self):
        with pytest.raises(DecodeError):
            ep.GET_APP_DETAIL.decode({"success": True, "data": {"id": "only-an-id"}})

    def test_unknown_enum_is_decode_error(self):
        with pytest.raises(DecodeError):
            ep.SUBMIT_REPORT.decode({
                "success": True,
                "data": {"reportType": "USER", "targetId": "x", "reason": "SPAM"},
            })

    def test_every_operation_is_registered(self):
        assert len(ep.ENDPOINTS) == 22
        assert ep.ENDPOINTS["get_app_detail"] is ep.GET_APP_DETAIL

    def test_unknown_report_reason_is_decode_error(self):
        with pytest.raises(DecodeError):
            ep.SUBMIT_REPORT.decode({
                "success": True,
                "data": {"reportType": "APP", "targetId": "app-1", "reason": "BORING"},
            })

    def test_failure_with_stray_data_keeps_message_and_code(self):
        response = ep.GET_CATEGORIES.decode({"success": False, "message": "m", "errorCode": 5, "data": []})
        assert not response.success
        assert response.data is None
        assert (response.message, response.error_code) == ("m", 5)
