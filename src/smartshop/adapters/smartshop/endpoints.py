"""
Declarative API contract for the SmartShop backend.

Every operation is declared once here: method, path template, parameters,
response type, envelope convention and whether it needs the bearer token.
Nothing in this module performs I/O; ``SmartShopApi`` executes declarations
through the HTTP adapter.

The backend exposes two path conventions:

- v1 (``user/login``, ``apps/{appId}``, ``search`` ...): form bodies, every
  response wrapped in ``{success, data, message, errorCode}``.
- v2 (``api/auth/login``, ``api/user/profile``, ``apps/featured`` ...): JSON
  bodies, bare responses.

Bare responses are wrapped into the envelope on decode so callers only ever
see ``ApiResponse``. Each operation is bound to exactly one convention; see
DESIGN.md for which one and why.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Optional
from urllib.parse import quote

import pydantic

from smartshop.errors import AuthError, DecodeError
from smartshop.models import (
    ApiResponse,
    App,
    AuthSession,
    Category,
    Comment,
    HomeData,
    PagedResponse,
    Registration,
    Report,
    SearchResult,
    User,
    VersionInfo,
)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20


class Family(str, Enum):
    V1 = "v1"
    V2 = "v2"


class Location(str, Enum):
    PATH = "path"
    QUERY = "query"
    FORM = "form"
    JSON = "json"


@dataclass(frozen=True)
class Param:
    name: str
    wire: Optional[str] = None
    location: Location = Location.QUERY
    required: bool = True
    default: Any = None
    encode: Optional[Callable[[Any], Any]] = None

    @property
    def wire_name(self) -> str:
        return self.wire or self.name


@dataclass(frozen=True)
class PreparedCall:
    """A fully resolved request, ready for the HTTP adapter."""

    operation: str
    family: Family
    method: str
    path: str
    query: Optional[dict[str, Any]] = None
    form: Optional[dict[str, Any]] = None
    json: Optional[dict[str, Any]] = None
    headers: dict[str, str] = field(default_factory=dict)


def _encode(value: Any, location: Location) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool) and location is not Location.JSON:
        return "true" if value else "false"
    if isinstance(value, pydantic.BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return value


@lru_cache(maxsize=None)
def _envelope_adapter(response: Any) -> pydantic.TypeAdapter:
    data_type = Any if response is None else response
    return pydantic.TypeAdapter(ApiResponse[data_type])


@dataclass(frozen=True)
class Endpoint:
    operation: str
    family: Family
    method: str
    path: str
    params: tuple[Param, ...] = ()
    response: Any = None
    enveloped: bool = True
    auth: bool = False

    @property
    def idempotent(self) -> bool:
        """GET endpoints are safe to retry; everything else is sent once."""
        return self.method == "GET"

    def prepare(self, token: Optional[str] = None, **arguments: Any) -> PreparedCall:
        """
        Resolve arguments into a PreparedCall.

        Raises:
            TypeError: unknown or missing required argument (caller bug)
            AuthError: the endpoint needs a bearer token and none was given
        """
        known = {p.name for p in self.params}
        unknown = set(arguments) - known
        if unknown:
            raise TypeError(f"{self.operation}() got unexpected arguments: {sorted(unknown)}")

        path_values: dict[str, str] = {}
        buckets: dict[Location, dict[str, Any]] = {Location.QUERY: {}, Location.FORM: {}, Location.JSON: {}}
        for param in self.params:
            value = arguments.get(param.name, param.default)
            if value is None:
                if param.required:
                    raise TypeError(f"{self.operation}() missing required argument '{param.name}'")
                continue
            value = param.encode(value) if param.encode else _encode(value, param.location)
            if param.location is Location.PATH:
                # never concatenate raw ids into the path
                path_values[param.wire_name] = quote(str(value), safe="")
            else:
                buckets[param.location][param.wire_name] = value

        headers: dict[str, str] = {}
        if self.auth:
            if not token:
                raise AuthError(f"{self.operation} requires a logged-in user", error_code=401)
            headers["Authorization"] = f"Bearer {token}"

        return PreparedCall(
            operation=self.operation,
            family=self.family,
            method=self.method,
            path=self.path.format(**path_values),
            query=buckets[Location.QUERY] or None,
            form=buckets[Location.FORM] or None,
            json=buckets[Location.JSON] or None,
            headers=headers,
        )

    def decode(self, payload: Any) -> ApiResponse:
        """
        Validate a response payload into ``ApiResponse[response]``.

        Raises:
            DecodeError: payload does not match the declared shape
        """
        if not self.enveloped:
            payload = {"success": True, "data": None if self.response is None else payload}
        try:
            return _envelope_adapter(self.response).validate_python(payload)
        except pydantic.ValidationError as e:
            raise DecodeError(f"{self.operation}: unexpected response shape: {e}") from e


def _page_params() -> tuple[Param, ...]:
    return (
        Param("page", required=False, default=DEFAULT_PAGE),
        Param("page_size", wire="pageSize", required=False, default=DEFAULT_PAGE_SIZE),
    )


Apps = tuple[App, ...]

# ---- auth (v2) ----
LOGIN = Endpoint(
    "login", Family.V2, "POST", "api/auth/login",
    params=(
        Param("email", location=Location.JSON),
        Param("password", location=Location.JSON),
        Param("remember_me", location=Location.JSON, required=False, default=False),
    ),
    response=AuthSession, enveloped=False,
)
REGISTER = Endpoint(
    "register", Family.V2, "POST", "api/auth/register",
    params=(
        Param("username", location=Location.JSON),
        Param("email", location=Location.JSON),
        Param("password", location=Location.JSON),
        Param("confirm_password", location=Location.JSON),
    ),
    response=Registration, enveloped=False,
)
VERIFY_EMAIL = Endpoint(
    "verify_email", Family.V2, "POST", "api/auth/verify-email",
    params=(Param("code", wire="verification_code", location=Location.JSON),),
    response=User, enveloped=False, auth=True,
)
LOGOUT = Endpoint("logout", Family.V2, "POST", "api/auth/logout", enveloped=False, auth=True)
GET_USER_PROFILE = Endpoint(
    "get_user_profile", Family.V2, "GET", "api/user/profile",
    response=User, enveloped=False, auth=True,
)

# ---- user (v1) ----
UPDATE_USER_SETTINGS = Endpoint(
    "update_user_settings", Family.V1, "PUT", "user/settings",
    params=(Param("settings", location=Location.JSON),),
    response=bool, auth=True,
)

# ---- catalog ----
GET_FEATURED_APPS = Endpoint("get_featured_apps", Family.V2, "GET", "apps/featured", response=Apps, enveloped=False)
GET_NEW_APPS = Endpoint("get_new_apps", Family.V2, "GET", "apps/new", response=Apps, enveloped=False)
GET_RECOMMENDED_APPS = Endpoint(
    "get_recommended_apps", Family.V2, "GET", "apps/recommended", response=Apps, enveloped=False
)
GET_HOME_DATA = Endpoint("get_home_data", Family.V1, "GET", "home", response=HomeData)
GET_APP_DETAIL = Endpoint(
    "get_app_detail", Family.V1, "GET", "apps/{appId}",
    params=(Param("app_id", wire="appId", location=Location.PATH),),
    response=App,
)
SEARCH_APPS = Endpoint(
    "search_apps", Family.V1, "GET", "search",
    params=(Param("keyword"),) + _page_params(),
    response=SearchResult,
)
GET_CATEGORIES = Endpoint("get_categories", Family.V1, "GET", "categories", response=tuple[Category, ...])
GET_CATEGORY_DETAIL = Endpoint(
    "get_category_detail", Family.V2, "GET", "categories/{categoryId}",
    params=(Param("category_id", wire="categoryId", location=Location.PATH),),
    response=Category, enveloped=False,
)
GET_CATEGORY_APPS = Endpoint(
    "get_category_apps", Family.V1, "GET", "categories/{categoryId}/apps",
    params=(Param("category_id", wire="categoryId", location=Location.PATH),) + _page_params(),
    response=PagedResponse[App],
)
GET_RANKING_APPS = Endpoint(
    "get_ranking_apps", Family.V1, "GET", "ranking",
    params=(Param("ranking_type", wire="type"),) + _page_params(),
    response=PagedResponse[App],
)

# ---- social (v1) ----
GET_APP_COMMENTS = Endpoint(
    "get_app_comments", Family.V1, "GET", "apps/{appId}/comments",
    params=(Param("app_id", wire="appId", location=Location.PATH),) + _page_params(),
    response=PagedResponse[Comment],
)
POST_COMMENT = Endpoint(
    "post_comment", Family.V1, "POST", "apps/{appId}/comments",
    params=(
        Param("app_id", wire="appId", location=Location.PATH),
        Param("rating", location=Location.FORM),
        Param("content", location=Location.FORM),
    ),
    response=Comment, auth=True,
)
TOGGLE_FAVORITE = Endpoint(
    "toggle_favorite", Family.V1, "POST", "apps/{appId}/favorite",
    params=(
        Param("app_id", wire="appId", location=Location.PATH),
        Param("favorite"),
    ),
    response=bool, auth=True,
)
GET_FAVORITE_APPS = Endpoint(
    "get_favorite_apps", Family.V1, "GET", "user/favorites",
    params=_page_params(),
    response=PagedResponse[App], auth=True,
)

# ---- governance (v1) ----
SUBMIT_REPORT = Endpoint(
    "submit_report", Family.V1, "POST", "report",
    params=(
        Param("report_type", wire="reportType", location=Location.FORM, encode=lambda t: t.form_value),
        Param("target_id", wire="targetId", location=Location.FORM),
        Param("reason", location=Location.FORM),
        Param("description", location=Location.FORM, required=False, default=""),
    ),
    response=Report, auth=True,
)

# ---- versioning (v2) ----
GET_LATEST_VERSION = Endpoint(
    "get_latest_version", Family.V2, "GET", "api/version/latest",
    response=VersionInfo, enveloped=False,
)

ENDPOINTS: dict[str, Endpoint] = {
    e.operation: e
    for e in (
        LOGIN, REGISTER, VERIFY_EMAIL, LOGOUT, GET_USER_PROFILE, UPDATE_USER_SETTINGS,
        GET_FEATURED_APPS, GET_NEW_APPS, GET_RECOMMENDED_APPS, GET_HOME_DATA, GET_APP_DETAIL,
        SEARCH_APPS, GET_CATEGORIES, GET_CATEGORY_DETAIL, GET_CATEGORY_APPS, GET_RANKING_APPS,
        GET_APP_COMMENTS, POST_COMMENT, TOGGLE_FAVORITE, GET_FAVORITE_APPS,
        SUBMIT_REPORT, GET_LATEST_VERSION,
    )
}

# Methods the transport may retry: those of the idempotent endpoints only
RETRYABLE_METHODS: frozenset[str] = frozenset(e.method for e in ENDPOINTS.values() if e.idempotent)
