import logging
from typing import Any, Optional

import certifi  # Provides Mozilla's CA bundle for SSL certificate verification
import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from smartshop.adapters.smartshop.endpoints import RETRYABLE_METHODS, PreparedCall
from smartshop.errors import AuthError, NotFoundError, ServerError, TransportError
from smartshop.settings import ApiSettings, get_settings

logger = logging.getLogger(__name__)


class SmartShopHTTPClient:
    def __init__(self,
                settings: Optional[ApiSettings] = None,
                session: Optional[requests.Session] = None,
                status_forcelist: tuple = (429, 500, 502, 503, 504)):
        """
        Initializes a requests.Session with:
            - JSON accept header
            - HTTPAdapter retrying the methods of idempotent endpoints on
              connection errors and the given HTTP status codes. Mutating
              requests are sent once.
        """
        self.cfg: ApiSettings = settings or get_settings().api
        self.session = session or requests.Session()

        retry_strategy = Retry(
            total=self.cfg.total_retries,
            connect=self.cfg.total_retries,
            read=self.cfg.total_retries,
            backoff_factor=self.cfg.backoff_factor,
            status_forcelist=status_forcelist,
            allowed_methods=RETRYABLE_METHODS,
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        self.session.headers.update({"Accept": "application/json"})

        if self.cfg.verify_ssl:
            self.verify = certifi.where()
        else:
            self.verify = False
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def url_for(self, call: PreparedCall) -> str:
        base_url = self.cfg.base_url_for(call.family.value)
        return f"{base_url.rstrip('/')}/{call.path.lstrip('/')}"

    def _status_error(self, resp: requests.Response) -> Exception:
        """Translate a non-2xx response into the failure taxonomy."""
        message, code = f"HTTP {resp.status_code}", resp.status_code
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("detail") or message
            code = body.get("errorCode") or body.get("error_code") or code
            if not isinstance(message, str):
                message = str(message)

        if resp.status_code in (401, 403):
            return AuthError(message, code)
        if resp.status_code == 404:
            return NotFoundError(message, code)
        if resp.status_code >= 500:
            return TransportError(message, code)
        return ServerError(message, code)

    def _handle_response(self, resp: requests.Response) -> Any:
        """
            Handle API response with error mapping and JSON parsing.

            Args:
                resp: HTTP response object

            Returns:
                Parsed JSON data, or None for an empty body

            Raises:
                AuthError: 401/403
                NotFoundError: 404
                TransportError: 5xx or a body that is not JSON
                ServerError: any other non-2xx status
            """
        try:
            # Check for HTTP errors (4xx, 5xx)
            resp.raise_for_status()

            if not resp.content:
                logger.debug(f"Empty response received for {resp.url}")
                return None

            return resp.json()

        except requests.HTTPError:
            logger.error(f"HTTP {resp.status_code} error for {resp.url}: {resp.text[:200]}")
            raise self._status_error(resp) from None

        except ValueError as e:
            # JSON decode error
            logger.error(f"Invalid JSON response from {resp.url}: {resp.text[:200]}...")
            raise TransportError(f"Invalid JSON response: {e}") from e

    def send(self, call: PreparedCall) -> Any:
        """
        Execute a PreparedCall and return the parsed JSON body.

        Blocking; SmartShopApi runs it off the event loop.
        """
        url = self.url_for(call)
        logger.debug(f"{call.method} {url} ({call.operation})")
        try:
            resp = self.session.request(
                call.method,
                url,
                params=call.query,
                data=call.form,
                json=call.json,
                headers=call.headers,
                timeout=self.cfg.timeout,
                verify=self.verify,
            )
        except requests.Timeout as e:
            logger.warning(f"{call.operation}: request timed out after {self.cfg.timeout}s")
            raise TransportError(f"Request timed out: {e}") from e
        except requests.ConnectionError as e:
            logger.warning(f"{call.operation}: connection failed: {e}")
            raise TransportError(f"Connection failed: {e}") from e
        except requests.RequestException as e:
            logger.error(f"{call.operation}: request failed: {e}")
            raise TransportError(f"Request failed: {e}") from e

        return self._handle_response(resp)

    def close(self) -> None:
        self.session.close()
