"""
Shared fixtures: a seeded sandbox backend served in-process to the real
requests-based client through a transport adapter.
"""
import pytest
import requests
from fastapi.testclient import TestClient
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from sandbox_api.main import create_app
from sandbox_api.store import seed_store
from smartshop.dependencies import build_repository
from smartshop.settings import ApiSettings, Settings

BASE_URL = "https://api.smartshop.com"


class SandboxAdapter(BaseAdapter):
    """requests transport that hands every request to the sandbox ASGI app."""

    def __init__(self, app):
        super().__init__()
        self.client = TestClient(app, base_url=BASE_URL)
        self.sent: list[requests.PreparedRequest] = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append(request)
        headers = {k: v for k, v in request.headers.items() if k.lower() != "content-length"}
        upstream = self.client.request(request.method, request.url, content=request.body, headers=headers)

        response = requests.Response()
        response.status_code = upstream.status_code
        response.reason = upstream.reason_phrase
        response.headers = CaseInsensitiveDict(upstream.headers)
        response._content = upstream.content
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        self.client.close()


@pytest.fixture
def store():
    """Freshly seeded backend state per test."""
    return seed_store()


@pytest.fixture
def sandbox(store):
    """Sandbox transport adapter; ``sandbox.sent`` records outgoing requests."""
    return SandboxAdapter(create_app(store))


@pytest.fixture
def settings():
    return Settings(api=ApiSettings(base_url=f"{BASE_URL}/", total_retries=0, backoff_factor=0))


@pytest.fixture
def session(sandbox):
    s = requests.Session()
    # longest prefix wins over the retrying adapter mounted by the client
    s.mount(BASE_URL, sandbox)
    return s


@pytest.fixture
def repository(settings, session):
    """RemoteRepository wired to the sandbox, logged out."""
    return build_repository(settings, session=session)
