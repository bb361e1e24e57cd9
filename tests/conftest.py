"""
Pytest configuration for openaiwire tests.
HTTP exchanges are served by an in-process fake API mounted on httpx.MockTransport.
"""

import json
import sys
import logging
from pathlib import Path

import httpx
import pytest

# Add src to path for direct imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

BASE_URL = "https://api.test/v1"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test (no external dependencies)")
    config.addinivalue_line("markers", "slow: mark test as slow running")


class FakeAPI:
    """Records every request and answers from canned responses keyed by (method, path)."""

    def __init__(self):
        self.requests = []
        self.routes = {}

    def respond(self, method, path, json_body=None, status_code=200, text=None, content=None, headers=None):
        self.routes[(method, f"/v1{path}")] = (status_code, json_body, text, content, headers)
        return self

    def fail(self, method, path, error_class=httpx.ConnectError):
        self.routes[(method, f"/v1{path}")] = error_class
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": {"message": f"No route for {request.url.path}"}})
        if isinstance(route, type) and issubclass(route, httpx.HTTPError):
            raise route("connection refused", request=request)

        status_code, json_body, text, content, headers = route
        if json_body is not None:
            return httpx.Response(status_code, json=json_body, headers=headers)
        if text is not None:
            return httpx.Response(status_code, text=text, headers=headers)
        return httpx.Response(status_code, content=content or b"", headers=headers)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def fake_api():
    return FakeAPI()


@pytest.fixture
def configuration():
    from openaiwire import Configuration
    return Configuration.builder().api_key("sk-test").base_url(BASE_URL).organization("org-test").build()


@pytest.fixture
def client(fake_api, configuration):
    """Provides a blocking client wired to the fake API."""
    from openaiwire import OpenAIClient
    http_client = httpx.Client(transport=httpx.MockTransport(fake_api.handler))
    with OpenAIClient(configuration, http_client=http_client) as client:
        yield client
    http_client.close()


@pytest.fixture
def async_http_client(fake_api):
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler))
