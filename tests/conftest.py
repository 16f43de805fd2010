"""Shared fixtures for FeaturePulse MCP tests."""
import httpx
import pytest

from featurepulse_mcp.client import FeaturePulseClient
from featurepulse_mcp.config import Settings

WEB_APP_ID = "11111111-1111-1111-1111-111111111111"
MOBILE_APP_ID = "22222222-2222-2222-2222-222222222222"
MULTIPLE_PROJECTS_ERROR = (
    "Multiple projects found. Specify project_id: "
    f"Web App ({WEB_APP_ID}), Mobile App ({MOBILE_APP_ID})"
)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def settings():
    return Settings(api_key="fp_test_key", base_url="https://featurepulse.test")


@pytest.fixture
def make_client(settings):
    """Return a factory building a client around a request handler."""

    def factory(handler, context_name="web-app"):
        transport = RecordingTransport(handler)
        client = FeaturePulseClient(settings, context_name=context_name, transport=transport)
        return client, transport

    return factory
