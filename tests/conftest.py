"""
Shared pytest fixtures for Fitbit MCP testing.
"""
import json
import pytest
import requests
from unittest.mock import Mock, patch

# Monkey-patch: production uses fastmcp.FastMCP, tests use mcp.server.fastmcp.
# Patch fastmcp.Context to match mcp.server.fastmcp.Context so tools work
# with the test FastMCP.
import fastmcp
from mcp.server.fastmcp import server as mcp_server
fastmcp.Context = mcp_server.Context

from mcp.server.fastmcp import FastMCP

from fitbit_mcp.sdk.client import FitbitClient
from fitbit_mcp.sdk.credentials import APIResourceCredentials, InMemoryCredentialsCache, LocalUserDetail


def get_tool_result_text(result):
    """Extract text from tool result.

    FastMCP call_tool returns a tuple (list_of_TextContent, metadata_dict).
    This helper extracts the text from the first TextContent item.
    """
    # Handle tuple return: (content_list, metadata)
    if isinstance(result, tuple) and len(result) > 0:
        result = result[0]
    if isinstance(result, list) and len(result) > 0:
        if hasattr(result[0], 'text'):
            return result[0].text
    return str(result)


def make_response(status_code=200, body=None, text=None):
    """Build a real requests.Response with a JSON (or raw text) body."""
    response = requests.Response()
    response.status_code = status_code
    if body is not None:
        text = json.dumps(body)
    response._content = (text or "").encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def local_user():
    return LocalUserDetail("alice")


@pytest.fixture
def credentials_cache(local_user):
    cache = InMemoryCredentialsCache()
    cache.save_resource_credentials(
        local_user,
        APIResourceCredentials(
            local_user_id=local_user.user_id,
            access_token="user_token",
            access_token_secret="user_secret",
            resource_id="228TQ4",
        ),
    )
    return cache


@pytest.fixture
def fitbit_client(credentials_cache):
    """FitbitClient with a consumer and stored credentials for 'alice'."""
    return FitbitClient(
        consumer_key="consumer_key",
        consumer_secret="consumer_secret",
        credentials_cache=credentials_cache,
    )


@pytest.fixture
def mock_request(fitbit_client):
    """Stub the HTTP session. Set return_value to a make_response() result."""
    with patch.object(fitbit_client._session, "request") as mock_req:
        mock_req.return_value = make_response(200, {})
        yield mock_req


@pytest.fixture
def mock_sdk_client():
    """Create a mock SDK client for tool tests (SDK functions are patched)."""
    client = Mock()
    client.credentials_cache = InMemoryCredentialsCache()
    return client


@pytest.fixture(autouse=True)
def mock_get_client(mock_sdk_client):
    """Auto-mock client_factory.get_client in all tool modules.

    Patches get_client and get_local_user at the module level so that tool
    functions receive the mock client instead of reading the request
    context and the credentials directory.

    Yields the mock function (not the client) so tests can set side_effect
    for error scenarios like "not authorized".
    """
    get_client_fn = Mock(return_value=mock_sdk_client)
    get_local_user_fn = Mock(return_value=LocalUserDetail("test-session"))

    modules_to_patch = [
        "fitbit_mcp.activities",
        "fitbit_mcp.auth_tool",
        "fitbit_mcp.nutrition",
        "fitbit_mcp.health",
        "fitbit_mcp.time_series",
    ]

    patchers = []
    for module in modules_to_patch:
        for name, fn in (("get_client", get_client_fn), ("get_local_user", get_local_user_fn)):
            p = patch(f"{module}.{name}", fn)
            p.start()
            patchers.append(p)

    yield get_client_fn

    for p in patchers:
        p.stop()


def create_test_app(module):
    """Helper to create a FastMCP app with a specific module registered."""
    app = FastMCP(f"Test Fitbit {module.__name__}")
    app = module.register_tools(app)
    return app
