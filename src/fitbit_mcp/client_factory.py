"""
Client factory for Fitbit MCP server.

Provides session-based client management using FastMCP Context.
Each MCP connection is one local user, keyed by its mcp-session-id.

Credential Persistence:
- Access tokens are stored by a FileCredentialsCache, one file per session
  in {FITBIT_CREDENTIALS_DIR}/{session_id}.json
- Request tokens of an unfinished OAuth handshake are kept next to them in
  {FITBIT_CREDENTIALS_DIR}/pending/{session_id}.json
"""

import json
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from fastmcp import Context

from fitbit_mcp.sdk.client import DEFAULT_TIMEOUT, FitbitClient
from fitbit_mcp.sdk.credentials import (
    FileCredentialsCache,
    LocalUserDetail,
    TempCredentials,
    credentials_file_name,
)
from fitbit_mcp.sdk.exceptions import CredentialsNotFoundError, FitbitAPIError
from fitbit_mcp.sdk.types import DEFAULT_API_HOST, DEFAULT_WEB_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_USER_ID = "default"
CREDENTIALS_DIR = Path(os.environ.get("FITBIT_CREDENTIALS_DIR", "/data/fitbit_credentials"))
PENDING_DIR = CREDENTIALS_DIR / "pending"

_credentials_cache = FileCredentialsCache(CREDENTIALS_DIR)


def create_client() -> FitbitClient:
    """
    Create a Fitbit client configured from the environment.

    Environment variables:
    - FITBIT_CONSUMER_KEY / FITBIT_CONSUMER_SECRET: OAuth consumer pair
    - FITBIT_API_HOST: API host (default: api.fitbit.com)
    - FITBIT_WEB_URL: Web base URL for user authorization (default: http://www.fitbit.com)
    - FITBIT_LOCALE: Unit system locale, e.g. en_US (default: metric)
    - FITBIT_TIMEOUT: Request timeout in seconds (default: 30)

    Returns:
        FitbitClient backed by the shared file credentials cache
    """
    client = FitbitClient(
        consumer_key=os.environ.get("FITBIT_CONSUMER_KEY"),
        consumer_secret=os.environ.get("FITBIT_CONSUMER_SECRET"),
        api_host=os.environ.get("FITBIT_API_HOST", DEFAULT_API_HOST),
        web_base_url=os.environ.get("FITBIT_WEB_URL", DEFAULT_WEB_BASE_URL),
        credentials_cache=_credentials_cache,
        timeout=float(os.environ.get("FITBIT_TIMEOUT", DEFAULT_TIMEOUT)),
    )
    client.set_locale(os.environ.get("FITBIT_LOCALE") or None)
    return client


def get_local_user(ctx: Context) -> LocalUserDetail:
    """
    Map the MCP session to a local user.

    Falls back to a single shared user when no session id is available
    (stdio transport, or outside a request context).
    """
    try:
        session_id = ctx.session_id
    except RuntimeError:
        session_id = None
    return LocalUserDetail(session_id or DEFAULT_LOCAL_USER_ID)


def get_client(ctx: Context) -> FitbitClient:
    """
    Get a Fitbit client for the session's local user.

    Usage in tools:
        @app.tool()
        async def get_devices(ctx: Context) -> str:
            client = get_client(ctx)
            devices = sdk_devices.get_devices(client, get_local_user(ctx))

    Args:
        ctx: FastMCP Context (automatically injected by framework)

    Returns:
        FitbitClient whose cache holds credentials for this session

    Raises:
        ValueError: If the session has not completed OAuth authorization
    """
    client = create_client()
    if client.credentials_cache.get_resource_credentials(get_local_user(ctx)) is None:
        raise ValueError("No Fitbit session. Call fitbit_begin_authorization() first.")
    return client


def _pending_file_path(local_user: LocalUserDetail) -> Path:
    return PENDING_DIR / credentials_file_name(local_user)


def save_temp_credentials(local_user: LocalUserDetail, temp_credentials: TempCredentials) -> None:
    """Remember the request token until the user completes authorization."""
    PENDING_DIR.mkdir(parents=True, exist_ok=True)
    with open(_pending_file_path(local_user), "w") as f:
        json.dump(asdict(temp_credentials), f)


def load_temp_credentials(local_user: LocalUserDetail) -> Optional[TempCredentials]:
    """Return the pending request token, or None if no handshake was started."""
    path = _pending_file_path(local_user)
    if not path.exists():
        return None
    try:
        with open(path, "r") as f:
            return TempCredentials(**json.load(f))
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Ignoring unreadable pending token file {path}: {e}")
        return None


def clear_temp_credentials(local_user: LocalUserDetail) -> None:
    path = _pending_file_path(local_user)
    if path.exists():
        path.unlink()


def clear_session_credentials(ctx: Context) -> None:
    """Forget the session's access token and any pending handshake."""
    local_user = get_local_user(ctx)
    _credentials_cache.expire_resource_credentials(local_user)
    clear_temp_credentials(local_user)


def is_token_expired_error(error: Exception) -> bool:
    """
    Check if an error means the session must authorize again.

    Fitbit answers 401 when the access token was revoked by the user or
    is otherwise invalid; missing local credentials mean the same thing.
    """
    if isinstance(error, CredentialsNotFoundError):
        return True
    return isinstance(error, FitbitAPIError) and error.status_code == 401


def handle_token_expired(ctx: Context) -> str:
    """
    Handle a rejected Fitbit token by clearing the session.

    Args:
        ctx: FastMCP Context

    Returns:
        Error message to return to the user
    """
    try:
        clear_session_credentials(ctx)
    except OSError as e:
        logger.warning(f"Failed to clear session credentials: {e}")

    return json.dumps({
        "error": "Your Fitbit session has expired. Please authorize again.",
        "error_code": "SESSION_EXPIRED",
        "note": "Access is revoked when you remove this application from your Fitbit account settings.",
    }, indent=2)
