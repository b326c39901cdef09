"""
Authentication tools for Fitbit MCP server.

Provides the OAuth 1.0a authorization flow, session management, and
common identity tools.
"""

import json
import logging

from fastmcp import Context

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

from fitbit_mcp.sdk import user as sdk_user
from fitbit_mcp.sdk.exceptions import FitbitAPIError
from fitbit_mcp.client_factory import (
    create_client,
    get_client,
    get_local_user,
    save_temp_credentials,
    load_temp_credentials,
    clear_temp_credentials,
    clear_session_credentials,
    is_token_expired_error,
    handle_token_expired,
)


def register_tools(app):
    """Register authentication and identity tools with the MCP app."""

    @app.tool()
    async def fitbit_begin_authorization(ctx: Context, callback_url: str = None) -> dict:
        """
        Start authorizing this session to access a Fitbit account.

        Obtains a request token and returns the Fitbit page the user must
        open to grant access. Afterwards call fitbit_complete_authorization
        with the verifier Fitbit shows (or passes to the callback URL).

        Args:
            callback_url: URL Fitbit redirects to after approval (optional,
                without it Fitbit displays a verifier PIN)

        Returns:
            Authorization URL or error message
        """
        try:
            client = create_client()
            temp_credentials = client.get_oauth_request_token(callback_url)
        except FitbitAPIError as e:
            logger.error(f"Error starting Fitbit authorization: {e}")
            return {"success": False, "error": str(e)}

        save_temp_credentials(get_local_user(ctx), temp_credentials)
        return {
            "success": True,
            "authorization_url": temp_credentials.authorization_url,
            "message": "Open the authorization URL, approve access, then call fitbit_complete_authorization.",
        }

    @app.tool()
    async def fitbit_complete_authorization(verifier: str, ctx: Context) -> dict:
        """
        Finish authorization with the verifier Fitbit returned.

        Args:
            verifier: The oauth_verifier value (or PIN) from Fitbit

        Returns:
            Authorization result with the Fitbit user id or error message
        """
        local_user = get_local_user(ctx)
        temp_credentials = load_temp_credentials(local_user)
        if temp_credentials is None:
            return {
                "success": False,
                "error": "No authorization in progress. Call fitbit_begin_authorization() first.",
            }

        try:
            client = create_client()
            token = client.get_oauth_access_token(temp_credentials, verifier)
        except FitbitAPIError as e:
            logger.error(f"Error completing Fitbit authorization: {e}")
            return {"success": False, "error": str(e)}

        client.set_oauth_access_token(local_user, token.token, token.token_secret, token.encoded_user_id)
        clear_temp_credentials(local_user)
        return {"success": True, "encoded_user_id": token.encoded_user_id, "message": "Authorized"}

    @app.tool()
    async def set_fitbit_session(
        access_token: str,
        access_token_secret: str,
        ctx: Context,
        encoded_user_id: str = None,
    ) -> dict:
        """
        Restore a Fitbit session from a stored access token.

        Use this to reuse a previous authorization without repeating the
        OAuth flow.

        Args:
            access_token: OAuth access token
            access_token_secret: OAuth access token secret
            encoded_user_id: Fitbit encoded user id the token belongs to (optional)

        Returns:
            Session restoration result
        """
        try:
            client = create_client()
            client.set_oauth_access_token(get_local_user(ctx), access_token, access_token_secret, encoded_user_id)
            return {"success": True, "message": "Session restored"}
        except (OSError, ValueError) as e:
            logger.error(f"Error restoring Fitbit session: {e}")
            return {"success": False, "error": str(e)}

    @app.tool()
    async def fitbit_logout(ctx: Context) -> dict:
        """
        Logout from the current Fitbit session.

        Forgets the stored access token. Authorization is needed again.

        Returns:
            Logout confirmation
        """
        clear_session_credentials(ctx)
        return {"success": True, "message": "Logged out"}

    @app.tool()
    async def get_user_profile(ctx: Context) -> str:
        """
        Get the authorized user's Fitbit profile.

        Returns:
            JSON with display name, encoded id and body stats
        """
        try:
            client = get_client(ctx)
            user = sdk_user.get_user_info(client, get_local_user(ctx))
            return json.dumps({
                "name": user.display_name,
                "full_name": user.full_name,
                "user_id": user.encoded_id,
                "gender": user.gender,
                "date_of_birth": user.date_of_birth,
                "height": user.height,
                "weight": user.weight,
                "timezone": user.timezone,
                "member_since": user.member_since,
            }, indent=2)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise

    @app.tool()
    async def get_available_features(ctx: Context) -> str:
        """
        Get list of available Fitbit data features.

        Returns a summary of what data types and tools are available
        through this MCP server.

        Returns:
            JSON with available feature categories
        """
        features = {
            "platform": "Fitbit",
            "auth": [
                "fitbit_begin_authorization - Get the Fitbit page granting access",
                "fitbit_complete_authorization - Finish authorization with the verifier",
                "set_fitbit_session - Restore a saved access token",
                "fitbit_logout - Clear session",
            ],
            "user": [
                "get_user_profile - Display name, body stats, timezone",
                "get_available_features - This feature list",
            ],
            "activities": [
                "get_daily_activities - Steps, calories, active minutes and logged activities for a day",
                "get_activity_details - Activity catalog entry with intensity levels",
                "get_recent_activities - Recently logged activities",
                "log_activity - Record an activity",
                "delete_activity_log - Remove an activity log entry",
            ],
            "nutrition": [
                "get_food_log - Foods eaten on a day with nutrition summary",
                "search_foods - Search the Fitbit foods database",
                "log_food - Record a food",
                "get_water_log - Water consumed on a day",
                "log_water - Record water",
            ],
            "health": [
                "get_sleep_log - Sleep records and summary for a day",
                "log_sleep - Record a sleep period",
                "get_body_measurements - Weight, BMI, body fat",
                "log_weight - Record weight",
                "get_devices - Paired trackers and scales, battery and last sync",
            ],
            "time_series": [
                "get_time_series - Daily values of a resource over a period or date range",
                "get_intraday_time_series - Minute-level values for one day",
            ],
            "notes": [
                "Units follow the FITBIT_LOCALE setting (metric when unset)",
                "Intraday series require Fitbit partner access",
            ],
        }
        return json.dumps(features, indent=2)

    return app
