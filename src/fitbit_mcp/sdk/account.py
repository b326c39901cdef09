"""
Fitbit account registration and rate limit SDK functions.
"""

from typing import Optional

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import LocalUserDetail
from fitbit_mcp.sdk.models import Account, ApiRateLimitStatus, unwrap
from fitbit_mcp.sdk.types import APIVersion, ApiQuotaType
from fitbit_mcp.sdk.urls import contextualize_url
from fitbit_mcp.utils import build_params


def register_account(
    client: FitbitClient,
    email: str,
    password: str,
    timezone: str,
    email_subscribe: bool = False,
) -> Account:
    """
    Register a new Fitbit account. Partner-only, consumer-signed.

    POST https://{api_host}/1/account/register
    """
    params = build_params(
        ("email", email),
        ("password", password),
        ("timezone", timezone),
        ("emailSubscribe", email_subscribe),
    )
    url = contextualize_url(client.api_base_secured_url, client.api_version, "/account/register")
    response = client.call("POST", url, None, params, operation="registering account")
    return decode(response, lambda body: Account.from_json(unwrap(body, "account")), "registering account")


def get_rate_limit_status(
    client: FitbitClient,
    quota_type: ApiQuotaType,
    local_user: Optional[LocalUserDetail] = None,
) -> ApiRateLimitStatus:
    """
    Get remaining API quota.

    GET /account/ipRateLimitStatus or /account/clientAndUserRateLimitStatus
    """
    # Rate limit endpoints only exist on version 1
    url = contextualize_url(
        client.api_base_url, APIVersion.BETA_1, f"/account/{quota_type.value}RateLimitStatus"
    )
    response = client.call("GET", url, local_user, operation="retrieving rate limit status")
    return decode(
        response,
        lambda body: ApiRateLimitStatus.from_json(unwrap(body, "rateLimitStatus")),
        "retrieving rate limit status",
    )


def get_ip_rate_limit_status(client: FitbitClient) -> ApiRateLimitStatus:
    """Quota of the calling IP address. Consumer-only call."""
    return get_rate_limit_status(client, ApiQuotaType.IP_ADDRESS)


def get_client_and_user_rate_limit_status(client: FitbitClient, local_user: LocalUserDetail) -> ApiRateLimitStatus:
    """Quota of this application acting for one user."""
    return get_rate_limit_status(client, ApiQuotaType.CLIENT_AND_OWNER, local_user)
