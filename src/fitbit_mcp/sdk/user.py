"""
Fitbit user profile and friends SDK functions.
"""

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import CURRENT_AUTHORIZED_USER, FitbitUser, LocalUserDetail
from fitbit_mcp.sdk.models import UserInfo, unwrap
from fitbit_mcp.sdk.urls import contextualize_url, user_path
from fitbit_mcp.utils import Params, build_params


def _decode_user(body) -> UserInfo:
    return UserInfo.from_json(unwrap(body, "user"))


def get_user_info(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> UserInfo:
    """
    Get a user's profile.

    GET /user/{id}/profile
    """
    url = contextualize_url(client.api_base_url, client.api_version, user_path(fitbit_user, "/profile"))
    response = client.call("GET", url, local_user, operation="retrieving user info")
    return decode(response, _decode_user, "retrieving user info")


def update_user_info(client: FitbitClient, local_user: LocalUserDetail, params: Params) -> UserInfo:
    """
    Update profile fields of the authorized user.

    POST /user/-/profile

    Args:
        params: Profile fields to change, e.g. [("nickname", "Joe"), ("city", "Boston")]

    Returns:
        The updated UserInfo
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/profile")
    response = client.call("POST", url, local_user, params, operation="updating user info")
    return decode(response, _decode_user, "updating user info")


def invite_by_user_id(client: FitbitClient, local_user: LocalUserDetail, invited_user_id: str) -> None:
    """
    POST /user/-/friends/invitations
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/friends/invitations")
    client.call(
        "POST", url, local_user, build_params(("invitedUserId", invited_user_id)),
        operation="inviting user",
    )


def invite_by_email(client: FitbitClient, local_user: LocalUserDetail, invited_user_email: str) -> None:
    """
    POST /user/-/friends/invitations
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/friends/invitations")
    client.call(
        "POST", url, local_user, build_params(("invitedUserEmail", invited_user_email)),
        operation="inviting user by email",
    )


def _answer_invitation(
    client: FitbitClient, local_user: LocalUserDetail, fitbit_user: FitbitUser, accept: bool
) -> None:
    url = contextualize_url(
        client.api_base_url, client.api_version, f"/user/-/friends/invitations/{fitbit_user.id}"
    )
    operation = "accepting invitation" if accept else "rejecting invitation"
    client.call("POST", url, local_user, build_params(("accept", accept)), operation=operation)


def accept_invitation_from_user(client: FitbitClient, local_user: LocalUserDetail, fitbit_user: FitbitUser) -> None:
    """
    POST /user/-/friends/invitations/{id} with accept=true
    """
    _answer_invitation(client, local_user, fitbit_user, True)


def reject_invitation_from_user(client: FitbitClient, local_user: LocalUserDetail, fitbit_user: FitbitUser) -> None:
    """
    POST /user/-/friends/invitations/{id} with accept=false
    """
    _answer_invitation(client, local_user, fitbit_user, False)
