"""
Fitbit body measurements SDK functions.

Units follow the client locale (see FitbitClient.set_locale).
"""

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import CURRENT_AUTHORIZED_USER, FitbitUser, LocalUserDetail
from fitbit_mcp.sdk.models import Body, unwrap
from fitbit_mcp.sdk.types import APICollectionType
from fitbit_mcp.sdk.urls import construct_full_url, contextualize_url
from fitbit_mcp.utils import DateLike, Params, build_params, format_date


def get_body(
    client: FitbitClient,
    local_user: LocalUserDetail,
    day: DateLike,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> Body:
    """
    Get a user's body measurements for a day.

    GET /user/{id}/body/date/{date}

    Returns:
        Body with weight, BMI, fat and optional circumferences
    """
    url = construct_full_url(client.api_base_url, client.api_version, fitbit_user, APICollectionType.BODY, day)
    response = client.call("GET", url, local_user, operation="retrieving body measurements")
    return decode(response, lambda body: Body.from_json(unwrap(body, "body")), "retrieving body measurements")


def get_weight(
    client: FitbitClient,
    local_user: LocalUserDetail,
    day: DateLike,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> float:
    """Weight on a day, from get_body()."""
    return get_body(client, local_user, day, fitbit_user).weight


def log_weight(client: FitbitClient, local_user: LocalUserDetail, weight: float, day: DateLike) -> None:
    """
    Log body weight for a day.

    POST /user/-/body/weight
    """
    params = build_params(("weight", weight), ("date", format_date(day)))
    log_weight_with_params(client, local_user, params)


def log_weight_with_params(client: FitbitClient, local_user: LocalUserDetail, params: Params) -> None:
    """
    POST /user/-/body/weight. Any 2xx succeeds; the body is not read.
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/body/weight")
    client.call("POST", url, local_user, params, operation="logging weight")
