"""
Fitbit water log SDK functions.
"""

from typing import Optional

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import CURRENT_AUTHORIZED_USER, FitbitUser, LocalUserDetail
from fitbit_mcp.sdk.models import Water, WaterLog, unwrap
from fitbit_mcp.sdk.types import APICollectionType, VolumeUnits
from fitbit_mcp.sdk.urls import construct_full_url, contextualize_url
from fitbit_mcp.utils import DateLike, Params, build_params, format_date


def log_water(
    client: FitbitClient,
    local_user: LocalUserDetail,
    amount: float,
    day: DateLike,
    unit: Optional[VolumeUnits] = None,
) -> WaterLog:
    """
    Log water consumption.

    POST /user/-/foods/log/water

    Args:
        amount: Amount consumed
        day: Log entry date
        unit: Volume unit; omitted means the user's locale default
    """
    params = build_params(("amount", amount), ("date", format_date(day)), ("unit", unit))
    return log_water_with_params(client, local_user, params)


def log_water_with_params(client: FitbitClient, local_user: LocalUserDetail, params: Params) -> WaterLog:
    """
    POST /user/-/foods/log/water, expects 201 Created
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/foods/log/water")
    response = client.call("POST", url, local_user, params, operation="logging water", expected_status=201)
    return decode(response, lambda body: WaterLog.from_json(unwrap(body, "waterLog")), "logging water")


def get_logged_water(
    client: FitbitClient,
    local_user: LocalUserDetail,
    day: DateLike,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> Water:
    """
    GET /user/{id}/foods/log/water/date/{date}
    """
    url = construct_full_url(client.api_base_url, client.api_version, fitbit_user, APICollectionType.WATER, day)
    response = client.call("GET", url, local_user, operation="retrieving water")
    return decode(response, Water.from_json, "retrieving water")


def delete_water(client: FitbitClient, local_user: LocalUserDetail, water_log_id: str) -> None:
    """
    DELETE /user/-/foods/log/water/{water_log_id}
    """
    url = contextualize_url(client.api_base_url, client.api_version, f"/user/-/foods/log/water/{water_log_id}")
    client.call("DELETE", url, local_user, operation="deleting water")
