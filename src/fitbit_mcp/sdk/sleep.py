"""
Fitbit sleep SDK functions.
"""

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import CURRENT_AUTHORIZED_USER, FitbitUser, LocalUserDetail
from fitbit_mcp.sdk.models import Sleep, SleepLog, unwrap
from fitbit_mcp.sdk.types import APICollectionType
from fitbit_mcp.sdk.urls import construct_full_url, contextualize_url
from fitbit_mcp.utils import DateLike, TimeLike, build_params, format_date, format_time


def get_sleep(
    client: FitbitClient,
    local_user: LocalUserDetail,
    day: DateLike,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> Sleep:
    """
    Get a user's sleep log entries and summary for a day.

    GET /user/{id}/sleep/date/{date}
    """
    url = construct_full_url(client.api_base_url, client.api_version, fitbit_user, APICollectionType.SLEEP, day)
    response = client.call("GET", url, local_user, operation="retrieving sleep")
    return decode(response, Sleep.from_json, "retrieving sleep")


def log_sleep(
    client: FitbitClient,
    local_user: LocalUserDetail,
    day: DateLike,
    start_time: TimeLike,
    duration_millis: int,
) -> SleepLog:
    """
    Create a sleep log entry.

    POST /user/-/sleep, expects 201 Created

    Args:
        day: Date the sleep started
        start_time: Start time, HH:mm
        duration_millis: Duration in milliseconds
    """
    params = build_params(
        ("date", format_date(day)),
        ("startTime", format_time(start_time)),
        ("duration", duration_millis),
    )
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/sleep")
    response = client.call("POST", url, local_user, params, operation="logging sleep", expected_status=201)
    return decode(response, lambda body: SleepLog.from_json(unwrap(body, "sleep")), "logging sleep")


def delete_sleep_log(client: FitbitClient, local_user: LocalUserDetail, sleep_log_id: int) -> None:
    """
    DELETE /user/-/sleep/{sleep_log_id}
    """
    url = contextualize_url(client.api_base_url, client.api_version, f"/user/-/sleep/{sleep_log_id}")
    client.call("DELETE", url, local_user, operation="deleting sleep log entry")
