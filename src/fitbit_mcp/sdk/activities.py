"""
Fitbit activities SDK functions.

Daily activity summaries, the activity catalog, and activity log entries.
"""

from typing import List, Optional

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import CURRENT_AUTHORIZED_USER, FitbitUser, LocalUserDetail
from fitbit_mcp.sdk.models import (
    Activities,
    Activity,
    ActivityLog,
    ActivityReference,
    LoggedActivityReference,
    unwrap,
)
from fitbit_mcp.sdk.types import APICollectionType, ApiCollectionProperty
from fitbit_mcp.sdk.urls import construct_full_url, construct_property_url, contextualize_url
from fitbit_mcp.utils import DateLike, Params, TimeLike, build_params, format_date, format_time


def get_activities(
    client: FitbitClient,
    local_user: LocalUserDetail,
    day: DateLike,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> Activities:
    """
    Get a summary and list of a user's activities for a day.

    GET /user/{id}/activities/date/{date}

    Returns:
        Activities with log entries, daily summary and goals
    """
    url = construct_full_url(
        client.api_base_url, client.api_version, fitbit_user, APICollectionType.ACTIVITIES, day
    )
    response = client.call("GET", url, local_user, operation="retrieving activities")
    return decode(response, Activities.from_json, "retrieving activities")


def get_favorite_activities(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> List[ActivityReference]:
    """
    GET /user/{id}/activities/favorite
    """
    url = construct_property_url(
        client.api_base_url, client.api_version, fitbit_user,
        APICollectionType.ACTIVITIES, ApiCollectionProperty.FAVORITE,
    )
    response = client.call("GET", url, local_user, operation="retrieving favorite activities")
    return decode(response, ActivityReference.from_json_list, "retrieving favorite activities")


def _get_logged_activities(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser,
    collection_property: ApiCollectionProperty,
) -> List[LoggedActivityReference]:
    url = construct_property_url(
        client.api_base_url, client.api_version, fitbit_user,
        APICollectionType.ACTIVITIES, collection_property,
    )
    operation = f"retrieving {collection_property.value} activities"
    response = client.call("GET", url, local_user, operation=operation)
    return decode(response, LoggedActivityReference.from_json_list, operation)


def get_recent_activities(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> List[LoggedActivityReference]:
    """
    GET /user/{id}/activities/recent
    """
    return _get_logged_activities(client, local_user, fitbit_user, ApiCollectionProperty.RECENT)


def get_frequent_activities(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> List[LoggedActivityReference]:
    """
    GET /user/{id}/activities/frequent
    """
    return _get_logged_activities(client, local_user, fitbit_user, ApiCollectionProperty.FREQUENT)


def log_activity(
    client: FitbitClient,
    local_user: LocalUserDetail,
    activity_id: int,
    start_time: TimeLike,
    duration_millis: int,
    day: DateLike,
    distance: Optional[float] = None,
    steps: Optional[int] = None,
    manual_calories: Optional[int] = None,
    distance_unit: Optional[str] = None,
) -> ActivityLog:
    """
    Create a log entry for an activity.

    POST /user/-/activities

    Args:
        activity_id: Activity (or activity level) id from the catalog
        start_time: Start time, HH:mm
        duration_millis: Duration in milliseconds
        day: Log entry date
        distance: Distance, for activities that have one
        steps: Step count
        manual_calories: Calories to record instead of the estimate
        distance_unit: Unit of distance, e.g. "Mile" (default follows locale)

    Returns:
        The created ActivityLog
    """
    params = build_params(
        ("activityId", activity_id),
        ("steps", steps),
        ("durationMillis", duration_millis),
        ("distance", distance),
        ("distanceUnit", distance_unit),
        ("manualCalories", manual_calories),
        ("date", format_date(day)),
        ("startTime", format_time(start_time)),
    )
    return log_activity_with_params(client, local_user, params)


def log_activity_with_params(
    client: FitbitClient, local_user: LocalUserDetail, params: Params
) -> ActivityLog:
    """
    Create an activity log entry from raw POST parameters.

    POST /user/-/activities, expects 201 Created
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/activities")
    response = client.call(
        "POST", url, local_user, params, operation="creating activity log entry", expected_status=201
    )
    return decode(
        response,
        lambda body: ActivityLog.from_json(unwrap(body, "activityLog")),
        "creating activity log entry",
    )


def delete_activity_log(client: FitbitClient, local_user: LocalUserDetail, activity_log_id: str) -> None:
    """
    DELETE /user/-/activities/{activity_log_id}
    """
    url = contextualize_url(client.api_base_url, client.api_version, f"/user/-/activities/{activity_log_id}")
    client.call("DELETE", url, local_user, operation="deleting activity log entry")


def get_activity(client: FitbitClient, local_user: Optional[LocalUserDetail], activity_id: str) -> Activity:
    """
    Get an entry of the activity catalog, with its levels if it has any.

    GET /activities/{activity_id}
    """
    url = contextualize_url(client.api_base_url, client.api_version, f"/activities/{activity_id}")
    response = client.call("GET", url, local_user, operation="retrieving activity")
    return decode(response, lambda body: Activity.from_json(unwrap(body, "activity")), "retrieving activity")


def add_favorite_activity(client: FitbitClient, local_user: LocalUserDetail, activity_id: str) -> None:
    """
    POST /user/-/activities/log/favorite/{activity_id}
    """
    url = contextualize_url(
        client.api_base_url, client.api_version, f"/user/-/activities/log/favorite/{activity_id}"
    )
    client.call("POST", url, local_user, operation="adding favorite activity")


def delete_favorite_activity(client: FitbitClient, local_user: LocalUserDetail, activity_id: str) -> None:
    """
    DELETE /user/-/activities/log/favorite/{activity_id}
    """
    url = contextualize_url(
        client.api_base_url, client.api_version, f"/user/-/activities/log/favorite/{activity_id}"
    )
    client.call("DELETE", url, local_user, operation="deleting favorite activity")
