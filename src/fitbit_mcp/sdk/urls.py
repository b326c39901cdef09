"""
Fitbit REST URL construction.

Pure functions: given a base URL, API version, user and resource selector,
produce the exact URL the Fitbit API expects, e.g.
http://api.fitbit.com/1/user/228TQ4/activities/date/2010-02-25.json
"""

from typing import Optional, Union

from fitbit_mcp.sdk.credentials import FitbitUser
from fitbit_mcp.sdk.types import (
    APICollectionType,
    APIFormat,
    APIVersion,
    ApiCollectionProperty,
    INTRADAY_PERIOD,
    IntradayDetailLevel,
    TimePeriod,
    TimeSeriesResourceType,
    UNSPECIFIED_SUBSCRIPTION_ID,
)
from fitbit_mcp.utils import DateLike, format_date


def contextualize_url(
    base_url: str,
    version: APIVersion,
    path: str,
    fmt: APIFormat = APIFormat.JSON,
) -> str:
    """Prefix a resource path with base URL and version, suffix the format.

    contextualize_url("http://api.fitbit.com", BETA_1, "/user/-/devices")
    -> "http://api.fitbit.com/1/user/-/devices.json"
    """
    return f"{base_url}/{version.value}{path}.{fmt.value}"


def user_path(fitbit_user: FitbitUser, path: str) -> str:
    """Scope a path under /user/{id}."""
    return f"/user/{fitbit_user.id}{path}"


def construct_full_url(
    base_url: str,
    version: APIVersion,
    fitbit_user: FitbitUser,
    collection_type: APICollectionType,
    day: DateLike,
    fmt: APIFormat = APIFormat.JSON,
) -> str:
    """URL of a user's collection for one day.

    /user/{id}{collection}/date/{yyyy-MM-dd}
    """
    path = user_path(fitbit_user, f"{collection_type.url_path}/date/{format_date(day)}")
    return contextualize_url(base_url, version, path, fmt)


def construct_property_url(
    base_url: str,
    version: APIVersion,
    fitbit_user: FitbitUser,
    collection_type: APICollectionType,
    collection_property: ApiCollectionProperty,
    fmt: APIFormat = APIFormat.JSON,
) -> str:
    """URL of a named view (favorite, recent, frequent) of a user's collection."""
    path = user_path(fitbit_user, f"{collection_type.url_path}/{collection_property.value}")
    return contextualize_url(base_url, version, path, fmt)


def construct_time_series_url(
    base_url: str,
    version: APIVersion,
    fitbit_user: FitbitUser,
    resource_type: TimeSeriesResourceType,
    start_date: DateLike,
    period_or_end_date: Union[TimePeriod, DateLike],
    fmt: APIFormat = APIFormat.JSON,
) -> str:
    """URL of a time series over a named period or an explicit date range.

    /user/{id}{resource}/date/{start}/{period|end}
    """
    if isinstance(period_or_end_date, TimePeriod):
        range_end = period_or_end_date.short_form
    else:
        range_end = format_date(period_or_end_date)
    path = user_path(
        fitbit_user,
        f"{resource_type.resource_path}/date/{format_date(start_date)}/{range_end}",
    )
    return contextualize_url(base_url, version, path, fmt)


def construct_intraday_time_series_url(
    base_url: str,
    version: APIVersion,
    fitbit_user: FitbitUser,
    resource_type: TimeSeriesResourceType,
    day: DateLike,
    detail_level: IntradayDetailLevel = IntradayDetailLevel.ONE_MINUTE,
    fmt: APIFormat = APIFormat.JSON,
) -> str:
    """URL of a one-day intraday series.

    /user/{id}{resource}/date/{day}/1d/{detail_level}
    """
    path = user_path(
        fitbit_user,
        f"{resource_type.resource_path}/date/{format_date(day)}"
        f"/{INTRADAY_PERIOD.short_form}/{detail_level.value}",
    )
    return contextualize_url(base_url, version, path, fmt)


def construct_subscription_url(
    base_url: str,
    version: APIVersion,
    fitbit_user: FitbitUser,
    collection_type: Optional[APICollectionType] = None,
    subscription_id: Optional[str] = None,
    fmt: APIFormat = APIFormat.JSON,
) -> str:
    """URL of a subscription to all of a user's collections, or to one.

    /user/{id}[/{collection}]/apiSubscriptions/{subscription_id}
    """
    collection_segment = f"/{collection_type.collection_name}" if collection_type else ""
    if subscription_id is None:
        subscription_id = UNSPECIFIED_SUBSCRIPTION_ID
    path = user_path(fitbit_user, f"{collection_segment}/apiSubscriptions/{subscription_id}")
    return contextualize_url(base_url, version, path, fmt)


def construct_subscriptions_list_url(
    base_url: str,
    version: APIVersion,
    fitbit_user: FitbitUser,
    collection_type: Optional[APICollectionType] = None,
    fmt: APIFormat = APIFormat.JSON,
) -> str:
    """URL listing a user's subscriptions, optionally for one collection."""
    collection_segment = f"/{collection_type.collection_name}" if collection_type else ""
    path = user_path(fitbit_user, f"{collection_segment}/apiSubscriptions")
    return contextualize_url(base_url, version, path, fmt)
