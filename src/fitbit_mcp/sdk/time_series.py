"""
Fitbit time series SDK functions.

A series covers either a named period ending at a date, or an explicit
date range. Intraday series cover one day at minute granularity.
"""

from typing import List, Optional, Union

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import FitbitUser, LocalUserDetail
from fitbit_mcp.sdk.exceptions import SchemaMismatchError
from fitbit_mcp.sdk.models import Data, IntradayDataset, IntradaySummary, unwrap
from fitbit_mcp.sdk.types import IntradayDetailLevel, TimePeriod, TimeSeriesResourceType
from fitbit_mcp.sdk.urls import construct_intraday_time_series_url, construct_time_series_url
from fitbit_mcp.utils import DateLike


def get_time_series(
    client: FitbitClient,
    local_user: Optional[LocalUserDetail],
    fitbit_user: FitbitUser,
    resource_type: TimeSeriesResourceType,
    start_date: DateLike,
    period_or_end_date: Union[TimePeriod, DateLike],
) -> List[Data]:
    """
    Get a resource's daily values over a period or date range.

    GET /user/{id}{resource}/date/{start}/{period|end}

    Args:
        local_user: Acting user, or None to read public data consumer-only
        resource_type: e.g. TimeSeriesResourceType.STEPS
        start_date: Date the range is anchored on
        period_or_end_date: TimePeriod (e.g. ONE_MONTH) or the range end date

    Returns:
        One Data point per day
    """
    url = construct_time_series_url(
        client.api_base_url, client.api_version, fitbit_user, resource_type, start_date, period_or_end_date
    )
    response = client.call("GET", url, local_user, operation="retrieving time series")
    return decode(
        response,
        lambda body: Data.from_json_list(unwrap(body, resource_type.response_key)),
        "retrieving time series",
    )


def _decode_intraday(resource_type: TimeSeriesResourceType):
    def decoder(body) -> IntradaySummary:
        days = Data.from_json_list(unwrap(body, resource_type.response_key))
        if not days:
            raise SchemaMismatchError(resource_type.response_key, "empty day summary")
        dataset = IntradayDataset.from_json(unwrap(body, resource_type.intraday_response_key))
        return IntradaySummary(summary=days[0], intraday_dataset=dataset)
    return decoder


def get_intraday_time_series(
    client: FitbitClient,
    local_user: Optional[LocalUserDetail],
    fitbit_user: FitbitUser,
    resource_type: TimeSeriesResourceType,
    day: DateLike,
    detail_level: IntradayDetailLevel = IntradayDetailLevel.ONE_MINUTE,
) -> IntradaySummary:
    """
    Get a resource's intraday values for one day.

    GET /user/{id}{resource}/date/{day}/1d/{1min|15min}

    Returns:
        IntradaySummary with the day total and the intraday dataset
    """
    url = construct_intraday_time_series_url(
        client.api_base_url, client.api_version, fitbit_user, resource_type, day, detail_level
    )
    response = client.call("GET", url, local_user, operation="retrieving intraday time series")
    return decode(response, _decode_intraday(resource_type), "retrieving intraday time series")
