"""
Time series tools for Fitbit MCP server.

Trends of a single resource (steps, weight, sleep minutes, ...) over time.
"""

import json
from datetime import date

from fastmcp import Context

from fitbit_mcp.client_factory import get_client, get_local_user, is_token_expired_error, handle_token_expired
from fitbit_mcp.sdk import time_series as sdk_time_series
from fitbit_mcp.sdk.credentials import CURRENT_AUTHORIZED_USER
from fitbit_mcp.sdk.exceptions import FitbitAPIError
from fitbit_mcp.sdk.types import IntradayDetailLevel, TimePeriod, TimeSeriesResourceType
from fitbit_mcp.utils import parse_date


def _resource_names():
    return [r.name.lower() for r in TimeSeriesResourceType]


def _resolve_resource(resource: str) -> TimeSeriesResourceType:
    return TimeSeriesResourceType[resource.upper()]


def register_tools(app):
    """Register time series tools with the MCP app."""

    @app.tool()
    async def get_time_series(
        resource: str,
        ctx: Context,
        end_date: str = None,
        period: str = "7d",
        start_date: str = None,
    ) -> str:
        """
        Get daily values of a resource over time.

        Either a period ending at end_date, or an explicit start_date..end_date range.

        Args:
            resource: Resource name, e.g. "steps", "calories_out", "weight",
                "minutes_asleep", "tracker_distance"
            end_date: Last day, YYYY-MM-DD (default: today)
            period: 1d, 7d, 30d, 1w, 1m, 3m, 6m, 1y or max (default: 7d);
                ignored when start_date is given
            start_date: First day, YYYY-MM-DD (optional)

        Returns:
            JSON with one value per day
        """
        try:
            resource_type = _resolve_resource(resource)
        except KeyError:
            return json.dumps({"error": f"Unknown resource {resource!r}", "valid": _resource_names()}, indent=2)

        end = parse_date(end_date) if end_date else date.today()
        if start_date:
            anchor, range_end = parse_date(start_date), end
        else:
            try:
                anchor, range_end = end, TimePeriod(period)
            except ValueError:
                return json.dumps({
                    "error": f"Unknown period {period!r}",
                    "valid": [p.value for p in TimePeriod],
                }, indent=2)

        try:
            client = get_client(ctx)
            data = sdk_time_series.get_time_series(
                client, get_local_user(ctx), CURRENT_AUTHORIZED_USER, resource_type, anchor, range_end
            )
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise

        return json.dumps({
            "resource": resource_type.name.lower(),
            "values": [{"date": d.date_time, "value": d.value} for d in data],
            "count": len(data),
        }, indent=2)

    @app.tool()
    async def get_intraday_time_series(
        resource: str,
        ctx: Context,
        date_str: str = None,
        detail_level: str = "15min",
    ) -> str:
        """
        Get minute-level values of a resource for one day.

        Requires Fitbit partner access for the consumer key.

        Args:
            resource: Resource name, e.g. "steps", "calories_out", "floors"
            date_str: Day in YYYY-MM-DD format (default: today)
            detail_level: "1min" or "15min" (default: 15min)

        Returns:
            JSON with the day total and each interval's value
        """
        try:
            resource_type = _resolve_resource(resource)
            level = IntradayDetailLevel(detail_level)
        except (KeyError, ValueError):
            return json.dumps({
                "error": f"Unknown resource {resource!r} or detail level {detail_level!r}",
                "valid_resources": _resource_names(),
                "valid_detail_levels": [d.value for d in IntradayDetailLevel],
            }, indent=2)

        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            intraday = sdk_time_series.get_intraday_time_series(
                client, get_local_user(ctx), CURRENT_AUTHORIZED_USER, resource_type, day, level
            )
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise

        dataset = intraday.intraday_dataset
        return json.dumps({
            "resource": resource_type.name.lower(),
            "date": intraday.summary.date_time,
            "total": intraday.summary.value,
            "interval": dataset.dataset_interval,
            "interval_type": dataset.dataset_type,
            "values": [{"time": p.date_time, "value": p.value} for p in dataset.dataset],
        }, indent=2)

    return app
