"""
Health tools for Fitbit MCP server.

Sleep, body measurements, and paired devices.
"""

import json
from dataclasses import asdict
from datetime import date

from fastmcp import Context

from fitbit_mcp.client_factory import get_client, get_local_user, is_token_expired_error, handle_token_expired
from fitbit_mcp.sdk import body as sdk_body
from fitbit_mcp.sdk import devices as sdk_devices
from fitbit_mcp.sdk import sleep as sdk_sleep
from fitbit_mcp.sdk.exceptions import FitbitAPIError
from fitbit_mcp.utils import format_duration, format_minutes, parse_date


def register_tools(app):
    """Register sleep, body and device tools with the MCP app."""

    @app.tool()
    async def get_sleep_log(ctx: Context, date_str: str = None) -> str:
        """
        Get sleep records for a night.

        Args:
            date_str: Day the sleep started, YYYY-MM-DD (default: today)

        Returns:
            JSON with nightly totals and each sleep record
        """
        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            sleep = sdk_sleep.get_sleep(client, get_local_user(ctx), day)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise

        summary = sleep.summary
        return json.dumps({
            "date": day.isoformat(),
            "summary": {
                "total_asleep": format_minutes(summary.total_minutes_asleep),
                "total_minutes_asleep": summary.total_minutes_asleep,
                "total_time_in_bed": summary.total_time_in_bed,
                "records": summary.total_sleep_records,
            },
            "sleep": [
                {
                    "log_id": s.log_id,
                    "start_time": s.start_time,
                    "is_main_sleep": s.is_main_sleep,
                    "duration": format_duration(s.duration),
                    "minutes_asleep": s.minutes_asleep,
                    "minutes_awake": s.minutes_awake,
                    "minutes_to_fall_asleep": s.minutes_to_fall_asleep,
                    "awakenings": s.awakenings_count,
                    "time_in_bed": s.time_in_bed,
                }
                for s in sleep.sleep
            ],
        }, indent=2)

    @app.tool()
    async def log_sleep(start_time: str, duration_minutes: int, ctx: Context, date_str: str = None) -> str:
        """
        Record a sleep period.

        Args:
            start_time: Time the sleep started, HH:MM
            duration_minutes: Length of the sleep in minutes
            date_str: Day the sleep started, YYYY-MM-DD (default: today)

        Returns:
            JSON with the created sleep record
        """
        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            log = sdk_sleep.log_sleep(client, get_local_user(ctx), day, start_time, duration_minutes * 60 * 1000)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            return json.dumps({"success": False, "error": str(e)}, indent=2)
        return json.dumps({"success": True, "sleep": asdict(log)}, indent=2)

    @app.tool()
    async def get_body_measurements(ctx: Context, date_str: str = None) -> str:
        """
        Get weight, BMI, body fat and circumferences for a day.

        Units follow the server's unit system (FITBIT_LOCALE).

        Args:
            date_str: Day in YYYY-MM-DD format (default: today)

        Returns:
            JSON with body measurements
        """
        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            body = sdk_body.get_body(client, get_local_user(ctx), day)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise

        result = {"date": day.isoformat()}
        result.update(asdict(body))
        return json.dumps(result, indent=2)

    @app.tool()
    async def log_weight(weight: float, ctx: Context, date_str: str = None) -> str:
        """
        Record body weight.

        Args:
            weight: Weight, in the server's unit system
            date_str: Day in YYYY-MM-DD format (default: today)

        Returns:
            JSON confirmation
        """
        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            sdk_body.log_weight(client, get_local_user(ctx), weight, day)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            return json.dumps({"success": False, "error": str(e)}, indent=2)
        return json.dumps({"success": True, "weight": weight, "date": day.isoformat()}, indent=2)

    @app.tool()
    async def get_devices(ctx: Context) -> str:
        """
        List the trackers and scales paired with the account.

        Returns:
            JSON list of devices with battery level and last sync time
        """
        try:
            client = get_client(ctx)
            devices = sdk_devices.get_devices(client, get_local_user(ctx))
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise
        return json.dumps({"devices": [asdict(d) for d in devices], "count": len(devices)}, indent=2)

    return app
