"""
Activity tools for Fitbit MCP server.

Provides tools for daily activity summaries and activity log entries.
"""

import json
from dataclasses import asdict
from datetime import date

from fastmcp import Context

from fitbit_mcp.client_factory import get_client, get_local_user, is_token_expired_error, handle_token_expired
from fitbit_mcp.sdk import activities as sdk_activities
from fitbit_mcp.sdk.exceptions import FitbitAPIError
from fitbit_mcp.utils import format_duration, parse_date


def register_tools(app):
    """Register activity tools with the MCP app."""

    @app.tool()
    async def get_daily_activities(ctx: Context, date_str: str = None) -> str:
        """
        Get a day's activity summary and logged activities.

        Args:
            date_str: Day in YYYY-MM-DD format (default: today)

        Returns:
            JSON with summary (steps, calories, active minutes, distances),
            goals and the list of logged activities
        """
        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            activities = sdk_activities.get_activities(client, get_local_user(ctx), day)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise

        summary = activities.summary
        result = {
            "date": day.isoformat(),
            "summary": {
                "steps": summary.steps,
                "calories_out": summary.calories_out,
                "activity_calories": summary.activity_calories,
                "floors": summary.floors,
                "elevation": summary.elevation,
                "active_minutes": {
                    "sedentary": summary.sedentary_minutes,
                    "lightly_active": summary.lightly_active_minutes,
                    "fairly_active": summary.fairly_active_minutes,
                    "very_active": summary.very_active_minutes,
                },
                "distances": {d.activity: d.distance for d in summary.distances},
            },
            "goals": asdict(activities.goals) if activities.goals else None,
            "activities": [
                {
                    "log_id": a.log_id,
                    "name": a.name,
                    "start_time": a.start_time,
                    "duration": format_duration(a.duration),
                    "calories": a.calories,
                    "distance": a.distance,
                    "steps": a.steps,
                }
                for a in activities.activities
            ],
        }
        return json.dumps(result, indent=2)

    @app.tool()
    async def get_activity_details(activity_id: str, ctx: Context) -> str:
        """
        Get an entry of the Fitbit activity catalog.

        Args:
            activity_id: Activity id (e.g. "90009" for running)

        Returns:
            JSON with name, METs and intensity levels
        """
        try:
            client = get_client(ctx)
            activity = sdk_activities.get_activity(client, get_local_user(ctx), activity_id)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise
        return json.dumps(asdict(activity), indent=2)

    @app.tool()
    async def get_recent_activities(ctx: Context) -> str:
        """
        Get the activities the user logged recently.

        Useful to find activity ids for log_activity.

        Returns:
            JSON list of recent activities with typical duration and calories
        """
        try:
            client = get_client(ctx)
            recent = sdk_activities.get_recent_activities(client, get_local_user(ctx))
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise
        return json.dumps({
            "activities": [asdict(a) for a in recent],
            "count": len(recent),
        }, indent=2)

    @app.tool()
    async def log_activity(
        activity_id: int,
        start_time: str,
        duration_minutes: int,
        ctx: Context,
        date_str: str = None,
        distance: float = None,
        steps: int = None,
        calories: int = None,
    ) -> str:
        """
        Record an activity.

        Args:
            activity_id: Activity id from the catalog or get_recent_activities
            start_time: Start time in HH:MM format
            duration_minutes: Duration in minutes
            date_str: Day in YYYY-MM-DD format (default: today)
            distance: Distance, in the user's units (optional)
            steps: Step count (optional)
            calories: Calories to record instead of Fitbit's estimate (optional)

        Returns:
            JSON with the created log entry
        """
        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            log = sdk_activities.log_activity(
                client,
                get_local_user(ctx),
                activity_id,
                start_time,
                duration_minutes * 60 * 1000,
                day,
                distance=distance,
                steps=steps,
                manual_calories=calories,
            )
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            return json.dumps({"success": False, "error": str(e)}, indent=2)
        return json.dumps({"success": True, "activity_log": asdict(log)}, indent=2)

    @app.tool()
    async def delete_activity_log(activity_log_id: str, ctx: Context) -> str:
        """
        Remove an activity log entry.

        Args:
            activity_log_id: log_id from get_daily_activities

        Returns:
            JSON confirmation
        """
        try:
            client = get_client(ctx)
            sdk_activities.delete_activity_log(client, get_local_user(ctx), activity_log_id)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            return json.dumps({"success": False, "error": str(e)}, indent=2)
        return json.dumps({"success": True, "message": f"Deleted activity log {activity_log_id}"}, indent=2)

    return app
