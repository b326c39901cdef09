"""
Nutrition tools for Fitbit MCP server.

Food log, food search, and water log.
"""

import json
from dataclasses import asdict
from datetime import date

from fastmcp import Context

from fitbit_mcp.client_factory import get_client, get_local_user, is_token_expired_error, handle_token_expired
from fitbit_mcp.sdk import foods as sdk_foods
from fitbit_mcp.sdk import water as sdk_water
from fitbit_mcp.sdk.exceptions import FitbitAPIError
from fitbit_mcp.sdk.types import MEAL_TYPES, VolumeUnits
from fitbit_mcp.utils import parse_date


def register_tools(app):
    """Register nutrition tools with the MCP app."""

    @app.tool()
    async def get_food_log(ctx: Context, date_str: str = None) -> str:
        """
        Get the foods logged on a day with a nutrition summary.

        Args:
            date_str: Day in YYYY-MM-DD format (default: today)

        Returns:
            JSON with daily totals, calorie goal and foods grouped by meal
        """
        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            foods = sdk_foods.get_foods(client, get_local_user(ctx), day)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise

        meals = {}
        for entry in foods.foods:
            food = entry.logged_food
            meal = MEAL_TYPES.get(food.meal_type_id, "Anytime")
            meals.setdefault(meal, []).append({
                "log_id": entry.log_id,
                "name": food.name,
                "brand": food.brand,
                "amount": food.amount,
                "unit": food.unit.name if food.unit else None,
                "calories": food.calories,
            })

        return json.dumps({
            "date": day.isoformat(),
            "summary": asdict(foods.summary),
            "calorie_goal": foods.goals.calories if foods.goals else None,
            "meals": meals,
        }, indent=2)

    @app.tool()
    async def search_foods(query: str, ctx: Context, limit: int = 20) -> str:
        """
        Search the Fitbit foods database.

        Args:
            query: Search text, e.g. "banana"
            limit: Maximum number of results (default: 20)

        Returns:
            JSON list of foods with id, brand, calories and default unit
        """
        try:
            client = get_client(ctx)
            results = sdk_foods.search_foods(client, get_local_user(ctx), query)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise

        foods = [
            {
                "food_id": f.food_id,
                "name": f.name,
                "brand": f.brand,
                "calories": f.calories,
                "default_serving_size": f.default_serving_size,
                "default_unit": asdict(f.default_unit) if f.default_unit else None,
                "units": f.units,
            }
            for f in results[:limit]
        ]
        return json.dumps({"query": query, "foods": foods, "count": len(results)}, indent=2)

    @app.tool()
    async def log_food(
        food_id: int,
        meal_type_id: int,
        unit_id: int,
        amount: str,
        ctx: Context,
        date_str: str = None,
    ) -> str:
        """
        Record a food.

        Args:
            food_id: Food id from search_foods
            meal_type_id: 1=Breakfast, 2=Morning Snack, 3=Lunch, 4=Afternoon Snack, 5=Dinner, 7=Anytime
            unit_id: Unit id from the food's units
            amount: Amount eaten in that unit, e.g. "1.5"
            date_str: Day in YYYY-MM-DD format (default: today)

        Returns:
            JSON with the created food log entry
        """
        if meal_type_id not in MEAL_TYPES:
            return json.dumps({
                "success": False,
                "error": f"Unknown meal_type_id {meal_type_id}. Valid: {sorted(MEAL_TYPES)}",
            }, indent=2)

        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            log = sdk_foods.log_food(client, get_local_user(ctx), food_id, meal_type_id, unit_id, amount, day)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            return json.dumps({"success": False, "error": str(e)}, indent=2)
        return json.dumps({"success": True, "food_log": asdict(log)}, indent=2)

    @app.tool()
    async def get_water_log(ctx: Context, date_str: str = None) -> str:
        """
        Get water consumed on a day.

        Args:
            date_str: Day in YYYY-MM-DD format (default: today)

        Returns:
            JSON with total and individual water entries
        """
        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            water = sdk_water.get_logged_water(client, get_local_user(ctx), day)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            raise

        return json.dumps({
            "date": day.isoformat(),
            "total": water.summary.water,
            "entries": [asdict(w) for w in water.water],
        }, indent=2)

    @app.tool()
    async def log_water(amount: float, ctx: Context, unit: str = None, date_str: str = None) -> str:
        """
        Record water consumed.

        Args:
            amount: Amount consumed
            unit: "ml", "fl oz" or "cup" (default: the user's unit system)
            date_str: Day in YYYY-MM-DD format (default: today)

        Returns:
            JSON with the created water log entry
        """
        try:
            volume_unit = VolumeUnits(unit) if unit else None
        except ValueError:
            return json.dumps({
                "success": False,
                "error": f"Unknown unit {unit!r}. Valid: {[u.value for u in VolumeUnits]}",
            }, indent=2)

        day = parse_date(date_str) if date_str else date.today()
        try:
            client = get_client(ctx)
            log = sdk_water.log_water(client, get_local_user(ctx), amount, day, volume_unit)
        except FitbitAPIError as e:
            if is_token_expired_error(e):
                return handle_token_expired(ctx)
            return json.dumps({"success": False, "error": str(e)}, indent=2)
        return json.dumps({"success": True, "water_log": asdict(log)}, indent=2)

    return app
