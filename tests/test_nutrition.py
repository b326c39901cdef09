"""
Tests for Fitbit MCP nutrition tools.
"""
import json
import pytest
from datetime import date
from unittest.mock import patch
from mcp.server.fastmcp import FastMCP

from fitbit_mcp import nutrition
from fitbit_mcp.sdk.exceptions import FitbitAPIError
from fitbit_mcp.sdk.models import Food, FoodLog, FoodUnit, Foods, LoggedFood, Water, WaterLog
from fitbit_mcp.sdk.types import VolumeUnits
from tests.conftest import get_tool_result_text
from tests.sdk.test_foods import FOODS


@pytest.fixture
def app_with_nutrition():
    """Create FastMCP app with nutrition tools registered."""
    app = FastMCP("Test Fitbit Nutrition")
    app = nutrition.register_tools(app)
    return app


@patch("fitbit_mcp.sdk.foods.get_foods")
@pytest.mark.asyncio
async def test_get_food_log_groups_by_meal(mock_sdk, app_with_nutrition):
    mock_sdk.return_value = Foods.from_json(FOODS)

    result = await app_with_nutrition.call_tool("get_food_log", {"date_str": "2011-06-29"})
    data = json.loads(get_tool_result_text(result))

    assert data["calorie_goal"] == 2286
    assert data["summary"]["calories"] == 752
    entry = data["meals"]["Afternoon Snack"][0]
    assert entry["name"] == "Chocolate, Milk"
    assert entry["unit"] == "gram"


@patch("fitbit_mcp.sdk.foods.search_foods")
@pytest.mark.asyncio
async def test_search_foods_limit(mock_sdk, app_with_nutrition):
    mock_sdk.return_value = [
        Food(food_id=i, name=f"Apple {i}", calories=95, default_unit=FoodUnit(id=226, name="oz"))
        for i in range(5)
    ]

    result = await app_with_nutrition.call_tool("search_foods", {"query": "apple", "limit": 2})
    data = json.loads(get_tool_result_text(result))

    assert data["count"] == 5
    assert len(data["foods"]) == 2
    assert data["foods"][0]["default_unit"]["name"] == "oz"
    assert mock_sdk.call_args[0][2] == "apple"


@patch("fitbit_mcp.sdk.foods.log_food")
@pytest.mark.asyncio
async def test_log_food(mock_sdk, app_with_nutrition):
    mock_sdk.return_value = FoodLog(log_id=1820, logged_food=LoggedFood(food_id=18828, name="Chocolate, Milk"))

    result = await app_with_nutrition.call_tool(
        "log_food",
        {"food_id": 18828, "meal_type_id": 4, "unit_id": 147, "amount": "1.5", "date_str": "2011-06-29"},
    )
    data = json.loads(get_tool_result_text(result))

    assert data["success"] is True
    assert data["food_log"]["log_id"] == 1820
    assert mock_sdk.call_args[0][2:] == (18828, 4, 147, "1.5", date(2011, 6, 29))


@patch("fitbit_mcp.sdk.foods.log_food")
@pytest.mark.asyncio
async def test_log_food_unknown_meal_type(mock_sdk, app_with_nutrition):
    result = await app_with_nutrition.call_tool(
        "log_food", {"food_id": 1, "meal_type_id": 6, "unit_id": 147, "amount": "1"},
    )
    data = json.loads(get_tool_result_text(result))

    assert data["success"] is False
    assert "meal_type_id" in data["error"]
    mock_sdk.assert_not_called()


@patch("fitbit_mcp.sdk.water.get_logged_water")
@pytest.mark.asyncio
async def test_get_water_log(mock_sdk, app_with_nutrition):
    mock_sdk.return_value = Water.from_json({
        "summary": {"water": 800},
        "water": [{"amount": 500, "logId": 950}, {"amount": 300, "logId": 951}],
    })

    result = await app_with_nutrition.call_tool("get_water_log", {"date_str": "2011-06-29"})
    data = json.loads(get_tool_result_text(result))

    assert data["total"] == 800.0
    assert [e["log_id"] for e in data["entries"]] == [950, 951]


@patch("fitbit_mcp.sdk.water.log_water")
@pytest.mark.asyncio
async def test_log_water_with_unit(mock_sdk, app_with_nutrition):
    mock_sdk.return_value = WaterLog(log_id=508, amount=8)

    result = await app_with_nutrition.call_tool(
        "log_water", {"amount": 8, "unit": "fl oz", "date_str": "2011-06-29"}
    )

    assert json.loads(get_tool_result_text(result))["water_log"]["log_id"] == 508
    assert mock_sdk.call_args[0][2:] == (8, date(2011, 6, 29), VolumeUnits.FL_OZ)


@patch("fitbit_mcp.sdk.water.log_water")
@pytest.mark.asyncio
async def test_log_water_unknown_unit(mock_sdk, app_with_nutrition):
    result = await app_with_nutrition.call_tool("log_water", {"amount": 1, "unit": "gallon"})
    data = json.loads(get_tool_result_text(result))

    assert data["success"] is False
    assert "gallon" in data["error"]
    mock_sdk.assert_not_called()


@patch("fitbit_mcp.sdk.water.log_water")
@pytest.mark.asyncio
async def test_log_water_rejected(mock_sdk, app_with_nutrition):
    mock_sdk.side_effect = FitbitAPIError("Error logging water: expected HTTP 201, got 200", 200)

    result = await app_with_nutrition.call_tool("log_water", {"amount": 250})
    data = json.loads(get_tool_result_text(result))

    assert data["success"] is False
    assert "expected HTTP 201" in data["error"]
