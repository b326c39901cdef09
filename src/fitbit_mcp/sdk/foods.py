"""
Fitbit foods SDK functions.

Food log, the foods database, custom foods and meals.
"""

from typing import List, Optional

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import CURRENT_AUTHORIZED_USER, FitbitUser, LocalUserDetail
from fitbit_mcp.sdk.models import (
    FavoriteFood,
    Food,
    FoodLog,
    Foods,
    FoodUnit,
    LoggedFood,
    Meal,
    NutritionalValuesEntry,
    unwrap,
)
from fitbit_mcp.sdk.types import APICollectionType, ApiCollectionProperty, FoodFormType
from fitbit_mcp.sdk.urls import construct_full_url, construct_property_url, contextualize_url
from fitbit_mcp.utils import DateLike, Params, build_params, format_date


def create_food(
    client: FitbitClient,
    local_user: LocalUserDetail,
    name: str,
    description: str,
    default_food_measurement_unit_id: int,
    default_serving_size: float,
    form_type: FoodFormType,
    calories: Optional[int] = None,
    nutritional_values: Optional[NutritionalValuesEntry] = None,
) -> Food:
    """
    Create a private food for the user.

    POST https://{api_host}/1/foods, expects 201 Created

    Pass either calories per serving or a full nutrient panel; calories
    alone sends every other nutrient as zero.

    Returns:
        The created Food
    """
    if nutritional_values is None:
        nutritional_values = NutritionalValuesEntry(calories=calories or 0)

    params = build_params(
        ("name", name),
        ("description", description),
        ("defaultFoodMeasurementUnitId", default_food_measurement_unit_id),
        ("defaultServingSize", default_serving_size),
        ("formType", form_type),
    )
    params.extend(nutritional_values.to_params())

    url = contextualize_url(client.api_base_secured_url, client.api_version, "/foods")
    response = client.call("POST", url, local_user, params, operation="creating food", expected_status=201)
    return decode(response, lambda body: Food.from_json(unwrap(body, "food")), "creating food")


def get_foods(
    client: FitbitClient,
    local_user: LocalUserDetail,
    day: DateLike,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> Foods:
    """
    Get a summary and list of a user's food log entries for a day.

    GET /user/{id}/foods/log/date/{date}
    """
    url = construct_full_url(
        client.api_base_url, client.api_version, fitbit_user, APICollectionType.FOODS, day
    )
    response = client.call("GET", url, local_user, operation="retrieving foods")
    return decode(response, Foods.from_json, "retrieving foods")


def get_logged_foods(
    client: FitbitClient,
    local_user: LocalUserDetail,
    collection_property: ApiCollectionProperty,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> List[LoggedFood]:
    """
    GET /user/{id}/foods/log/{favorite|recent|frequent}
    """
    url = construct_property_url(
        client.api_base_url, client.api_version, fitbit_user, APICollectionType.FOODS, collection_property
    )
    operation = f"retrieving {collection_property.value} foods"
    response = client.call("GET", url, local_user, operation=operation)
    return decode(response, LoggedFood.from_json_list, operation)


def get_favorite_foods(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> List[FavoriteFood]:
    return get_logged_foods(client, local_user, ApiCollectionProperty.FAVORITE, fitbit_user)


def get_recent_foods(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> List[LoggedFood]:
    return get_logged_foods(client, local_user, ApiCollectionProperty.RECENT, fitbit_user)


def get_frequent_foods(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
) -> List[LoggedFood]:
    return get_logged_foods(client, local_user, ApiCollectionProperty.FREQUENT, fitbit_user)


def search_foods(client: FitbitClient, local_user: Optional[LocalUserDetail], query: str) -> List[Food]:
    """
    Search public foods and the user's private foods.

    GET /foods/search?query={query}

    Returns:
        Matching foods
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/foods/search")
    response = client.call("GET", url, local_user, build_params(("query", query)), operation="searching foods")
    return decode(response, lambda body: Food.from_json_list(unwrap(body, "foods")), "searching foods")


def get_food_units(client: FitbitClient) -> List[FoodUnit]:
    """
    List all valid food measurement units. Consumer-only call.

    GET /foods/units
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/foods/units")
    response = client.call("GET", url, None, operation="retrieving food units")
    return decode(response, FoodUnit.from_json_list, "retrieving food units")


def log_food(
    client: FitbitClient,
    local_user: LocalUserDetail,
    food_id: int,
    meal_type_id: int,
    unit_id: int,
    amount: str,
    day: DateLike,
) -> FoodLog:
    """
    Create a food log entry.

    POST /user/-/foods/log

    Args:
        food_id: Food id from the foods database
        meal_type_id: One of types.MEAL_TYPES
        unit_id: Unit id from get_food_units()
        amount: Amount consumed, in the given unit (e.g. "1.5")
        day: Log entry date
    """
    params = build_params(
        ("foodId", food_id),
        ("mealTypeId", meal_type_id),
        ("unitId", unit_id),
        ("amount", amount),
        ("date", format_date(day)),
    )
    return log_food_with_params(client, local_user, params)


def log_food_with_params(client: FitbitClient, local_user: LocalUserDetail, params: Params) -> FoodLog:
    """
    POST /user/-/foods/log, expects 201 Created
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/foods/log")
    response = client.call(
        "POST", url, local_user, params, operation="creating food log entry", expected_status=201
    )
    return decode(response, lambda body: FoodLog.from_json(unwrap(body, "foodLog")), "creating food log entry")


def delete_food_log(client: FitbitClient, local_user: LocalUserDetail, food_log_id: str) -> None:
    """
    DELETE /user/-/foods/log/{food_log_id}
    """
    url = contextualize_url(client.api_base_url, client.api_version, f"/user/-/foods/log/{food_log_id}")
    client.call("DELETE", url, local_user, operation="deleting food log entry")


def add_favorite_food(client: FitbitClient, local_user: LocalUserDetail, food_id: str) -> None:
    """
    POST /user/-/foods/log/favorite/{food_id}
    """
    url = contextualize_url(client.api_base_url, client.api_version, f"/user/-/foods/log/favorite/{food_id}")
    client.call("POST", url, local_user, operation="adding favorite food")


def delete_favorite_food(client: FitbitClient, local_user: LocalUserDetail, food_id: str) -> None:
    """
    DELETE /user/-/foods/log/favorite/{food_id}
    """
    url = contextualize_url(client.api_base_url, client.api_version, f"/user/-/foods/log/favorite/{food_id}")
    client.call("DELETE", url, local_user, operation="deleting favorite food")


def get_meals(client: FitbitClient, local_user: LocalUserDetail) -> List[Meal]:
    """
    GET /user/-/meals
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/meals")
    response = client.call("GET", url, local_user, operation="retrieving meals")
    return decode(response, lambda body: Meal.from_json_list(unwrap(body, "meals")), "retrieving meals")
