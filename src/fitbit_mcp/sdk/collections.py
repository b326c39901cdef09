"""
Generic access to a user's per-day collections.

get_collection_for_date() looks the collection type up in a fetcher table
instead of branching on it. Most types share the /{collection}/date/{date}
endpoint; meals are not dated and come from the user's meal list.
"""

from typing import Any, Callable, Dict

from fitbit_mcp.sdk import foods
from fitbit_mcp.sdk.client import FitbitClient, Response, decode
from fitbit_mcp.sdk.credentials import FitbitUser, LocalUserDetail
from fitbit_mcp.sdk.models import Activities, Body, Foods, Sleep, Water, unwrap
from fitbit_mcp.sdk.types import APICollectionType, ApiCollectionProperty
from fitbit_mcp.sdk.urls import construct_full_url, construct_property_url
from fitbit_mcp.utils import DateLike


CollectionFetcher = Callable[[FitbitClient, LocalUserDetail, FitbitUser, APICollectionType, DateLike], Any]


def get_collection_response_for_date(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser,
    collection_type: APICollectionType,
    day: DateLike,
) -> Response:
    """
    GET /user/{id}{collection}/date/{date}, undecoded.
    """
    url = construct_full_url(client.api_base_url, client.api_version, fitbit_user, collection_type, day)
    return client.call("GET", url, local_user, operation=f"retrieving {collection_type.collection_name}")


def get_collection_response_for_property(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser,
    collection_type: APICollectionType,
    collection_property: ApiCollectionProperty,
) -> Response:
    """
    GET /user/{id}{collection}/{favorite|recent|frequent}, undecoded.
    """
    url = construct_property_url(
        client.api_base_url, client.api_version, fitbit_user, collection_type, collection_property
    )
    return client.call(
        "GET", url, local_user,
        operation=f"retrieving {collection_property.value} {collection_type.collection_name}",
    )


def _dated(decoder: Callable[[Any], Any]) -> CollectionFetcher:
    def fetch(client, local_user, fitbit_user, collection_type, day):
        response = get_collection_response_for_date(client, local_user, fitbit_user, collection_type, day)
        return decode(response, decoder, f"retrieving {collection_type.collection_name}")
    return fetch


def _meals(client, local_user, fitbit_user, collection_type, day):
    # Meals belong to the token owner and have no date
    return foods.get_meals(client, local_user)


COLLECTION_FETCHERS: Dict[APICollectionType, CollectionFetcher] = {
    APICollectionType.ACTIVITIES: _dated(Activities.from_json),
    APICollectionType.FOODS: _dated(Foods.from_json),
    APICollectionType.MEALS: _meals,
    APICollectionType.SLEEP: _dated(Sleep.from_json),
    APICollectionType.BODY: _dated(lambda body: Body.from_json(unwrap(body, "body"))),
    APICollectionType.WATER: _dated(Water.from_json),
}


def get_collection_for_date(
    client: FitbitClient,
    local_user: LocalUserDetail,
    fitbit_user: FitbitUser,
    collection_type: APICollectionType,
    day: DateLike,
) -> Any:
    """
    Fetch a collection for a day and decode it into its record type.

    MEALS ignores fitbit_user and day: GET /user/-/meals.

    Returns:
        Activities, Foods, List[Meal], Sleep, Body or Water
    """
    fetch = COLLECTION_FETCHERS[collection_type]
    return fetch(client, local_user, fitbit_user, collection_type, day)
