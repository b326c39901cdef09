"""
Fitbit subscriptions SDK functions.

A subscription makes Fitbit notify the subscriber endpoint whenever the
user's data changes, for all collections or for one.
"""

from typing import Dict, List, Optional

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import CURRENT_AUTHORIZED_USER, FitbitUser, LocalUserDetail
from fitbit_mcp.sdk.models import ApiSubscription, unwrap
from fitbit_mcp.sdk.types import SUBSCRIBER_ID_HEADER_NAME, APICollectionType
from fitbit_mcp.sdk.urls import construct_subscription_url, construct_subscriptions_list_url


def _subscriber_headers(subscriber_id: Optional[str]) -> Optional[Dict[str, str]]:
    if subscriber_id is None:
        return None
    return {SUBSCRIBER_ID_HEADER_NAME: subscriber_id}


def subscribe(
    client: FitbitClient,
    local_user: LocalUserDetail,
    subscriber_id: Optional[str] = None,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
    collection_type: Optional[APICollectionType] = None,
    subscription_id: Optional[str] = None,
) -> ApiSubscription:
    """
    Create a subscription.

    POST /user/{id}[/{collection}]/apiSubscriptions/{subscription_id}

    Args:
        subscriber_id: Subscriber endpoint to notify; default endpoint if None
        collection_type: Collection to watch; all collections if None
        subscription_id: Caller-chosen id; Fitbit assigns one if None

    Returns:
        ApiSubscription as confirmed by Fitbit
    """
    url = construct_subscription_url(
        client.api_base_url, client.api_version, fitbit_user, collection_type, subscription_id
    )
    response = client.call(
        "POST", url, local_user,
        operation="creating subscription",
        headers=_subscriber_headers(subscriber_id),
    )
    return decode(response, ApiSubscription.from_json, "creating subscription")


def unsubscribe(
    client: FitbitClient,
    local_user: LocalUserDetail,
    subscription_id: str,
    subscriber_id: Optional[str] = None,
    fitbit_user: FitbitUser = CURRENT_AUTHORIZED_USER,
    collection_type: Optional[APICollectionType] = None,
) -> None:
    """
    DELETE /user/{id}[/{collection}]/apiSubscriptions/{subscription_id}
    """
    url = construct_subscription_url(
        client.api_base_url, client.api_version, fitbit_user, collection_type, subscription_id
    )
    client.call(
        "DELETE", url, local_user,
        operation="deleting subscription",
        headers=_subscriber_headers(subscriber_id),
    )


def get_subscriptions(
    client: FitbitClient,
    local_user: LocalUserDetail,
    collection_type: Optional[APICollectionType] = None,
) -> List[ApiSubscription]:
    """
    List the user's subscriptions, optionally for one collection.

    GET /user/-[/{collection}]/apiSubscriptions
    """
    url = construct_subscriptions_list_url(
        client.api_base_url, client.api_version, CURRENT_AUTHORIZED_USER, collection_type
    )
    response = client.call("GET", url, local_user, operation="retrieving subscriptions")
    return decode(
        response,
        lambda body: ApiSubscription.from_json_list(unwrap(body, "apiSubscriptions")),
        "retrieving subscriptions",
    )
