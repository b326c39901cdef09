"""Tests for SDK user, account and subscription functions."""

import pytest

from fitbit_mcp.sdk import account, subscriptions, user
from fitbit_mcp.sdk.credentials import FitbitUser
from fitbit_mcp.sdk.types import APICollectionType, ApiQuotaType
from tests.conftest import make_response


PROFILE = {"user": {
    "encodedId": "228TQ4",
    "displayName": "Jo",
    "gender": "FEMALE",
    "height": 170.2,
    "weight": 61.3,
    "offsetFromUTCMillis": -25200000,
    "timezone": "America/Los_Angeles",
}}


class TestUserInfo:
    def test_current_user(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, PROFILE)
        info = user.get_user_info(fitbit_client, local_user)
        assert mock_request.call_args[0][1] == "http://api.fitbit.com/1/user/-/profile.json"
        assert info.encoded_id == "228TQ4"
        assert info.offset_from_utc_millis == -25200000

    def test_other_user(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, PROFILE)
        user.get_user_info(fitbit_client, local_user, FitbitUser("22B5XY"))
        assert mock_request.call_args[0][1].endswith("/user/22B5XY/profile.json")

    def test_update(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, PROFILE)
        user.update_user_info(fitbit_client, local_user, [("nickname", "Jojo")])
        assert mock_request.call_args[0][0] == "POST"
        assert mock_request.call_args.kwargs["data"] == [("nickname", "Jojo")]


class TestInvitations:
    def test_invite_by_user_id(self, fitbit_client, local_user, mock_request):
        user.invite_by_user_id(fitbit_client, local_user, "22B5XY")
        assert mock_request.call_args[0][1] == "http://api.fitbit.com/1/user/-/friends/invitations.json"
        assert mock_request.call_args.kwargs["data"] == [("invitedUserId", "22B5XY")]

    def test_invite_by_email(self, fitbit_client, local_user, mock_request):
        user.invite_by_email(fitbit_client, local_user, "friend@example.com")
        assert mock_request.call_args.kwargs["data"] == [("invitedUserEmail", "friend@example.com")]

    def test_accept_and_reject(self, fitbit_client, local_user, mock_request):
        user.accept_invitation_from_user(fitbit_client, local_user, FitbitUser("22B5XY"))
        assert mock_request.call_args[0][1].endswith("/user/-/friends/invitations/22B5XY.json")
        assert mock_request.call_args.kwargs["data"] == [("accept", "true")]

        user.reject_invitation_from_user(fitbit_client, local_user, FitbitUser("22B5XY"))
        assert mock_request.call_args.kwargs["data"] == [("accept", "false")]


class TestAccount:
    def test_register_uses_secured_url(self, fitbit_client, mock_request):
        mock_request.return_value = make_response(200, {"account": {"encodedId": "2XYZ", "email": "a@b.c"}})
        result = account.register_account(fitbit_client, "a@b.c", "pw", "Europe/Paris")
        assert mock_request.call_args[0][1] == "https://api.fitbit.com/1/account/register.json"
        assert ("emailSubscribe", "false") in mock_request.call_args.kwargs["data"]
        assert result.encoded_id == "2XYZ"

    @pytest.mark.parametrize("quota_type,path", [
        (ApiQuotaType.IP_ADDRESS, "/1/account/ipRateLimitStatus.json"),
        (ApiQuotaType.CLIENT_AND_OWNER, "/1/account/clientAndUserRateLimitStatus.json"),
    ])
    def test_rate_limit_status(self, fitbit_client, local_user, mock_request, quota_type, path):
        mock_request.return_value = make_response(200, {"rateLimitStatus": {
            "hourlyLimit": 150, "remainingHits": 149, "resetTime": "2011-09-01T21:00:00.000Z",
        }})
        status = account.get_rate_limit_status(fitbit_client, quota_type, local_user)
        assert mock_request.call_args[0][1].endswith(path)
        assert status.remaining_hits == 149

    def test_ip_rate_limit_is_consumer_only(self, fitbit_client, mock_request):
        mock_request.return_value = make_response(200, {"rateLimitStatus": {
            "hourlyLimit": 150, "remainingHits": 10, "resetTime": "x",
        }})
        account.get_ip_rate_limit_status(fitbit_client)
        assert mock_request.call_args.kwargs["auth"].client.resource_owner_key is None


class TestSubscriptions:
    def test_subscribe_without_id_uses_sentinel(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(201, {
            "collectionType": "user", "ownerId": "228TQ4", "ownerType": "user",
            "subscriberId": "1", "subscriptionId": "320",
        })
        result = subscriptions.subscribe(fitbit_client, local_user, subscriber_id="1")

        assert mock_request.call_args[0] == ("POST", "http://api.fitbit.com/1/user/-/apiSubscriptions/-.json")
        assert mock_request.call_args.kwargs["headers"]["X-Fitbit-Subscriber-Id"] == "1"
        assert result.subscription_id == "320"

    def test_subscribe_collection_with_id(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {"subscriptionId": "abc"})
        subscriptions.subscribe(
            fitbit_client, local_user, collection_type=APICollectionType.ACTIVITIES, subscription_id="abc"
        )
        assert mock_request.call_args[0][1] == "http://api.fitbit.com/1/user/-/activities/apiSubscriptions/abc.json"
        assert "X-Fitbit-Subscriber-Id" not in mock_request.call_args.kwargs["headers"]

    def test_unsubscribe(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(204, text="")
        subscriptions.unsubscribe(fitbit_client, local_user, "320", subscriber_id="1")
        assert mock_request.call_args[0] == ("DELETE", "http://api.fitbit.com/1/user/-/apiSubscriptions/320.json")

    def test_header_not_shared_between_requests(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {"subscriptionId": "1"})
        subscriptions.subscribe(fitbit_client, local_user, subscriber_id="9")
        mock_request.return_value = make_response(200, {"apiSubscriptions": []})
        subscriptions.get_subscriptions(fitbit_client, local_user)
        assert "X-Fitbit-Subscriber-Id" not in mock_request.call_args.kwargs["headers"]

    def test_get_subscriptions(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {"apiSubscriptions": [
            {"subscriptionId": "320", "collectionType": "foods"},
        ]})
        result = subscriptions.get_subscriptions(fitbit_client, local_user, APICollectionType.FOODS)
        assert mock_request.call_args[0][1] == "http://api.fitbit.com/1/user/-/foods/apiSubscriptions.json"
        assert result[0].collection_type == "foods"
