"""Tests for SDK client (HTTP transport, OAuth signing, status checks)."""

import pytest
import requests
from unittest.mock import patch

from fitbit_mcp.sdk.client import FitbitClient, Response, decode
from fitbit_mcp.sdk.credentials import LocalUserDetail, TempCredentials
from fitbit_mcp.sdk.exceptions import (
    CredentialsNotFoundError,
    FitbitAPIError,
    ResponseParseError,
    SchemaMismatchError,
    TransportError,
)
from fitbit_mcp.sdk.models import SleepLog
from tests.conftest import make_response


class TestFitbitClientInit:
    def test_default_urls(self):
        client = FitbitClient()
        assert client.api_base_url == "http://api.fitbit.com"
        assert client.api_base_secured_url == "https://api.fitbit.com"
        assert client.request_token_url == "https://api.fitbit.com/oauth/request_token"
        assert client.access_token_url == "https://api.fitbit.com/oauth/access_token"
        assert client.authorization_url == "http://www.fitbit.com/oauth/authorize"

    def test_custom_hosts(self):
        client = FitbitClient(api_host="api.example.com", web_base_url="https://www.example.com/")
        assert client.api_base_url == "http://api.example.com"
        assert client.authorization_url == "https://www.example.com/oauth/authorize"

    def test_no_consumer_initially(self):
        client = FitbitClient()
        assert client.has_consumer is False
        client.set_oauth_consumer("key", "secret")
        assert client.has_consumer is True


class TestOAuthHandshake:
    def test_request_token(self):
        client = FitbitClient("key", "secret")
        with patch.object(client._session, "post") as mock_post:
            mock_post.return_value = make_response(
                200, text="oauth_token=req_token&oauth_token_secret=req_secret&oauth_callback_confirmed=true"
            )
            temp = client.get_oauth_request_token("http://localhost/callback")

        assert temp.token == "req_token"
        assert temp.token_secret == "req_secret"
        assert temp.authorization_url == "http://www.fitbit.com/oauth/authorize?oauth_token=req_token"

        url = mock_post.call_args[0][0]
        auth = mock_post.call_args.kwargs["auth"]
        assert url == "https://api.fitbit.com/oauth/request_token"
        assert auth.client.client_key == "key"
        assert auth.client.callback_uri == "http://localhost/callback"

    def test_access_token(self):
        client = FitbitClient("key", "secret")
        temp = TempCredentials("req_token", "req_secret")
        with patch.object(client._session, "post") as mock_post:
            mock_post.return_value = make_response(
                200, text="oauth_token=acc_token&oauth_token_secret=acc_secret&encoded_user_id=228TQ4"
            )
            token = client.get_oauth_access_token(temp, "verifier123")

        assert token.token == "acc_token"
        assert token.token_secret == "acc_secret"
        assert token.encoded_user_id == "228TQ4"

        auth = mock_post.call_args.kwargs["auth"]
        assert auth.client.resource_owner_key == "req_token"
        assert auth.client.verifier == "verifier123"

    def test_handshake_error_status(self):
        client = FitbitClient("key", "secret")
        with patch.object(client._session, "post") as mock_post:
            mock_post.return_value = make_response(401, text="oauth_problem=signature_invalid")
            with pytest.raises(FitbitAPIError) as exc:
                client.get_oauth_request_token()
        assert exc.value.status_code == 401
        assert "signature_invalid" in str(exc.value)

    def test_handshake_requires_consumer(self):
        with pytest.raises(FitbitAPIError, match="consumer"):
            FitbitClient().get_oauth_request_token()

    def test_handshake_transport_error(self):
        client = FitbitClient("key", "secret")
        with patch.object(client._session, "post", side_effect=requests.ConnectionError("refused")):
            with pytest.raises(TransportError) as exc:
                client.get_oauth_request_token()
        assert isinstance(exc.value.__cause__, requests.ConnectionError)

    def test_set_access_token_saves_to_cache(self):
        client = FitbitClient("key", "secret")
        user = LocalUserDetail("bob")
        client.set_oauth_access_token(user, "t", "s", "ABC")
        stored = client.credentials_cache.get_resource_credentials(user)
        assert stored.access_token == "t"
        assert stored.resource_id == "ABC"


class TestMakeRequest:
    def test_signs_with_local_user_credentials(self, fitbit_client, local_user, mock_request):
        fitbit_client.get("http://api.fitbit.com/1/user/-/devices.json", local_user=local_user)
        auth = mock_request.call_args.kwargs["auth"]
        assert auth.client.client_key == "consumer_key"
        assert auth.client.resource_owner_key == "user_token"
        assert auth.client.resource_owner_secret == "user_secret"

    def test_consumer_only_call(self, fitbit_client, mock_request):
        fitbit_client.get("http://api.fitbit.com/1/foods/units.json")
        auth = mock_request.call_args.kwargs["auth"]
        assert auth.client.resource_owner_key is None

    def test_unknown_local_user(self, fitbit_client, mock_request):
        with pytest.raises(CredentialsNotFoundError):
            fitbit_client.get("http://x", local_user=LocalUserDetail("nobody"))
        mock_request.assert_not_called()

    def test_unknown_local_user_names_operation(self, fitbit_client, mock_request):
        with pytest.raises(CredentialsNotFoundError) as exc:
            fitbit_client.call(
                "GET", "http://x", LocalUserDetail("nobody"), operation="retrieving devices"
            )
        assert exc.value.operation == "retrieving devices"
        assert str(exc.value).startswith("Error retrieving devices: No Fitbit credentials")
        mock_request.assert_not_called()

    def test_get_params_in_query(self, fitbit_client, local_user, mock_request):
        fitbit_client.get("http://x", [("query", "apple")], local_user)
        kwargs = mock_request.call_args.kwargs
        assert mock_request.call_args[0][0] == "GET"
        assert kwargs["params"] == [("query", "apple")]
        assert kwargs["data"] is None

    def test_post_params_in_body(self, fitbit_client, local_user, mock_request):
        fitbit_client.post("http://x", [("weight", "150.5"), ("date", "2011-01-16")], local_user)
        kwargs = mock_request.call_args.kwargs
        assert kwargs["data"] == [("weight", "150.5"), ("date", "2011-01-16")]
        assert kwargs["params"] is None

    def test_delete_params_in_query(self, fitbit_client, local_user, mock_request):
        fitbit_client.delete("http://x", [("a", "1")], local_user)
        kwargs = mock_request.call_args.kwargs
        assert mock_request.call_args[0][0] == "DELETE"
        assert kwargs["params"] == [("a", "1")]
        assert kwargs["data"] is None

    def test_locale_header(self, fitbit_client, local_user, mock_request):
        fitbit_client.set_locale("en_US")
        fitbit_client.get("http://x", local_user=local_user)
        assert mock_request.call_args.kwargs["headers"]["Accept-Language"] == "en_US"

        fitbit_client.set_locale(None)
        fitbit_client.get("http://x", local_user=local_user)
        assert "Accept-Language" not in mock_request.call_args.kwargs["headers"]

    def test_transport_error(self, fitbit_client, local_user, mock_request):
        mock_request.side_effect = requests.Timeout("timed out")
        with pytest.raises(TransportError, match="timed out"):
            fitbit_client.get("http://x", local_user=local_user)

    def test_timeout_passed(self, fitbit_client, local_user, mock_request):
        fitbit_client.get("http://x", local_user=local_user)
        assert mock_request.call_args.kwargs["timeout"] == 30


class TestCall:
    def test_error_status_carries_body(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(400, {"errors": [{"message": "bad date"}]})
        with pytest.raises(FitbitAPIError) as exc:
            fitbit_client.call("GET", "http://x", local_user, operation="retrieving sleep")
        assert exc.value.status_code == 400
        assert "bad date" in exc.value.body
        assert str(exc.value) == exc.value.body
        assert exc.value.operation == "retrieving sleep"

    def test_expected_status_mismatch(self, fitbit_client, local_user, mock_request):
        mock_request.return_value = make_response(200, {})
        with pytest.raises(FitbitAPIError, match="expected HTTP 201"):
            fitbit_client.call("POST", "http://x", local_user, expected_status=201)

    def test_extra_headers(self, fitbit_client, local_user, mock_request):
        fitbit_client.call("POST", "http://x", local_user, headers={"X-Fitbit-Subscriber-Id": "1"})
        assert mock_request.call_args.kwargs["headers"]["X-Fitbit-Subscriber-Id"] == "1"


class TestResponse:
    def test_is_error(self):
        assert Response(404, "").is_error
        assert Response(500, "").is_error
        assert not Response(204, "").is_error

    def test_json_cached(self):
        response = Response(200, '{"a": 1}')
        assert response.json() is response.json()

    def test_invalid_json(self):
        with pytest.raises(ResponseParseError):
            Response(200, "<html>").json()


class TestDecode:
    def test_schema_mismatch_names_operation(self):
        response = Response(200, '{"logId": 1}')
        with pytest.raises(SchemaMismatchError) as exc:
            decode(response, SleepLog.from_json, "logging sleep")
        assert exc.value.operation == "logging sleep"
        assert exc.value.field == "startTime"
        assert exc.value.status_code == 200
        assert exc.value.body == '{"logId": 1}'
        assert exc.value.message.startswith("Error logging sleep: ")

    def test_invalid_body(self):
        with pytest.raises(ResponseParseError) as exc:
            decode(Response(200, ""), SleepLog.from_json, "logging sleep")
        assert exc.value.operation == "logging sleep"
