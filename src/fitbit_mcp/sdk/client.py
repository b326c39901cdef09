"""
Fitbit REST API HTTP Client.

Handles HTTP transport, OAuth 1.0a signing, credentials lookup and error
handling. All resource-specific logic lives in the sibling modules
(activities, foods, sleep, etc.).

Credentials are resolved from the credentials cache on every call and
attached to that request only, so one client can serve many local users.
"""

import json
import logging
from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import parse_qsl, urlencode

import requests
from requests_oauthlib import OAuth1

from fitbit_mcp.sdk.credentials import (
    AccessToken,
    APIResourceCredentials,
    CredentialsCache,
    InMemoryCredentialsCache,
    LocalUserDetail,
    TempCredentials,
)
from fitbit_mcp.sdk.exceptions import (
    CredentialsNotFoundError,
    FitbitAPIError,
    ResponseParseError,
    SchemaMismatchError,
    TransportError,
)
from fitbit_mcp.sdk.types import (
    ACCEPT_LANGUAGE_HEADER_NAME,
    DEFAULT_API_HOST,
    DEFAULT_WEB_BASE_URL,
    APIVersion,
)
from fitbit_mcp.utils import Params, merge_params

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 30


class Response:
    """
    Raw result of a Fitbit API call.

    The body is decoded as JSON on first access to json() and cached.
    """

    def __init__(self, status_code: int, text: str, headers: Optional[Dict[str, str]] = None):
        self.status_code = status_code
        self.text = text or ""
        self.headers = headers or {}
        self._json: Any = None
        self._decoded = False

    @classmethod
    def from_requests(cls, response: requests.Response) -> "Response":
        return cls(response.status_code, response.text, dict(response.headers))

    @property
    def is_error(self) -> bool:
        return not 200 <= self.status_code < 300

    def json(self) -> Any:
        """
        Decode the body.

        Raises:
            ResponseParseError: If the body is empty or not valid JSON
        """
        if not self._decoded:
            try:
                self._json = json.loads(self.text)
            except ValueError as e:
                raise ResponseParseError(f"Invalid JSON body: {e}", self.status_code, self.text) from e
            self._decoded = True
        return self._json

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"


class FitbitClient:
    """
    Fitbit REST API transport.

    Handles OAuth handshake, request signing, headers and status checks.
    Endpoint calls are in sibling modules (sdk.activities, sdk.foods, etc.).
    """

    def __init__(
        self,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
        api_host: str = DEFAULT_API_HOST,
        web_base_url: str = DEFAULT_WEB_BASE_URL,
        credentials_cache: Optional[CredentialsCache] = None,
        api_version: APIVersion = APIVersion.BETA_1,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._api_host = api_host
        self._web_base_url = web_base_url.rstrip("/")
        self._credentials_cache = credentials_cache or InMemoryCredentialsCache()
        self._api_version = api_version
        self._timeout = timeout
        self._locale: Optional[str] = None

        self._session = requests.Session()

    # ── Configuration ────────────────────────────────────────────────────

    @property
    def api_base_url(self) -> str:
        return f"http://{self._api_host}"

    @property
    def api_base_secured_url(self) -> str:
        return f"https://{self._api_host}"

    @property
    def api_version(self) -> APIVersion:
        return self._api_version

    @property
    def request_token_url(self) -> str:
        return f"{self.api_base_secured_url}/oauth/request_token"

    @property
    def access_token_url(self) -> str:
        return f"{self.api_base_secured_url}/oauth/access_token"

    @property
    def authorization_url(self) -> str:
        return f"{self._web_base_url}/oauth/authorize"

    @property
    def credentials_cache(self) -> CredentialsCache:
        return self._credentials_cache

    @property
    def locale(self) -> Optional[str]:
        return self._locale

    @property
    def has_consumer(self) -> bool:
        return bool(self._consumer_key and self._consumer_secret)

    def set_oauth_consumer(self, consumer_key: str, consumer_secret: str) -> None:
        """Set the application's OAuth consumer key pair."""
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret

    def set_locale(self, locale: Optional[str]) -> None:
        """
        Select the unit system of future responses (e.g. "en_US", "en_GB").

        None removes the Accept-Language header, which means metric units.
        """
        self._locale = locale

    # ── OAuth handshake ──────────────────────────────────────────────────

    def get_oauth_request_token(self, callback_url: Optional[str] = None) -> TempCredentials:
        """
        Step one of the OAuth 1.0a handshake.

        POST https://{api_host}/oauth/request_token

        Args:
            callback_url: Where Fitbit redirects after the user authorizes

        Returns:
            TempCredentials including the URL the user must visit
        """
        auth = OAuth1(
            self._require_consumer("requesting OAuth token"),
            client_secret=self._consumer_secret,
            callback_uri=callback_url,
        )
        tokens = self._fetch_token(self.request_token_url, auth, "requesting OAuth token")
        token = tokens["oauth_token"]
        authorization_url = f"{self.authorization_url}?{urlencode({'oauth_token': token})}"
        logger.info("Obtained OAuth request token")
        return TempCredentials(
            token=token,
            token_secret=tokens["oauth_token_secret"],
            authorization_url=authorization_url,
        )

    def get_oauth_access_token(
        self, temp_credentials: TempCredentials, verifier: Optional[str] = None
    ) -> AccessToken:
        """
        Final step of the OAuth 1.0a handshake.

        POST https://{api_host}/oauth/access_token

        Args:
            temp_credentials: Result of get_oauth_request_token()
            verifier: oauth_verifier Fitbit passed to the callback (or the PIN)

        Returns:
            AccessToken with the encoded id of the user who granted it
        """
        auth = OAuth1(
            self._require_consumer("requesting OAuth access token"),
            client_secret=self._consumer_secret,
            resource_owner_key=temp_credentials.token,
            resource_owner_secret=temp_credentials.token_secret,
            verifier=verifier,
        )
        tokens = self._fetch_token(self.access_token_url, auth, "requesting OAuth access token")
        logger.info("Obtained OAuth access token")
        return AccessToken(
            token=tokens["oauth_token"],
            token_secret=tokens["oauth_token_secret"],
            encoded_user_id=tokens.get("encoded_user_id"),
        )

    def set_oauth_access_token(
        self,
        local_user: LocalUserDetail,
        token: str,
        token_secret: str,
        encoded_user_id: Optional[str] = None,
    ) -> APIResourceCredentials:
        """Store an access token for a local user in the credentials cache."""
        credentials = APIResourceCredentials(
            local_user_id=local_user.user_id,
            access_token=token,
            access_token_secret=token_secret,
            resource_id=encoded_user_id,
        )
        self._credentials_cache.save_resource_credentials(local_user, credentials)
        return credentials

    def _fetch_token(self, url: str, auth: OAuth1, operation: str) -> Dict[str, str]:
        try:
            raw = self._session.post(url, auth=auth, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportError(f"Error {operation}: {e}", operation=operation) from e

        response = Response.from_requests(raw)
        if response.is_error:
            logger.warning(f"Error {operation}: HTTP {response.status_code}")
            raise FitbitAPIError(response.text, response.status_code, response.text, operation)

        tokens = dict(parse_qsl(response.text))
        if "oauth_token" not in tokens or "oauth_token_secret" not in tokens:
            raise ResponseParseError(
                f"Error {operation}: response has no token", response.status_code, response.text, operation
            )
        return tokens

    # ── Requests ─────────────────────────────────────────────────────────

    def _require_consumer(self, operation: str) -> str:
        if not self.has_consumer:
            raise FitbitAPIError(
                f"Error {operation}: OAuth consumer key and secret are not configured",
                operation=operation,
            )
        return self._consumer_key

    def resolve_credentials(
        self, local_user: Optional[LocalUserDetail], operation: Optional[str] = None
    ) -> Optional[APIResourceCredentials]:
        """
        Look up the access token of a local user.

        Returns None for consumer-only calls (local_user is None).

        Raises:
            CredentialsNotFoundError: If the user has never authorized
        """
        if local_user is None:
            return None
        credentials = self._credentials_cache.get_resource_credentials(local_user)
        if credentials is None:
            message = (
                f"No Fitbit credentials for local user {local_user.user_id!r}. "
                "Complete the OAuth authorization first."
            )
            if operation:
                message = f"Error {operation}: {message}"
            raise CredentialsNotFoundError(message, operation=operation)
        return credentials

    def _auth_for(self, local_user: Optional[LocalUserDetail], operation: str) -> OAuth1:
        consumer_key = self._require_consumer(operation)
        credentials = self.resolve_credentials(local_user, operation)
        if credentials is None:
            return OAuth1(consumer_key, client_secret=self._consumer_secret)
        return OAuth1(
            consumer_key,
            client_secret=self._consumer_secret,
            resource_owner_key=credentials.access_token,
            resource_owner_secret=credentials.access_token_secret,
        )

    def make_request(
        self,
        method: str,
        url: str,
        local_user: Optional[LocalUserDetail] = None,
        params: Optional[Params] = None,
        headers: Optional[Dict[str, str]] = None,
        operation: Optional[str] = None,
    ) -> Response:
        """
        Make a signed API request.

        Args:
            method: HTTP method (GET/POST/DELETE)
            url: Full request URL
            local_user: Acting local user, or None for consumer-only calls
            params: Ordered (name, value) pairs; query string for GET and
                DELETE, urlencoded body for POST
            headers: Extra per-request headers
            operation: Name of the calling operation, used in error messages

        Returns:
            Response, whatever its status

        Raises:
            CredentialsNotFoundError: If local_user has no stored credentials
            TransportError: If the request could not be sent
        """
        method = method.upper()
        operation = operation or f"calling {method} {url}"
        auth = self._auth_for(local_user, operation)
        pairs = merge_params(params)

        request_headers = {}
        if self._locale:
            request_headers[ACCEPT_LANGUAGE_HEADER_NAME] = self._locale
        if headers:
            request_headers.update(headers)

        if method == "POST":
            query, body = None, pairs or None
        else:
            query, body = pairs or None, None

        logger.debug(f"{method} {url}")
        try:
            raw = self._session.request(
                method,
                url,
                params=query,
                data=body,
                headers=request_headers,
                auth=auth,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Error {operation}: {e}", operation=operation) from e

        response = Response.from_requests(raw)
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def get(self, url: str, params: Optional[Params] = None, local_user: Optional[LocalUserDetail] = None) -> Response:
        return self.make_request("GET", url, local_user, params)

    def post(self, url: str, params: Optional[Params] = None, local_user: Optional[LocalUserDetail] = None) -> Response:
        return self.make_request("POST", url, local_user, params)

    def delete(self, url: str, params: Optional[Params] = None, local_user: Optional[LocalUserDetail] = None) -> Response:
        return self.make_request("DELETE", url, local_user, params)

    def call(
        self,
        method: str,
        url: str,
        local_user: Optional[LocalUserDetail] = None,
        params: Optional[Params] = None,
        operation: str = "",
        expected_status: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Response:
        """
        make_request() plus status checking.

        Raises:
            FitbitAPIError: On a non-2xx status (message is the raw body), or
                when expected_status is given and does not match
        """
        response = self.make_request(method, url, local_user, params, headers, operation)

        if response.is_error:
            logger.warning(f"Error {operation}: HTTP {response.status_code}")
            raise FitbitAPIError(response.text, response.status_code, response.text, operation)

        if expected_status is not None and response.status_code != expected_status:
            logger.warning(f"Error {operation}: expected HTTP {expected_status}, got {response.status_code}")
            raise FitbitAPIError(
                f"Error {operation}: expected HTTP {expected_status}, got {response.status_code}",
                response.status_code,
                response.text,
                operation,
            )

        return response


def decode(response: Response, decoder: Callable[[Any], T], operation: str = "") -> T:
    """
    Decode a successful response's JSON body with a record decoder.

    Raises:
        SchemaMismatchError: If a field is missing or of the wrong type
        ResponseParseError: If the body is not JSON
    """
    try:
        return decoder(response.json())
    except SchemaMismatchError as e:
        raise SchemaMismatchError(
            e.field, f"Error {operation}: {e.message}", operation, response.status_code, response.text
        ) from e
    except ResponseParseError as e:
        raise ResponseParseError(
            f"Error {operation}: {e.message}", response.status_code, response.text, operation
        ) from e
