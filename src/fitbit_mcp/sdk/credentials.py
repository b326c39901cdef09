"""
OAuth identities and the credentials cache.

A LocalUserDetail is the consuming application's user; the cache maps it to
the OAuth 1.0a access token that user granted. FitbitUser is the remote
account a request is about, which may differ from the token owner
(e.g. a friend's public data).
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Optional, Union
from urllib.parse import quote

from fitbit_mcp.sdk.types import CURRENT_USER_ID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalUserDetail:
    """Identity of the application's local user."""
    user_id: str


@dataclass(frozen=True)
class FitbitUser:
    """Remote Fitbit account, by encoded id or the '-' current-user sentinel."""
    id: str

    @property
    def is_current_authorized_user(self) -> bool:
        return self.id == CURRENT_USER_ID


CURRENT_AUTHORIZED_USER = FitbitUser(CURRENT_USER_ID)
FitbitUser.CURRENT_AUTHORIZED_USER = CURRENT_AUTHORIZED_USER


@dataclass(frozen=True)
class TempCredentials:
    """Request token from step one of the OAuth handshake."""
    token: str
    token_secret: str
    authorization_url: Optional[str] = None


@dataclass(frozen=True)
class AccessToken:
    """Access token from the final step of the OAuth handshake."""
    token: str
    token_secret: str
    encoded_user_id: Optional[str] = None


@dataclass(frozen=True)
class APIResourceCredentials:
    """Stored access token of a local user."""
    local_user_id: str
    access_token: str
    access_token_secret: str
    resource_id: Optional[str] = None

    @classmethod
    def from_access_token(cls, local_user: LocalUserDetail, token: AccessToken) -> "APIResourceCredentials":
        return cls(
            local_user_id=local_user.user_id,
            access_token=token.token,
            access_token_secret=token.token_secret,
            resource_id=token.encoded_user_id,
        )


def credentials_file_name(local_user: LocalUserDetail) -> str:
    """
    File name holding a local user's data, e.g. "alice.smith" -> "alice.smith.json".

    Every character other than letters, digits and "_.-~" is percent-encoded, so the name
    cannot leave its directory and two distinct ids never share a file.

    Raises:
        ValueError: If the id is empty
    """
    if not local_user.user_id:
        raise ValueError(f"Invalid local user id: {local_user.user_id!r}")
    return f"{quote(local_user.user_id, safe='')}.json"


class CredentialsCache(ABC):
    """Maps local users to their stored OAuth access credentials."""

    @abstractmethod
    def get_resource_credentials(self, local_user: LocalUserDetail) -> Optional[APIResourceCredentials]:
        """Return stored credentials, or None if the user never authorized."""

    @abstractmethod
    def save_resource_credentials(
        self, local_user: LocalUserDetail, credentials: APIResourceCredentials
    ) -> None:
        """Store (or replace) credentials for a local user."""

    @abstractmethod
    def expire_resource_credentials(self, local_user: LocalUserDetail) -> Optional[APIResourceCredentials]:
        """Forget a local user's credentials. Returns what was removed."""


class InMemoryCredentialsCache(CredentialsCache):
    """Default cache: a plain dict keyed by local user id. Lost on restart."""

    def __init__(self):
        self._credentials: Dict[str, APIResourceCredentials] = {}

    def get_resource_credentials(self, local_user: LocalUserDetail) -> Optional[APIResourceCredentials]:
        return self._credentials.get(local_user.user_id)

    def save_resource_credentials(
        self, local_user: LocalUserDetail, credentials: APIResourceCredentials
    ) -> None:
        self._credentials[local_user.user_id] = credentials

    def expire_resource_credentials(self, local_user: LocalUserDetail) -> Optional[APIResourceCredentials]:
        return self._credentials.pop(local_user.user_id, None)


class FileCredentialsCache(CredentialsCache):
    """
    Durable cache: one JSON file per local user.

    Files are stored in {directory}/{quoted local_user_id}.json. The directory is
    created on first write.
    """

    def __init__(self, directory: Union[str, Path]):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, local_user: LocalUserDetail) -> Path:
        return self._directory / credentials_file_name(local_user)

    def get_resource_credentials(self, local_user: LocalUserDetail) -> Optional[APIResourceCredentials]:
        path = self._path_for(local_user)
        if not path.exists():
            return None
        try:
            with open(path, "r") as f:
                data = json.load(f)
            return APIResourceCredentials(**data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Ignoring unreadable credentials file {path}: {e}")
            return None

    def save_resource_credentials(
        self, local_user: LocalUserDetail, credentials: APIResourceCredentials
    ) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._path_for(local_user)
        with open(path, "w") as f:
            json.dump(asdict(credentials), f)

    def expire_resource_credentials(self, local_user: LocalUserDetail) -> Optional[APIResourceCredentials]:
        credentials = self.get_resource_credentials(local_user)
        path = self._path_for(local_user)
        if path.exists():
            path.unlink()
        return credentials
