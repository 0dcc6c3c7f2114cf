from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.exceptions import MissingCredentialError
from ..core.domain.models import OAuthCredentials


CLIENT_ID_ENV = "GITHUB_OAUTH_CLIENT_ID"
CLIENT_SECRET_ENV = "GITHUB_OAUTH_CLIENT_SECRET"
LEGACY_CLIENT_ID_ENV = "GITHUB_CLIENT_ID"
LEGACY_CLIENT_SECRET_ENV = "GITHUB_CLIENT_SECRET"


class OAuthCredentialSettings(BaseSettings):
    """OAuth app credentials from the environment.

    The primary names win; the legacy names are read only when the primary
    ones are absent.
    """

    model_config = SettingsConfigDict(extra="ignore")

    client_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(CLIENT_ID_ENV, LEGACY_CLIENT_ID_ENV),
    )
    client_secret: str | None = Field(
        default=None,
        validation_alias=AliasChoices(CLIENT_SECRET_ENV, LEGACY_CLIENT_SECRET_ENV),
        repr=False,
    )


class EnvCredentialProvider:
    """Reads the OAuth client id and secret at login time, not at startup."""

    def load(self) -> OAuthCredentials:
        settings = OAuthCredentialSettings()
        if not settings.client_id:
            raise MissingCredentialError(CLIENT_ID_ENV)
        if not settings.client_secret:
            raise MissingCredentialError(CLIENT_SECRET_ENV)
        return OAuthCredentials(client_id=settings.client_id, client_secret=settings.client_secret)


class StaticCredentialProvider:
    """Fixed credentials, for embedding applications and tests."""

    def __init__(self, *, client_id: str, client_secret: str) -> None:
        self._credentials = OAuthCredentials(client_id=client_id, client_secret=client_secret)

    def load(self) -> OAuthCredentials:
        return self._credentials
