"""Runtime settings loaded from the environment and `.env`."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .connectors.atproto.config import DEFAULT_COLLECTION, DEFAULT_PDS_URL
from .core.exceptions import AuthenticationError


class Settings(BaseSettings):
    """Credentials and target for the PDS.

    Values are loaded from environment variables and `.env`.
    Use an app password, not the account password.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    BLUESKY_HANDLE: str | None = Field(default=None)
    BLUESKY_APP_PASSWORD: str | None = Field(default=None, repr=False)
    PDS_URL: str = Field(default=DEFAULT_PDS_URL)
    PDS_COLLECTION: str = Field(default=DEFAULT_COLLECTION)

    def require_credentials(self) -> tuple[str, str]:
        """Return (handle, app password).

        Raises:
            AuthenticationError: If either value is missing
        """
        if not self.BLUESKY_HANDLE or not self.BLUESKY_APP_PASSWORD:
            raise AuthenticationError(
                "Missing credentials: set BLUESKY_HANDLE and BLUESKY_APP_PASSWORD "
                "in the environment or a .env file"
            )
        return self.BLUESKY_HANDLE, self.BLUESKY_APP_PASSWORD


def load_settings() -> Settings:
    return Settings()
