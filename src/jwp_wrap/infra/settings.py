"""Runtime configuration loaded from the environment.

Values come from ``JWP_``-prefixed environment variables or a ``.env``
file in the working directory.  Nothing here talks to the network.
"""

from __future__ import annotations

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from jwp_wrap.exceptions import ConfigurationError, append_credentials_suggestion


class PlatformSettings(BaseSettings):
    """Connection settings for the JW Platform API."""

    model_config = SettingsConfigDict(
        env_prefix="JWP_",
        env_file=".env",
        extra="ignore",
    )

    api_secret: str = ""
    site_key: str = ""

    v1_base_url: str = "https://api.jwplatform.com/v1"
    v2_base_url: str = "https://api.jwplayer.com/v2"
    cdn_base_url: str = "https://cdn.jwplayer.com"

    timeout: float = 10.0
    """Per-request timeout in seconds."""

    @classmethod
    def load(cls) -> PlatformSettings:
        """Read the settings, reporting bad values as configuration errors.

        Raises
        ------
        ConfigurationError
            If an environment or ``.env`` value cannot be parsed.
        """
        try:
            return cls()
        except ValidationError as exc:
            fields = ", ".join(
                f"JWP_{str(error['loc'][0]).upper()}"
                for error in exc.errors()
                if error["loc"]
            )
            raise ConfigurationError(
                f"Invalid configuration: {fields or exc}",
                hint="Fix the variables in the environment or in the .env file.",
            ) from exc

    def missing_credentials(self, *, needs_site_key: bool = True) -> list[str]:
        """Return the environment variable names that are unset."""
        missing: list[str] = []
        if not self.api_secret:
            missing.append("JWP_API_SECRET")
        if needs_site_key and not self.site_key:
            missing.append("JWP_SITE_KEY")
        return missing

    def require_credentials(self, *, needs_site_key: bool = True) -> None:
        """Raise :class:`ConfigurationError` unless credentials are set.

        The site key is only checked when *needs_site_key* is true; only
        analytics queries address a site.
        """
        missing = self.missing_credentials(needs_site_key=needs_site_key)
        if missing:
            raise ConfigurationError(
                f"Missing configuration: {', '.join(missing)}",
                hint=append_credentials_suggestion(
                    "Set the variables in the environment or in a .env file.",
                ),
            )
