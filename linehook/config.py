from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://api.line.me/v2/bot/"
DEFAULT_REQUEST_TIMEOUT = 30.0

# Project root (parent of linehook/) - used so .env is found regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(_PROJECT_ROOT / ".env")


class BotConfig(BaseModel):
    """Channel credentials. Frozen once built; shared read-only across requests."""

    model_config = ConfigDict(frozen=True)

    channel_secret: str = Field(min_length=1, repr=False)
    channel_token: str = Field(min_length=1, repr=False)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="allow",
    )

    app_name: str = "linehook"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENV", "ENVIRONMENT"),
    )
    log_level: str = Field(default="INFO", json_schema_extra={"env": "LOG_LEVEL"})
    host: str = Field(default="0.0.0.0", json_schema_extra={"env": "HOST"})
    port: int = Field(default=8000, json_schema_extra={"env": "PORT"})

    # LINE channel
    line_channel_secret: Optional[str] = Field(
        default=None, json_schema_extra={"env": "LINE_CHANNEL_SECRET"}
    )
    line_channel_token: Optional[str] = Field(
        default=None, json_schema_extra={"env": "LINE_CHANNEL_TOKEN"}
    )
    line_api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL, json_schema_extra={"env": "LINE_API_BASE_URL"}
    )
    line_request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        gt=0,
        json_schema_extra={"env": "LINE_REQUEST_TIMEOUT"},
    )

    @property
    def is_production(self) -> bool:
        """Check if the current environment is production."""
        return self.environment.lower() == "production"

    def bot_config(self) -> BotConfig:
        """Build the frozen channel credentials; both secrets are required."""
        if not self.line_channel_secret or not self.line_channel_token:
            raise ValueError(
                "LINE_CHANNEL_SECRET and LINE_CHANNEL_TOKEN must be set."
            )
        return BotConfig(
            channel_secret=self.line_channel_secret,
            channel_token=self.line_channel_token,
        )


def get_settings() -> Settings:
    """Get application settings from the environment."""
    return Settings()
