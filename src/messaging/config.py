"""Runtime configuration for the Messaging domain.

Values come from the process environment or a local ``.env`` file. Protean's
own settings (database provider, event processing) live in ``domain.toml``.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RelaySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development")
    log_level: str | None = Field(default=None)
    log_dir: str | None = Field(default=None)

    # DynamoDB session table
    aws_region: str = Field(default="eu-west-1")
    aws_endpoint_url: str | None = Field(default=None)
    table_name: str = Field(default="find-face-sessions")
    token_index_name: str = Field(default="token-index")

    # Firebase Cloud Messaging (legacy HTTP API)
    fcm_server_key: SecretStr = Field(default=SecretStr(""))
    fcm_send_url: str = Field(default="https://fcm.googleapis.com/fcm/send")
    fcm_iid_url: str = Field(default="https://iid.googleapis.com/iid/v1")
    http_timeout: float = Field(default=10.0, gt=0)

    # Topic every registered token is subscribed to
    profile_topic: str = Field(default="profile-update")

    # Adapter selection
    session_store: str = Field(default="repository")
    push_gateway: str = Field(default="fake")

    # End-to-end smoke tests against real FCM, spending real quota
    test_e2e: bool = Field(default=False)
    e2e_sample_token: str = Field(default="")

    def is_local(self) -> bool:
        """True where in-memory adapters are expected (test and development)."""
        return self.environment.lower() in ("test", "development")


@lru_cache
def get_settings() -> RelaySettings:
    return RelaySettings()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
