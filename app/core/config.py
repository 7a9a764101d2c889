"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App Info
    app_name: str = "Camera Surveillance API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, alias="PORT")
    workers: int = 1

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./surveillance.db",
        alias="DATABASE_URL",
    )

    # JWT Authentication
    jwt_secret_key: str = Field(default="supersecret", alias="JWT_SECRET")
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,  # 7 days
        alias="JWT_EXPIRE_MINUTES",
    )

    # Password hashing cost
    bcrypt_rounds: int = Field(default=12, alias="BCRYPT_ROUNDS", ge=4, le=31)

    # Stream worker (owns RTSP connections and publishes to the gateway)
    worker_url: str = Field(
        default="http://localhost:8080",
        alias="WORKER_URL",
        description="Stream worker base URL",
    )
    worker_timeout: float = Field(default=10.0, alias="WORKER_TIMEOUT", gt=0)

    # Media gateway (WHEP / WebRTC)
    media_gateway_url: str = Field(
        default="http://localhost:8889",
        alias="MEDIA_GATEWAY_URL",
        description="Media gateway base URL serving /{camera_id}/whep",
    )
    gateway_timeout: float = Field(default=10.0, alias="GATEWAY_TIMEOUT", gt=0)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    @field_validator("worker_url", "media_gateway_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slash so paths can be appended directly."""
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
