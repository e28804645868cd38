"""
Configuration module for the crypto market data gateway.
All settings are loaded from environment variables.
"""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Runtime
    host: str = "0.0.0.0"
    port: int = 8080

    # Logging
    log_level: str = "INFO"

    # Primary store (Redis)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None
    redis_max_connections: int = 50
    redis_socket_timeout_seconds: float = 5.0
    redis_connect_timeout_seconds: float = 2.0
    store_default_scale: str = "5m"

    # Secondary store (relational reference data)
    database_url: str = "sqlite:///./security_tokens.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout_seconds: int = 30
    db_pool_recycle_seconds: int = 1800

    # Gateway policy
    platform_source: str = "diadata.org"
    token_errors_degrade: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
