from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "Linkstat"
    app_version: str = "1.0.0"

    # Database
    database_url: str = "sqlite:///./linkstat.db"

    # Aliases
    base_url: str = "http://127.0.0.1:8000"
    alias_length: int = 6
    max_alias_retries: int = 5
    custom_alias_max_length: int = 64

    # Cache settings
    cache_backend: str = "redis"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # seconds
    cache_timeout: float = 0.5  # seconds, a timeout counts as a miss

    # Store settings
    store_backend: str = "sqlalchemy"  # Options: "sqlalchemy", "memory"
    store_timeout: float = 5.0  # seconds

    # Analytics
    analytics_days: int = 7

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
