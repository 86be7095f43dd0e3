from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment: "local", "dev" or "prod" (selects the logging setup)
    env: str = "local"

    # HTTP server
    host: str = "localhost"
    port: int = 8082
    timeout: float = 4.0  # Seconds in-flight requests get on shutdown
    idle_timeout: float = 60.0  # Keep-alive idle timeout in seconds

    # Basic auth for /url (no defaults, must be configured)
    http_user: str
    http_password: str

    # Storage
    storage_backend: str = "sql"  # Options: "sql", "memory"
    storage_path: str = "./storage/storage.db"  # SQLite file or SQLAlchemy URL

    # Alias generation
    alias_length: int = Field(6, gt=0)

    # Logging
    log_dir: str = "."

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
