"""
Application Configuration
Add constants, secrets, env variables here
"""

from functools import lru_cache
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Loaded by the process entrypoint before the settings are read
ENV_FILE = Path(__file__).parent.parent / ".env.local"


def load_env_file(env_path: Path = ENV_FILE) -> None:
    """
    Load a .env style file into os.environ.

    Args:
        env_path: Path of the file to load

    Raises:
        ConfigurationError: If the file does not exist or cannot be read
    """
    if not env_path.is_file():
        raise ConfigurationError(f"Unable to load environment file: {env_path}")
    try:
        load_dotenv(env_path, override=False)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(
            f"Unable to load environment file: {env_path}"
        ) from exc


# Define settings class for univeral access
class Settings(BaseSettings):
    # Record store (MongoDB)
    MONGODB_CONNECTION_STRING: str = Field(min_length=1)
    MONGODB_DATABASE: str = Field(min_length=1)
    MONGODB_COLLECTION: str = Field(min_length=1)
    MONGODB_TIMEOUT_SECONDS: float = 10

    # Blob store (S3 compatible)
    STORAGE_ACCOUNT: str = Field(min_length=1)
    STORAGE_ACCESS_KEY: str = Field(min_length=1)
    STORAGE_CONTAINER: str = "filer"
    STORAGE_ENDPOINT_URL: str | None = None
    STORAGE_REGION: str = "us-east-1"
    BLOB_MAX_RETRIES: int = 20

    # Server
    FUNCTIONS_CUSTOMHANDLER_PORT: int = 8080
    CLIENT_ORIGIN: str | None = None
    LOG_LEVEL: str = "INFO"

    # extra='ignore' prevents validation errors from extra env vars
    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )


# Export settings
@lru_cache
def get_settings() -> Settings:
    """
    Get settings instance, cached for performance
    """
    return Settings()
