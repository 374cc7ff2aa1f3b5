from functools import lru_cache
from typing import Annotated, Any, List, Optional
import json
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_ALLOWED_ORIGINS = [
    "https://nova-experience.bokun.io",
    "https://novaxperience.com",
    "https://sitebuilder.bokun.tools",
    "https://novaexperience.bokun.io",
    "https://www.mynovaxperience.com",
]


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Tours Bridge"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS settings
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = list(DEFAULT_ALLOWED_ORIGINS)

    # Upstream provider settings
    BOKUN_API_BASE: str = "https://api.bokun.io"
    BOKUN_ACCESS_KEY: Optional[str] = None
    BOKUN_SECRET_KEY: Optional[str] = None
    BOKUN_API_TOKEN: Optional[str] = None
    BOKUN_VENDOR_ID: Optional[str] = None
    UPSTREAM_TIMEOUT: float = 15.0  # seconds, whole call
    BOKUN_SEARCH_PATH: str = "/activity.json/search"
    BOKUN_DETAIL_PATH: str = "/activity.json/{id}"

    # Listing settings
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 50
    TOUR_URL_PREFIX: str = "/tours"
    DROP_UNIDENTIFIED_TOURS: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> List[str]:
        """Parse CORS origins from a comma separated string or a JSON list."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    @field_validator(
        "BOKUN_ACCESS_KEY",
        "BOKUN_SECRET_KEY",
        "BOKUN_API_TOKEN",
        "BOKUN_VENDOR_ID",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """An empty environment value means the credential is not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("BOKUN_API_BASE")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)
    else:
        print(f"Warning: Environment file {env_path} not found")


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings, constructed once per process.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
