"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Runtime settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="A2UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Function evaluation
    regex_cache_size: int = Field(default=128, gt=0, description="Compiled regex cache size")
    max_call_depth: int = Field(
        default=32, gt=0, le=1024, description="Max nesting of function-call operands"
    )

    # Operation ingestion
    max_json_depth: int = Field(default=64, gt=0, description="Max nesting depth of an operation")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
