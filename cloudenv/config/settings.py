"""
cloudenv Settings Configuration
Loads configuration from environment variables
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment."""

    # Paths
    PROJECT_ROOT: Optional[str] = None
    CLOUDENV_MAPPINGS_DIR: str = "config"
    CLOUDENV_MAPPINGS_FILE: str = "mappings.json"

    # Cloud Foundry descriptor used instead of VCAP_SERVICES from the environment
    CLOUDENV_CLOUD_FOUNDRY_FILE: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator('CLOUDENV_MAPPINGS_DIR', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v):
        """Allow 'config/' and 'config' interchangeably."""
        if isinstance(v, str) and len(v) > 1:
            return v.rstrip("/")
        return v

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
