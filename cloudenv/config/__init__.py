"""
Configuration module - layered stores, settings, and Cloud Foundry bindings.
"""

from .settings import (
    get_settings,
    Settings,
)
from .store import (
    ConfigurationStore,
    EnvironmentSource,
    FileSource,
    RelativeTo,
    decode_env_value,
    merge_first_wins,
)
from .cloudfoundry import (
    CloudFoundryService,
    get_service,
    get_service_credentials,
    get_services,
)
from .secrets import (
    is_secret_key,
    mask_value,
    mask_uri_password,
    mask_dict_secrets,
)

__all__ = [
    # Settings
    "get_settings",
    "Settings",
    # Store
    "ConfigurationStore",
    "EnvironmentSource",
    "FileSource",
    "RelativeTo",
    "decode_env_value",
    "merge_first_wins",
    # Cloud Foundry
    "CloudFoundryService",
    "get_service",
    "get_service_credentials",
    "get_services",
    # Secrets
    "is_secret_key",
    "mask_value",
    "mask_uri_password",
    "mask_dict_secrets",
]
