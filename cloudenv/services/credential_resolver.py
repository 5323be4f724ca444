"""
Credential Resolver - Finds service credentials across hosting environments.

A mapping file (config/mappings.json) lists, per service, the places to look:

    {
      "cloudant": {
        "searchPatterns": [
          "cloudfoundry:my-cloudant",
          "env:CLOUDANT_CREDENTIALS",
          "file:config/localdev-config.json:cloudant"
        ]
      }
    }

The resolver tries each pattern in order and returns the first match:
- cloudfoundry: service bound via VCAP_SERVICES (or a descriptor file)
- env: environment variable holding a JSON object (e.g. a Kubernetes secret)
- file: JSON/YAML file, optionally narrowed to one top-level key

An unknown strategy stops the search; nothing after it is tried.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from cloudenv.config.secrets import mask_dict_secrets
from cloudenv.config.settings import Settings, get_settings
from cloudenv.config.store import ConfigurationStore, RelativeTo
from cloudenv.exceptions import MalformedSearchPatternError
from cloudenv.models.resolution import CredentialResolution, Outcome
from cloudenv.models.search_pattern import (
    CloudFoundryPattern,
    EnvPattern,
    FilePattern,
    SearchPattern,
    Strategy,
    UnrecognizedPattern,
    parse_search_pattern,
)
from cloudenv.utils.environment import EnvironmentInfo
from cloudenv.utils.logging import get_logger

logger = get_logger(__name__, prefix="Credentials")

SEARCH_PATTERNS_KEY = "searchPatterns"


class CredentialResolver:
    """
    Resolves credentials for named services using the mapping file.

    The mapping file is loaded once, relative to the project root (local
    execution) and then relative to the working directory (Cloud Foundry).
    Keys from the first load win.
    """

    def __init__(
        self,
        mappings_dir: Optional[Union[str, Path]] = None,
        cloud_foundry_file: Optional[Union[str, Path]] = None,
        *,
        settings: Optional[Settings] = None,
        environment: Optional[EnvironmentInfo] = None,
    ):
        self._settings = settings or get_settings()
        self._environment = environment or EnvironmentInfo(project_root=self._settings.PROJECT_ROOT)
        self.cloud_foundry_file = cloud_foundry_file or self._settings.CLOUDENV_CLOUD_FOUNDRY_FILE

        directory = mappings_dir if mappings_dir is not None else self._settings.CLOUDENV_MAPPINGS_DIR
        self.mappings_path = Path(directory) / self._settings.CLOUDENV_MAPPINGS_FILE

        self._mappings = ConfigurationStore(environment=self._environment)
        # Local execution
        self._mappings.load_file(self.mappings_path, RelativeTo.PROJECT)
        # Cloud Foundry
        self._mappings.load_file(self.mappings_path, RelativeTo.PWD)

        logger.debug(
            f"Loaded {len(self.mapped_services)} service mappings from {self.mappings_path} "
            f"(platform: {self._environment.platform.value})"
        )

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def mapped_services(self) -> List[str]:
        """Names of services that have search patterns configured."""
        return [
            name for name, entry in self._mappings.to_dict().items()
            if isinstance(entry, dict) and SEARCH_PATTERNS_KEY in entry
        ]

    def search_patterns(self, name: str) -> List[str]:
        """Configured search patterns for a service, or [] if none are usable."""
        return self._search_patterns(name) or []

    def get_credentials(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Get credentials for a service.

        Returns:
            The first matching credential mapping, or None
        """
        return self.resolve(name).credentials

    def get_dictionary(self, name: str) -> Optional[Dict[str, Any]]:
        """Alias of get_credentials()."""
        return self.get_credentials(name)

    def get_string(self, name: str) -> Optional[str]:
        """
        Get credentials for a service as pretty-printed JSON.

        Returns:
            JSON string, or None if not found or not serializable
        """
        credentials = self.get_credentials(name)
        if credentials is None:
            return None

        try:
            return json.dumps(credentials, indent=2)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not serialize credentials for '{name}': {e}")
            return None

    def resolve(self, name: str) -> CredentialResolution:
        """
        Resolve credentials for a service, reporting how the search ended.

        Args:
            name: Service name as it appears in the mapping file

        Returns:
            CredentialResolution; credentials is set only when outcome is FOUND
        """
        patterns = self._search_patterns(name)
        if patterns is None:
            logger.debug(
                f"No search patterns found for '{name}'. "
                f"There may have been a problem loading {self.mappings_path}"
            )
            return CredentialResolution(service=name, outcome=Outcome.NO_SEARCH_PATTERNS)

        resolution = CredentialResolution(service=name, outcome=Outcome.ALL_PATTERNS_EXHAUSTED)

        for raw in patterns:
            try:
                pattern = parse_search_pattern(raw)
            except MalformedSearchPatternError as e:
                logger.warning(f"{e} (service '{name}'), skipping")
                resolution.skipped.append(raw)
                continue

            if isinstance(pattern, UnrecognizedPattern):
                logger.warning(
                    f"Unrecognized strategy '{pattern.strategy}' in '{raw}' for '{name}', "
                    "abandoning search"
                )
                resolution.outcome = Outcome.UNRECOGNIZED_STRATEGY
                resolution.pattern = raw
                return resolution

            credentials = self._lookup(pattern)
            if credentials is not None:
                logger.debug(f"Found credentials for '{name}' via {raw}: {mask_dict_secrets(credentials)}")
                resolution.outcome = Outcome.FOUND
                resolution.credentials = credentials
                resolution.pattern = raw
                return resolution

            resolution.misses.append(raw)

        logger.error(f"Failed to find credentials for '{name}'")
        return resolution

    # =========================================================================
    # Strategies
    # =========================================================================

    def _search_patterns(self, name: str) -> Optional[List[str]]:
        patterns = self._mappings.get(name, {})
        if not isinstance(patterns, dict):
            return None
        patterns = patterns.get(SEARCH_PATTERNS_KEY)
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            return None
        return patterns

    def _lookup(self, pattern: SearchPattern) -> Optional[Dict[str, Any]]:
        """Run one strategy. None means a miss."""
        if pattern.strategy == Strategy.CLOUD_FOUNDRY:
            return self._cloud_foundry_credentials(pattern)
        if pattern.strategy == Strategy.ENV:
            return self._env_credentials(pattern)
        return self._file_credentials(pattern)

    def _new_store(self) -> ConfigurationStore:
        return ConfigurationStore(environment=self._environment)

    def _cloud_foundry_credentials(self, pattern: CloudFoundryPattern) -> Optional[Dict[str, Any]]:
        store = self._new_store()
        if self.cloud_foundry_file:
            store.load_file(self.cloud_foundry_file, RelativeTo.PROJECT)
        else:
            store.load_environment()

        return store.get_service_credentials(pattern.service_spec)

    def _env_credentials(self, pattern: EnvPattern) -> Optional[Dict[str, Any]]:
        store = self._new_store()
        store.load_environment()

        credentials = store.get(pattern.variable)
        if isinstance(credentials, dict) and has_string_keys(credentials):
            return credentials
        return None

    def _file_credentials(self, pattern: FilePattern) -> Optional[Dict[str, Any]]:
        store = self._new_store()
        # Local file
        store.load_file(pattern.path, RelativeTo.PROJECT)
        # Pushed alongside the app: only the file name survives
        store.load_file(pattern.path.split("/")[-1], RelativeTo.PWD)

        if pattern.instance:
            credentials = store.get(pattern.instance)
        else:
            credentials = store.to_dict()

        if isinstance(credentials, dict) and credentials and has_string_keys(credentials):
            return credentials
        if isinstance(credentials, dict) and credentials:
            logger.warning(f"Ignoring {pattern.raw}: credentials must use string keys throughout")
        return None


def has_string_keys(value: Any) -> bool:
    """True if every mapping nested in value is keyed by strings (JSON-compatible)."""
    if isinstance(value, dict):
        return all(isinstance(key, str) and has_string_keys(item) for key, item in value.items())
    if isinstance(value, list):
        return all(has_string_keys(item) for item in value)
    return True


# Global instance
_credential_resolver: Optional[CredentialResolver] = None


def get_credential_resolver(
    mappings_dir: Optional[Union[str, Path]] = None,
    cloud_foundry_file: Optional[Union[str, Path]] = None,
) -> CredentialResolver:
    """Get global CredentialResolver instance (arguments apply on first call only)."""
    global _credential_resolver
    if _credential_resolver is None:
        _credential_resolver = CredentialResolver(mappings_dir, cloud_foundry_file)
    return _credential_resolver


def reset_credential_resolver() -> None:
    """Drop the global instance so the next call reloads the mapping file."""
    global _credential_resolver
    _credential_resolver = None
