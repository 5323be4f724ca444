"""
Configuration Store - Layered key-value storage

Handles:
- Loading JSON/YAML files and environment snapshots as configuration sources
- OmegaConf interpolation inside files (${oc.env:DB_PASSWORD})
- Layer merging (first defined key wins)
- ':'-separated key path lookups
"""

import copy
import json
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from cloudenv.utils.environment import EnvironmentInfo
from cloudenv.utils.logging import get_logger

logger = get_logger(__name__, prefix="Store")

KEY_PATH_SEPARATOR = ":"


class RelativeTo(str, Enum):
    """Base directory for relative file paths."""
    PROJECT = "project"    # Project root (local development)
    PWD = "pwd"            # Working directory (Cloud Foundry, containers)


# =============================================================================
# Sources
# =============================================================================

class FileSource:
    """A JSON or YAML document on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r})"

    def _read(self) -> Any:
        with open(self.path, "r", encoding="utf-8") as f:
            if self.path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Load the file as a mapping.

        Returns:
            The document with interpolations resolved, or None if the file is
            missing, unreadable, malformed, or not a mapping.
        """
        if not self.path.is_file():
            logger.debug(f"No file at {self.path}")
            return None

        try:
            raw = self._read()
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            # Parser messages quote file content, so only the error type is logged
            logger.error(f"Error loading {self.path}: {type(e).__name__}")
            return None

        if not isinstance(raw, dict):
            logger.warning(f"Ignoring {self.path}: top level is {type(raw).__name__}, not an object")
            return None

        try:
            return OmegaConf.to_container(OmegaConf.create(raw), resolve=True)
        except OmegaConfBaseException as e:
            # Values that are not valid interpolations are kept verbatim
            key = getattr(e, "full_key", None) or "?"
            logger.warning(
                f"Could not resolve interpolations in {self.path} (key: {key}, {type(e).__name__}), "
                "using raw values"
            )
            return raw


class EnvironmentSource:
    """
    Snapshot of process environment variables.

    Values holding a JSON object or array (VCAP_SERVICES, credentials injected
    from Kubernetes secrets) are decoded; everything else stays a string.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ

    def __repr__(self) -> str:
        return "EnvironmentSource()"

    def load(self) -> Dict[str, Any]:
        environ = self._environ if self._environ is not None else os.environ
        return {name: decode_env_value(value) for name, value in environ.items()}


def decode_env_value(value: str) -> Any:
    """Decode a JSON object/array literal, returning other values unchanged."""
    stripped = value.strip()
    if not stripped.startswith(("{", "[")):
        return value
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        return value


def merge_first_wins(existing: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge incoming into existing without replacing anything already defined.

    Nested mappings are merged key by key; any other value already present in
    existing (including lists and nulls) is kept as is.
    """
    merged = copy.deepcopy(existing)
    for key, value in incoming.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_first_wins(merged[key], value)
    return merged


# =============================================================================
# Configuration Store
# =============================================================================

class ConfigurationStore:
    """
    Layered configuration store.

    Sources are merged in load order; a key defined by an earlier source is
    never overwritten by a later one.
    """

    def __init__(
        self,
        sources: Iterable[Union[FileSource, EnvironmentSource]] = (),
        environment: Optional[EnvironmentInfo] = None,
    ):
        self._environment = environment or EnvironmentInfo()
        self._data: Dict[str, Any] = {}
        self._sources: List[Union[FileSource, EnvironmentSource]] = []

        for source in sources:
            self.load(source)

    @property
    def sources(self) -> List[Union[FileSource, EnvironmentSource]]:
        """Sources that contributed data, in load order."""
        return list(self._sources)

    def load(self, source: Union[FileSource, EnvironmentSource]) -> bool:
        """
        Merge a source into the store.

        Returns:
            True if the source produced data
        """
        data = source.load()
        if data is None:
            return False

        self._data = merge_first_wins(self._data, data)
        self._sources.append(source)
        logger.debug(f"Loaded {source} ({len(data)} top-level keys)")
        return True

    def load_file(self, path: Union[str, Path], relative_to: RelativeTo = RelativeTo.PROJECT) -> bool:
        """Load a file resolved against the project root or working directory."""
        resolved = self._environment.resolve_path(
            path, relative_to_project=(relative_to == RelativeTo.PROJECT)
        )
        return self.load(FileSource(resolved))

    def load_environment(self, environ: Optional[Mapping[str, str]] = None) -> bool:
        """Load a snapshot of the process environment."""
        return self.load(EnvironmentSource(environ))

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a value by ':'-separated key path.

        Args:
            key_path: Path such as "db:searchPatterns"; list items are addressed
                by index ("services:0")
            default: Returned when any path segment is missing

        Returns:
            A deep copy of the value, so callers cannot mutate the store
        """
        node: Any = self._data
        for part in key_path.split(KEY_PATH_SEPARATOR):
            if isinstance(node, dict) and part in node:
                node = node[part]
            elif isinstance(node, list) and part.isdecimal() and int(part) < len(node):
                node = node[int(part)]
            else:
                return default
        return copy.deepcopy(node)

    def to_dict(self) -> Dict[str, Any]:
        """Get the merged document as a plain dict."""
        return copy.deepcopy(self._data)

    def get_service_credentials(self, spec: str) -> Optional[Dict[str, Any]]:
        """Credentials of the Cloud Foundry service matching spec, if bound."""
        from cloudenv.config.cloudfoundry import get_service_credentials
        return get_service_credentials(self, spec)

    def __contains__(self, key_path: str) -> bool:
        missing = object()
        return self.get(key_path, missing) is not missing

    def __len__(self) -> int:
        return len(self._data)
