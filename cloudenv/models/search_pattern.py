"""
Search Pattern Models

A search pattern names a lookup strategy and its arguments:

    cloudfoundry:<serviceSpec>
    env:<VARIABLE_NAME>
    file:<path>[:<instance>]

Fields are separated by ':' with no escaping; fields beyond the third are
ignored.
"""

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field

from cloudenv.exceptions import MalformedSearchPatternError

PATTERN_SEPARATOR = ":"


class Strategy(str, Enum):
    """Lookup strategy selected by the first field of a pattern."""
    CLOUD_FOUNDRY = "cloudfoundry"   # Cloud Foundry service bindings
    ENV = "env"                      # Environment variable holding a JSON object (Kubernetes)
    FILE = "file"                    # JSON/YAML file, local or pushed with the app


class CloudFoundryPattern(BaseModel):
    """Look up a bound Cloud Foundry service by name, regex, label or tag."""
    strategy: Literal[Strategy.CLOUD_FOUNDRY] = Strategy.CLOUD_FOUNDRY
    raw: str = Field(..., description="Pattern as written in the mapping file")
    service_spec: str

    model_config = {"frozen": True}


class EnvPattern(BaseModel):
    """Read an environment variable whose value is a JSON object."""
    strategy: Literal[Strategy.ENV] = Strategy.ENV
    raw: str
    variable: str

    model_config = {"frozen": True}


class FilePattern(BaseModel):
    """Read a credentials file, optionally narrowing to one top-level key."""
    strategy: Literal[Strategy.FILE] = Strategy.FILE
    raw: str
    path: str
    instance: str = ""

    model_config = {"frozen": True}


class UnrecognizedPattern(BaseModel):
    """A pattern whose strategy token is not known. Aborts resolution."""
    raw: str
    strategy: str

    model_config = {"frozen": True}


SearchPattern = Union[CloudFoundryPattern, EnvPattern, FilePattern, UnrecognizedPattern]


def parse_search_pattern(raw: str) -> SearchPattern:
    """
    Parse a pattern string into its typed variant.

    Raises:
        MalformedSearchPatternError: fewer than two fields, or an empty argument
            for a known strategy
    """
    fields = raw.split(PATTERN_SEPARATOR)
    if len(fields) < 2:
        raise MalformedSearchPatternError(raw, "expected 'strategy:argument[:instance]'")

    token, argument = fields[0], fields[1]
    instance = fields[2] if len(fields) > 2 else ""

    try:
        strategy = Strategy(token)
    except ValueError:
        return UnrecognizedPattern(raw=raw, strategy=token)

    if not argument:
        raise MalformedSearchPatternError(raw, f"empty argument for '{token}'")

    if strategy == Strategy.CLOUD_FOUNDRY:
        return CloudFoundryPattern(raw=raw, service_spec=argument)
    if strategy == Strategy.ENV:
        return EnvPattern(raw=raw, variable=argument)
    return FilePattern(raw=raw, path=argument, instance=instance)
