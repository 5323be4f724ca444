"""
Data models for search patterns and resolution results.
"""

from .search_pattern import (
    CloudFoundryPattern,
    EnvPattern,
    FilePattern,
    SearchPattern,
    Strategy,
    UnrecognizedPattern,
    parse_search_pattern,
)
from .resolution import CredentialResolution, Outcome

__all__ = [
    "CloudFoundryPattern",
    "EnvPattern",
    "FilePattern",
    "SearchPattern",
    "Strategy",
    "UnrecognizedPattern",
    "parse_search_pattern",
    "CredentialResolution",
    "Outcome",
]
