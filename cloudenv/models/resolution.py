"""
Credential resolution results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from cloudenv.config.secrets import mask_dict_secrets


class Outcome(str, Enum):
    """How a resolution ended."""
    FOUND = "found"
    NO_SEARCH_PATTERNS = "no_search_patterns"          # Service not mapped, or mapping malformed
    UNRECOGNIZED_STRATEGY = "unrecognized_strategy"    # Unknown strategy token aborted the search
    ALL_PATTERNS_EXHAUSTED = "all_patterns_exhausted"  # Every pattern missed


@dataclass
class CredentialResolution:
    """Result of resolving credentials for a service."""
    service: str
    outcome: Outcome
    credentials: Optional[Dict[str, Any]] = None
    pattern: Optional[str] = None                        # Pattern that matched or aborted
    misses: List[str] = field(default_factory=list)      # Patterns tried without a match
    skipped: List[str] = field(default_factory=list)     # Malformed patterns

    @property
    def found(self) -> bool:
        return self.outcome == Outcome.FOUND

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for diagnostics. Credential values are masked."""
        return {
            "service": self.service,
            "outcome": self.outcome.value,
            "credentials": mask_dict_secrets(self.credentials) if self.credentials is not None else None,
            "pattern": self.pattern,
            "misses": list(self.misses),
            "skipped": list(self.skipped),
        }
