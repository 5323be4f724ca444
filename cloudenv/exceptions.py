"""
Exception hierarchy for cloudenv.

Not-found conditions never raise across the public API; these exceptions are
raised by lower-level helpers and handled inside the resolver.
"""


class CloudEnvError(Exception):
    """Base exception for all cloudenv errors."""
    pass


class MalformedSearchPatternError(CloudEnvError, ValueError):
    """A search pattern could not be split into strategy and argument."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Malformed search pattern '{pattern}': {reason}")
