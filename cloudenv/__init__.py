"""
cloudenv - service credential lookup across local, Cloud Foundry and Kubernetes.

Usage:
    from cloudenv import CredentialResolver

    resolver = CredentialResolver()
    creds = resolver.get_credentials("cloudant")
"""

from cloudenv.exceptions import CloudEnvError, MalformedSearchPatternError
from cloudenv.models import CredentialResolution, Outcome, Strategy
from cloudenv.services.credential_resolver import (
    CredentialResolver,
    get_credential_resolver,
    reset_credential_resolver,
)

__version__ = "0.1.0"

__all__ = [
    "CloudEnvError",
    "MalformedSearchPatternError",
    "CredentialResolution",
    "Outcome",
    "Strategy",
    "CredentialResolver",
    "get_credential_resolver",
    "reset_credential_resolver",
]
