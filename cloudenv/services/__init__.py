"""
Services - credential resolution.
"""

from .credential_resolver import (
    CredentialResolver,
    get_credential_resolver,
    reset_credential_resolver,
)

__all__ = [
    "CredentialResolver",
    "get_credential_resolver",
    "reset_credential_resolver",
]
