"""Credential providers for Graph SSO."""

from .base import AuthOutcome, AuthStatus, CredentialProvider
from .graph import AccessToken, GraphClient
from .oauth import FacebookOAuth2Credential

__all__ = [
    "AccessToken",
    "AuthOutcome",
    "AuthStatus",
    "CredentialProvider",
    "FacebookOAuth2Credential",
    "GraphClient",
]
