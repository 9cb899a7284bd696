"""Graph SSO - Facebook OAuth 2.0 single sign-on credential."""

from .auth_providers import AuthOutcome, AuthStatus, FacebookOAuth2Credential, GraphClient
from .config import AppConfig, CredentialsConfig, load_config
from .errors import ConfigurationError, GraphSSOError, TokenExchangeError, VerificationError
from .realm import AuthRealm
from .stores import AuthUser, NullUserStore, UserStore

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "AuthOutcome",
    "AuthRealm",
    "AuthStatus",
    "AuthUser",
    "ConfigurationError",
    "CredentialsConfig",
    "FacebookOAuth2Credential",
    "GraphClient",
    "GraphSSOError",
    "NullUserStore",
    "TokenExchangeError",
    "UserStore",
    "VerificationError",
    "load_config",
]
