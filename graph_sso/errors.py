"""Error types raised by the Graph SSO credential."""

from typing import Optional


class GraphSSOError(Exception):
    """Base class for all Graph SSO errors."""


class ConfigurationError(GraphSSOError):
    """Configuration error with helpful message."""

    def __init__(self, field: str, message: str, hint: Optional[str] = None):
        self.field = field
        self.hint = hint
        full_msg = f"Config error in '{field}': {message}"
        if hint:
            full_msg += f"\n  Hint: {hint}"
        super().__init__(full_msg)


class TokenExchangeError(GraphSSOError):
    """Raised when a verification code can't be exchanged for a token."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class VerificationError(TokenExchangeError):
    """Raised when the provider accepted the code but returned no token."""
