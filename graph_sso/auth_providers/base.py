"""Base credential provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Protocol


class UserLookup(Protocol):
    """Anything that can find a user from credential criteria (a realm)."""

    async def find_user(self, criteria: Mapping[str, Any], context: Any) -> Any:
        ...


class AuthStatus(str, Enum):
    """Where a login ended up after one authenticate call."""

    PENDING = "pending"
    AUTHENTICATED = "authenticated"
    DENIED = "denied"


@dataclass
class AuthOutcome:
    """Result of one authenticate call.

    ``PENDING`` means a redirect was issued and request processing should
    stop so the framework can deliver it. ``DENIED`` means the store had no
    user for the credential. Failures are raised, never returned.
    """

    status: AuthStatus
    user: Any = None
    redirect_url: Optional[str] = None
    client: Any = None

    @property
    def is_pending(self) -> bool:
        return self.status is AuthStatus.PENDING

    @property
    def is_authenticated(self) -> bool:
        return self.status is AuthStatus.AUTHENTICATED


class CredentialProvider(ABC):
    """Abstract base class for credential providers.

    Implement this to plug a new sign-on method into a realm.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'facebook')."""
        ...

    @abstractmethod
    async def authenticate(
        self,
        request: Any,
        realm: UserLookup,
        auth_info: Optional[Mapping[str, Any]] = None,
        response: Any = None,
    ) -> AuthOutcome:
        """Authenticate the user behind ``request``.

        Args:
            request: Inbound request exposing ``url`` and ``query_params``
            realm: Lookup used to turn a verified credential into a user
            auth_info: Call-site options, provider specific
            response: Outbound response to mutate, if the provider redirects

        Returns:
            The outcome of this step of the login
        """
        ...
