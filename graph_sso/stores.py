"""User stores resolving verified credentials into users."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


@dataclass
class AuthUser:
    """A user resolved by a store."""

    token: str = field(repr=False)
    realm: Optional[str] = None
    authenticated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Session-safe view of the user; the token is left out."""
        return {
            "realm": self.realm,
            "authenticated_at": self.authenticated_at.isoformat().replace("+00:00", "Z"),
            "attributes": dict(self.attributes),
        }


class UserStore(ABC):
    """Abstract base class for user stores."""

    @abstractmethod
    async def find_user(
        self, criteria: Mapping[str, Any], context: Any = None
    ) -> Optional[Any]:
        """Find the user matching ``criteria``.

        Returns:
            The user, or None if no user matches
        """
        ...


class NullUserStore(UserStore):
    """Store that accepts any credential and wraps it in an ``AuthUser``.

    Useful when the application only wants the access token, e.g. to act on
    the user's behalf later, and keeps no users of its own.
    """

    def __init__(self, realm: Optional[str] = None):
        self.realm = realm

    async def find_user(
        self, criteria: Mapping[str, Any], context: Any = None
    ) -> Optional[AuthUser]:
        token = criteria.get("token")
        if not token:
            return None
        return AuthUser(token=token, realm=self.realm)
