"""Authentication realm: one credential paired with one user store."""

import logging
from typing import Any, Mapping, Optional

from .auth_providers.base import AuthOutcome, CredentialProvider
from .stores import UserStore

logger = logging.getLogger(__name__)


class AuthRealm:
    """Pairs a credential provider with the store that resolves its users."""

    def __init__(self, name: str, credential: CredentialProvider, store: UserStore):
        self.name = name
        self.credential = credential
        self.store = store

    async def authenticate(
        self,
        request: Any,
        auth_info: Optional[Mapping[str, Any]] = None,
        response: Any = None,
    ) -> AuthOutcome:
        """Run the realm's credential against ``request``."""
        return await self.credential.authenticate(
            request, self, auth_info=auth_info, response=response
        )

    async def find_user(self, criteria: Mapping[str, Any], context: Any = None) -> Any:
        """Look up a user in the realm's store."""
        user = await self.store.find_user(criteria, context)
        logger.debug(f"Realm {self.name}: user {'found' if user is not None else 'not found'}")
        return user

    def __repr__(self) -> str:
        return f"AuthRealm(name={self.name!r}, credential={self.credential.name!r})"
