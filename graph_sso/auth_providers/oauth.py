"""Facebook OAuth 2.0 credential provider."""

import logging
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

from ..config import CredentialsConfig
from ..errors import ConfigurationError, VerificationError
from .base import AuthOutcome, AuthStatus, CredentialProvider, UserLookup
from .graph import GraphClient

logger = logging.getLogger(__name__)


def callback_uri_for(request: Any) -> str:
    """The request's URI with query string and fragment removed.

    Used for both the consent redirect and the token exchange, which must
    send the provider the same ``redirect_uri``.
    """
    parts = urlsplit(str(request.url))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class FacebookOAuth2Credential(CredentialProvider):
    """Authenticate users through Facebook's OAuth 2.0 authorization code flow.

    A login takes two requests. The first has no ``code`` parameter:
    ``authenticate`` sets a redirect to Facebook's consent page and returns a
    ``PENDING`` outcome. The caller must stop processing and send that
    redirect. Once the user grants access, Facebook redirects back to the same
    URL with a ``code``. ``authenticate`` exchanges it for an access token and
    looks the user up in the realm with ``{"token": <access token>}``.

    If the exchange fails an exception is raised. A realm that has no user for
    the token yields a ``DENIED`` outcome.
    """

    name = "facebook"

    def __init__(self, config: CredentialsConfig):
        unknown = [
            option
            for option, _ in config.extra_client_options
            if option not in GraphClient.OPTION_NAMES | {"app_id", "secret"}
        ]
        if unknown:
            raise ConfigurationError(
                "extra_client_options",
                f"Unknown client option(s): {', '.join(unknown)}",
                hint=f"Valid options: {', '.join(sorted(GraphClient.OPTION_NAMES))}",
            )

        self._config = config
        # Client bound by the most recent authenticate call
        self.graph: Optional[GraphClient] = None

    @property
    def application_id(self) -> str:
        return self._config.application_id

    def build_client(self, **kwargs) -> GraphClient:
        """Create a client; later keyword sources override earlier ones."""
        options = {
            "app_id": self._config.application_id,
            "secret": self._config.application_secret,
        }
        options.update(self._config.extra_client_options)
        options.update(kwargs)
        return GraphClient(**options)

    async def authenticate(
        self,
        request: Any,
        realm: UserLookup,
        auth_info: Optional[Mapping[str, Any]] = None,
        response: Any = None,
    ) -> AuthOutcome:
        callback_uri = callback_uri_for(request)
        client = self.build_client(postback=callback_uri)
        self.graph = client

        code = request.query_params.get("code")

        if code is None:
            scopes = list((auth_info or {}).get("scope") or [])
            auth_url = client.authorization_url(scopes)

            if response is not None:
                response.status_code = 302
                response.headers["location"] = auth_url

            logger.info(f"Redirecting to consent page (callback: {callback_uri})")
            return AuthOutcome(
                status=AuthStatus.PENDING,
                redirect_url=auth_url,
                client=client,
            )

        token = await client.request_access_token(code)
        if not token.token:
            logger.warning(f"Token endpoint returned an empty token for {callback_uri}")
            raise VerificationError("Error validating verification code")

        logger.info(f"Verification code exchanged (callback: {callback_uri})")

        user = await realm.find_user({"token": token.token}, request)
        if user is None:
            logger.info("No user found for access token")
            return AuthOutcome(status=AuthStatus.DENIED, client=client)

        return AuthOutcome(
            status=AuthStatus.AUTHENTICATED,
            user=user,
            client=client,
        )
