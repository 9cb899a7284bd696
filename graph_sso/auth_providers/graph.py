"""Facebook Graph OAuth 2.0 client."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import parse_qs, urlencode

import httpx

from ..errors import TokenExchangeError

logger = logging.getLogger(__name__)

DEFAULT_AUTHORIZE_URL = "https://www.facebook.com/dialog/oauth"
DEFAULT_ACCESS_TOKEN_URL = "https://graph.facebook.com/oauth/access_token"


@dataclass
class AccessToken:
    """Bearer token returned by the token endpoint."""

    token: str
    expires_in: Optional[int] = None


class GraphClient:
    """Builds consent URLs and exchanges verification codes.

    An instance is bound to one postback (callback) URI. The provider checks
    that the ``redirect_uri`` sent with the token request matches the one the
    user was sent away with, so the same instance, or one built with the same
    postback, must be used for both halves of a login.
    """

    OPTION_NAMES = frozenset(
        {
            "authorize_url",
            "access_token_url",
            "display",
            "scope_separator",
            "timeout",
            "transport",
        }
    )

    def __init__(
        self,
        app_id: str,
        secret: str,
        postback: str,
        authorize_url: str = DEFAULT_AUTHORIZE_URL,
        access_token_url: str = DEFAULT_ACCESS_TOKEN_URL,
        display: Optional[str] = None,
        scope_separator: str = ",",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.app_id = app_id
        self._secret = secret
        self.postback = postback
        self.authorize_url = authorize_url
        self.access_token_url = access_token_url
        self.display = display
        self.scope_separator = scope_separator
        self.timeout = timeout
        self._transport = transport
        self.access_token: Optional[AccessToken] = None

    def authorization_url(self, scopes: Sequence[str] = ()) -> str:
        """Consent page URL requesting the given permissions.

        Scopes are passed through in order; an empty list requests no
        extended permissions and leaves out the ``scope`` parameter.
        """
        params: List[tuple] = [
            ("client_id", self.app_id),
            ("redirect_uri", self.postback),
            ("response_type", "code"),
        ]
        if scopes:
            params.append(("scope", self.scope_separator.join(scopes)))
        if self.display:
            params.append(("display", self.display))

        return f"{self.authorize_url}?{urlencode(params)}"

    async def request_access_token(self, code: str) -> AccessToken:
        """Exchange a verification code for an access token.

        Raises:
            TokenExchangeError: The request failed or the provider did not
                return a token.
        """
        data = {
            "client_id": self.app_id,
            "client_secret": self._secret,
            "code": code,
            "redirect_uri": self.postback,
            "grant_type": "authorization_code",
        }

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self.timeout
            ) as client:
                response = await client.post(
                    self.access_token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.warning(f"Token request to {self.access_token_url} failed: {e}")
            raise TokenExchangeError(
                f"Error validating verification code: {e}"
            ) from e

        payload = self._parse_body(response)

        if response.status_code >= 400 or "error" in payload:
            detail = self._error_detail(payload) or f"HTTP {response.status_code}"
            logger.warning(
                f"Token endpoint rejected verification code "
                f"(status {response.status_code}): {detail}"
            )
            raise TokenExchangeError(
                f"Error validating verification code: {detail}",
                status_code=response.status_code,
            )

        if "access_token" not in payload:
            raise TokenExchangeError(
                "Error validating verification code: response has no access_token",
                status_code=response.status_code,
            )

        expires_in = payload.get("expires_in", payload.get("expires"))
        try:
            expires_in = int(expires_in) if expires_in is not None else None
        except (TypeError, ValueError):
            expires_in = None

        self.access_token = AccessToken(
            token=payload["access_token"] or "",
            expires_in=expires_in,
        )
        return self.access_token

    @staticmethod
    def _parse_body(response: httpx.Response) -> dict:
        """Decode a JSON body, falling back to the legacy form-encoded one."""
        try:
            payload = response.json()
        except ValueError:
            form = parse_qs(response.text, keep_blank_values=True)
            if not form:
                raise TokenExchangeError(
                    "Error validating verification code: unreadable response",
                    status_code=response.status_code,
                )
            return {key: values[0] for key, values in form.items()}

        if not isinstance(payload, dict):
            raise TokenExchangeError(
                "Error validating verification code: unexpected response",
                status_code=response.status_code,
            )
        return payload

    @staticmethod
    def _error_detail(payload: dict) -> Optional[str]:
        error = payload.get("error")
        if isinstance(error, dict):
            return error.get("message") or error.get("type")
        if error:
            description = payload.get("error_description")
            return f"{error}: {description}" if description else str(error)
        return None

    def __repr__(self) -> str:
        return f"GraphClient(app_id={self.app_id!r}, postback={self.postback!r})"
