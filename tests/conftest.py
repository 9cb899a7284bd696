"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from graph_sso.config import CredentialsConfig


class FakeTokenEndpoint:
    """Simulated provider token endpoint that records what it receives."""

    def __init__(self, tokens=None):
        # code -> token, or an httpx.Response to return as-is
        self.tokens = dict(tokens or {})
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
        self.requests.append(form)

        result = self.tokens.get(form.get("code"))
        if isinstance(result, httpx.Response):
            return result
        if result is None:
            return httpx.Response(
                400,
                json={"error": {"message": "Invalid verification code format.", "type": "OAuthException"}},
            )
        return httpx.Response(200, json={"access_token": result, "token_type": "bearer", "expires_in": 5183944})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class FakeRealm:
    """Realm double recording user lookups."""

    def __init__(self, user="user-object"):
        self.user = user
        self.calls = []

    async def find_user(self, criteria, context=None):
        self.calls.append((dict(criteria), context))
        return self.user


class FakeRequest:
    """Minimal inbound request: a URL and its query parameters."""

    def __init__(self, url: str):
        self.url = url
        query = url.split("?", 1)[1] if "?" in url else ""
        self.query_params = {k: v[0] for k, v in parse_qs(query, keep_blank_values=True).items()}


class FakeResponse:
    def __init__(self):
        self.status_code = 200
        self.headers = {}


@pytest.fixture
def token_endpoint():
    """Provider token endpoint knowing one valid code."""
    return FakeTokenEndpoint({"VALID123": "TOK456"})


@pytest.fixture
def credentials(token_endpoint):
    """Credentials wired to the simulated token endpoint."""
    return CredentialsConfig(
        application_id="app-123",
        application_secret="s3cret-value",
        extra_client_options=[("transport", token_endpoint.transport)],
    )


@pytest.fixture
def fake_realm():
    return FakeRealm()


@pytest.fixture
def make_request():
    return FakeRequest


@pytest.fixture
def make_response():
    return FakeResponse
