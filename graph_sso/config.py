"""Configuration loading and validation."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_CONFIG_PATH = "GRAPH_SSO_CONFIG"
ENV_APPLICATION_ID = "GRAPH_SSO_APPLICATION_ID"
ENV_APPLICATION_SECRET = "GRAPH_SSO_APPLICATION_SECRET"

DEFAULT_REALM = "facebook"


def _require_string(field_name: str, value: Any, hint: str) -> str:
    if value is None:
        raise ConfigurationError(field_name, "Required field is missing", hint=hint)
    if not isinstance(value, str):
        raise ConfigurationError(
            field_name,
            f"Expected a string, got {type(value).__name__}",
            hint=hint,
        )
    if not value.strip():
        raise ConfigurationError(field_name, "Must not be empty", hint=hint)
    return value


def normalize_client_options(value: Any) -> Tuple[Tuple[str, Any], ...]:
    """Turn a list of pairs (or a mapping) into an ordered tuple of pairs.

    YAML mappings keep file order, so both spellings preserve the order in
    which overrides are applied.
    """
    if value is None:
        return ()
    if isinstance(value, dict):
        value = list(value.items())
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(
            "extra_client_options",
            f"Expected a list of [name, value] pairs, got {type(value).__name__}",
            hint="e.g. extra_client_options: [[display, popup]]",
        )

    pairs = []
    for entry in value:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ConfigurationError(
                "extra_client_options",
                f"Invalid entry: {entry!r}",
                hint="Each entry must be a [name, value] pair",
            )
        name, option_value = entry
        if not isinstance(name, str) or not name:
            raise ConfigurationError(
                "extra_client_options",
                f"Option name must be a non-empty string, got {name!r}",
            )
        pairs.append((name, option_value))
    return tuple(pairs)


@dataclass(frozen=True)
class CredentialsConfig:
    """Application credentials for the identity provider.

    Validated eagerly; an instance that exists is always usable.
    """

    application_id: str
    application_secret: str = field(repr=False)
    extra_client_options: Tuple[Tuple[str, Any], ...] = ()

    def __post_init__(self):
        _require_string(
            "application_id",
            self.application_id,
            hint=f"Set it in the config file or via {ENV_APPLICATION_ID}",
        )
        _require_string(
            "application_secret",
            self.application_secret,
            hint=f"Set it in the config file or via {ENV_APPLICATION_SECRET}",
        )
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(
            self,
            "extra_client_options",
            normalize_client_options(self.extra_client_options),
        )


@dataclass(frozen=True)
class AppConfig:
    """Everything the server needs at startup."""

    credentials: CredentialsConfig
    realm: str = DEFAULT_REALM
    scope: Tuple[str, ...] = ()


def _validate_scope(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(s, str) for s in value):
        raise ConfigurationError(
            "scope",
            "Expected a list of permission names",
            hint="e.g. scope: [email, public_profile]",
        )
    return tuple(value)


def load_config_file(path: Optional[str]) -> dict:
    """Load raw config data from a YAML file. Missing file means no data."""
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"Config file not found: {config_path}")
        return {}

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError("file", f"Invalid YAML syntax: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError("file", "Top level must be a mapping")
    return data


def load_config(path: Optional[str] = None) -> AppConfig:
    """Build the application config from a YAML file and the environment.

    Environment variables take precedence over values from the file.
    """
    if path is None:
        path = os.environ.get(ENV_CONFIG_PATH)

    data = load_config_file(path)

    application_id = os.environ.get(ENV_APPLICATION_ID) or data.get("application_id")
    application_secret = (
        os.environ.get(ENV_APPLICATION_SECRET) or data.get("application_secret")
    )

    credentials = CredentialsConfig(
        application_id=application_id,
        application_secret=application_secret,
        extra_client_options=data.get("extra_client_options"),
    )

    realm = data.get("realm", DEFAULT_REALM)
    _require_string("realm", realm, hint="Name of the authentication realm")

    return AppConfig(
        credentials=credentials,
        realm=realm,
        scope=_validate_scope(data.get("scope")),
    )


def example_config() -> List[str]:
    """Lines of an example config file, used by the CLI's --example flag."""
    return [
        "# Graph SSO configuration",
        "application_id: \"your-app-id\"",
        "application_secret: \"your-app-secret\"",
        "realm: facebook",
        "scope: [email]",
        "extra_client_options:",
        "  - [display, popup]",
    ]
