#!/usr/bin/env python3
"""Graph SSO - HTTP Server Entry Point"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api import init_api, router as api_router
from .auth_providers import FacebookOAuth2Credential
from .config import example_config, load_config
from .realm import AuthRealm
from .stores import NullUserStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Server components (initialized in lifespan)
realm: Optional[AuthRealm] = None


def build_realm(config_path: Optional[str] = None) -> AuthRealm:
    """Load configuration and assemble the authentication realm."""
    config = load_config(config_path)
    credential = FacebookOAuth2Credential(config.credentials)
    new_realm = AuthRealm(
        name=config.realm,
        credential=credential,
        store=NullUserStore(realm=config.realm),
    )
    init_api(new_realm, default_scope=config.scope)
    return new_realm


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup server components."""
    global realm

    realm = build_realm()

    logger.info("Graph SSO server initialized")
    logger.info(f"Realm: {realm.name} (credential: {realm.credential.name})")

    yield

    logger.info("Graph SSO server shutting down")


app = FastAPI(
    title="Graph SSO Server",
    description="Single sign-on through Facebook's OAuth 2.0 authorization code flow",
    version="0.1.0",
    lifespan=lifespan,
)

# Mount routes
app.include_router(api_router)


def main_cli():
    """CLI entry point."""
    import argparse
    import os

    import uvicorn

    parser = argparse.ArgumentParser(description="Graph SSO Server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument("--port", "-p", type=int, default=8080, help="Bind port")
    parser.add_argument("--config", "-c", help="Path to YAML config file")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument(
        "--example-config",
        action="store_true",
        help="Print an example config file and exit",
    )
    args = parser.parse_args()

    if args.example_config:
        print("\n".join(example_config()))
        return

    if args.config:
        os.environ["GRAPH_SSO_CONFIG"] = args.config

    uvicorn.run(
        "graph_sso.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main_cli()
