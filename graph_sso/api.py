"""HTTP endpoints for Graph SSO."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from fastapi import APIRouter, HTTPException, Query, Request, Response
from pydantic import BaseModel

from .auth_providers.base import AuthStatus
from .errors import TokenExchangeError
from .realm import AuthRealm

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

# These will be set by main.py during initialization
_realm: Optional[AuthRealm] = None
_default_scope: List[str] = []


def init_api(realm: AuthRealm, default_scope: Sequence[str] = ()) -> None:
    """Initialize API with the authentication realm."""
    global _realm, _default_scope
    _realm = realm
    _default_scope = list(default_scope)


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    timestamp: str
    realm: Optional[str]
    application_id: Optional[str]


class LoginResponse(BaseModel):
    status: str
    realm: str
    user: Dict[str, Any]


# Endpoints
@router.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    credential = _realm.credential if _realm else None
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        realm=_realm.name if _realm else None,
        application_id=getattr(credential, "application_id", None),
    )


@router.get("/auth/login", response_model=LoginResponse)
async def login(request: Request, scope: Optional[List[str]] = Query(default=None)):
    """Sign in with the identity provider.

    Without a ``code`` this redirects to the provider's consent page. The
    provider redirects back here with a ``code``, which completes the login.
    """
    if not _realm:
        raise HTTPException(status_code=503, detail="Service not initialized")

    params = request.query_params
    if "code" not in params and "error" in params:
        # User declined on the consent page
        reason = params.get("error_description") or params["error"]
        logger.info(f"Provider returned an error instead of a code: {params['error']}")
        raise HTTPException(status_code=401, detail=f"Authorization denied: {reason}")

    response = Response()
    try:
        outcome = await _realm.authenticate(
            request,
            auth_info={"scope": scope if scope is not None else _default_scope},
            response=response,
        )

    except TokenExchangeError as e:
        logger.warning(f"Login failed for realm {_realm.name}: {e}")
        raise HTTPException(status_code=401, detail=str(e))

    if outcome.status is AuthStatus.PENDING:
        return response

    if outcome.status is AuthStatus.DENIED:
        raise HTTPException(status_code=401, detail="No user for this account")

    user = outcome.user
    return LoginResponse(
        status=outcome.status.value,
        realm=_realm.name,
        user=user.to_dict() if hasattr(user, "to_dict") else {"id": str(user)},
    )
