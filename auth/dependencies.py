"""
FastAPI dependencies for authentication.

``require_identity`` is the strict guard used by protected routes;
``optional_identity`` never rejects and yields ``None`` when no valid token
is presented.  Both attach the resolved identity to ``request.state``.
"""

from __future__ import annotations

import logging
from typing import Optional

import jwt
from fastapi import Header, Request

from api.responses import GuardRejection
from auth.models import Identity

logger = logging.getLogger(__name__)


def extract_token(authorization: str) -> str:
    """Strip a ``Bearer`` prefix; a bare token is returned as-is."""
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        return rest.strip()
    return value


async def require_identity(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Identity:
    if not authorization:
        raise GuardRejection("Authorization header is missing")

    token = extract_token(authorization)
    if not token:
        raise GuardRejection("Token is missing")

    try:
        payload = request.app.state.tokens.verify(token)
    except jwt.PyJWTError as exc:
        logger.debug("Rejected token: %s", exc)
        raise GuardRejection("Invalid or expired token", detail=str(exc))

    identity = Identity.from_payload(payload)
    request.state.identity = identity
    return identity


async def optional_identity(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Optional[Identity]:
    identity: Optional[Identity] = None
    token = extract_token(authorization) if authorization else ""
    if token:
        try:
            identity = Identity.from_payload(request.app.state.tokens.verify(token))
        except jwt.PyJWTError:
            identity = None
    request.state.identity = identity
    return identity
