"""
JWT creation and verification.

Tokens are HS256-signed JWTs carrying ``id``, ``email``, ``iat`` and
``exp``.  The secret, algorithm and validity window come from
``Settings`` (env vars ``JWT_SECRET``, ``JWT_ALGORITHM``,
``JWT_EXPIRY_SECONDS``).
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import jwt

from config.settings import Settings


class TokenCodec:
    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiry_seconds: int = 604800,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self.expiry_seconds = expiry_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiry_seconds=settings.jwt_expiry_seconds,
        )

    def create(
        self,
        user_id: str,
        email: str,
        issued_at: Optional[int] = None,
    ) -> str:
        """Create a signed token for ``user_id`` valid for ``expiry_seconds``."""
        iat = int(time.time()) if issued_at is None else int(issued_at)
        payload = {
            "id": str(user_id),
            "email": email,
            "iat": iat,
            "exp": iat + self.expiry_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry, returning the decoded payload.

        Raises ``jwt.PyJWTError`` (``ExpiredSignatureError``,
        ``InvalidSignatureError``, ``DecodeError`` …) on failure.
        """
        return jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            options={"require": ["exp", "iat"]},
        )
