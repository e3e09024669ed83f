"""Identity attached to authenticated requests, plus a re-export of the User model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from database.models import User  # noqa: F401

__all__ = ["Identity", "User"]


@dataclass(frozen=True)
class Identity:
    user_id: Optional[str]
    email: Optional[str] = None
    issued_at: Optional[int] = None
    expires_at: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Identity":
        # Older tokens put the subject under ``userId``; current ones use ``id``.
        subject = payload.get("userId") or payload.get("id")
        return cls(
            user_id=str(subject) if subject else None,
            email=payload.get("email"),
            issued_at=payload.get("iat"),
            expires_at=payload.get("exp"),
        )
