"""
Pydantic schemas for request bodies and response payloads.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    # Presence and emptiness are checked by AuthService so that missing
    # fields produce the same 400 as blank ones.
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PublicUser(BaseModel):
    """User fields that are safe to return.  Never carries the hash."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str


class AuthPayload(BaseModel):
    success: bool = True
    message: str
    user: PublicUser
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# QR codes
# ═══════════════════════════════════════════════════════════════════════════════


class GenerateQRRequest(BaseModel):
    url: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=255)


class QRCodeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    url: str
    image_url: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DeletedQR(BaseModel):
    success: bool = True
    id: str


# ═══════════════════════════════════════════════════════════════════════════════
# Misc
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[Any] = None

    def to_body(self, include_detail: bool) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "message": self.message}
        if include_detail and self.error is not None:
            body["error"] = self.error
        return body
