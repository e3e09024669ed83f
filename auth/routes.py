"""
Auth API routes — register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.responses import result_response
from auth.service import AuthService
from database.session import get_db_session
from utils.schemas import LoginRequest, RegisterRequest

router = APIRouter(tags=["auth"])


def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> AuthService:
    settings = request.app.state.settings
    return AuthService(session, request.app.state.tokens, bcrypt_rounds=settings.bcrypt_rounds)


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Register a new user."""
    result = await service.register(req.username, req.email, req.password)
    return result_response(request, result, status.HTTP_201_CREATED)


@router.post("/login")
async def login(
    req: LoginRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Login with email + password."""
    result = await service.login(req.email, req.password)
    return result_response(request, result)
