"""
QR API routes: generate, history, delete.

Route prefix: /api/qr.  Every route requires a bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.responses import result_response
from auth.dependencies import require_identity
from auth.models import Identity
from database.session import get_db_session
from qr.service import QRService
from utils.schemas import GenerateQRRequest

router = APIRouter(tags=["qr"])


def get_qr_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> QRService:
    return QRService(
        session,
        request.app.state.qr_renderer,
        default_name=request.app.state.settings.qr_default_name,
    )


@router.post("/generate", status_code=status.HTTP_201_CREATED)
async def generate_qr(
    req: GenerateQRRequest,
    request: Request,
    identity: Identity = Depends(require_identity),
    service: QRService = Depends(get_qr_service),
) -> JSONResponse:
    result = await service.generate(identity, req.url, req.name)
    return result_response(request, result, status.HTTP_201_CREATED)


@router.get("/history")
async def qr_history(
    request: Request,
    identity: Identity = Depends(require_identity),
    service: QRService = Depends(get_qr_service),
) -> JSONResponse:
    """The caller's QR codes, newest first."""
    result = await service.list_for_owner(identity)
    return result_response(request, result)


@router.delete("/{qr_id}")
async def delete_qr(
    qr_id: str,
    request: Request,
    identity: Identity = Depends(require_identity),
    service: QRService = Depends(get_qr_service),
) -> JSONResponse:
    result = await service.delete_owned(identity, qr_id)
    return result_response(request, result)
