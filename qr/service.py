"""
Ownership-scoped CRUD over the ``qr_codes`` table.

Every query filters on the caller's ``user_id``; a record that exists but
belongs to someone else is indistinguishable from one that does not exist.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import List, Optional

from qrcode.exceptions import DataOverflowError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import Identity
from database.models import QRCode
from qr.renderer import QRRenderer
from utils.results import ErrorKind, Result
from utils.schemas import DeletedQR, QRCodeOut

logger = logging.getLogger(__name__)

_NOT_AUTHENTICATED = "User not authenticated"
_NOT_FOUND = "QR not found or not authorized"


def _owner_id(identity: Optional[Identity]) -> Optional[uuid.UUID]:
    if identity is None or not identity.user_id:
        return None
    try:
        return uuid.UUID(identity.user_id)
    except ValueError:
        return None


class QRService:
    def __init__(
        self,
        session: AsyncSession,
        renderer: QRRenderer,
        default_name: str = "Untitled QR",
    ) -> None:
        self._session = session
        self._renderer = renderer
        self._default_name = default_name

    async def generate(
        self,
        identity: Optional[Identity],
        url: Optional[str],
        name: Optional[str] = None,
    ) -> Result[QRCodeOut]:
        """Render ``url`` and store it as a new record owned by ``identity``."""
        url = (url or "").strip()
        if not url:
            return Result.failure(ErrorKind.VALIDATION, "URL is required")

        owner_id = _owner_id(identity)
        if owner_id is None:
            return Result.failure(ErrorKind.AUTH, _NOT_AUTHENTICATED)

        try:
            image_url = await asyncio.to_thread(self._renderer.render, url)
        except (ValueError, DataOverflowError) as exc:
            logger.warning("QR render failed for a %d-char url: %s", len(url), exc)
            return Result.failure(ErrorKind.SERVER, "QR generation failed", str(exc))

        record = QRCode(
            user_id=owner_id,
            name=(name or "").strip() or self._default_name,
            url=url,
            image_url=image_url,
        )
        try:
            self._session.add(record)
            await self._session.flush()
            await self._session.commit()
        except SQLAlchemyError as exc:
            logger.exception("QR generation failed")
            await self._session.rollback()
            return Result.failure(ErrorKind.SERVER, "QR generation failed", str(exc))

        logger.info("Created QR %s for user %s", record.id, owner_id)
        return Result.success(QRCodeOut.model_validate(record))

    async def list_for_owner(self, identity: Optional[Identity]) -> Result[List[QRCodeOut]]:
        owner_id = _owner_id(identity)
        if owner_id is None:
            return Result.failure(ErrorKind.AUTH, _NOT_AUTHENTICATED)

        try:
            result = await self._session.execute(
                select(QRCode)
                .where(QRCode.user_id == owner_id)
                .order_by(QRCode.created_at.desc())
            )
            records = result.scalars().all()
        except SQLAlchemyError as exc:
            logger.exception("QR history lookup failed")
            return Result.failure(ErrorKind.SERVER, "Failed to load QR history", str(exc))

        return Result.success([QRCodeOut.model_validate(r) for r in records])

    async def delete_owned(
        self,
        identity: Optional[Identity],
        record_id: str,
    ) -> Result[DeletedQR]:
        owner_id = _owner_id(identity)
        if owner_id is None:
            return Result.failure(ErrorKind.AUTH, _NOT_AUTHENTICATED)

        try:
            rid = uuid.UUID(record_id)
        except ValueError:
            return Result.failure(ErrorKind.NOT_FOUND, _NOT_FOUND)

        try:
            result = await self._session.execute(
                delete(QRCode).where(QRCode.id == rid, QRCode.user_id == owner_id)
            )
            deleted = result.rowcount
            await self._session.commit()
        except SQLAlchemyError as exc:
            logger.exception("QR delete failed")
            await self._session.rollback()
            return Result.failure(ErrorKind.SERVER, "Failed to delete QR", str(exc))

        if not deleted:
            return Result.failure(ErrorKind.NOT_FOUND, _NOT_FOUND)

        logger.info("Deleted QR %s for user %s", rid, owner_id)
        return Result.success(DeletedQR(id=record_id))
