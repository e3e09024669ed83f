"""
Registration and login against the ``users`` table.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import User
from auth.password import hash_password, verify_password
from auth.tokens import TokenCodec
from utils.results import ErrorKind, Result
from utils.schemas import AuthPayload, PublicUser

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    def __init__(
        self,
        session: AsyncSession,
        tokens: TokenCodec,
        bcrypt_rounds: int = 12,
    ) -> None:
        self._session = session
        self._tokens = tokens
        self._bcrypt_rounds = bcrypt_rounds

    def _issue(self, user: User) -> str:
        return self._tokens.create(str(user.id), user.email)

    async def register(
        self,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> Result[AuthPayload]:
        """
        Create a user and return its public fields plus a fresh token.

        Username and email are stored exactly as given.  A collision on
        either one yields the same conflict message.
        """
        if not username or not email or not password:
            return Result.failure(ErrorKind.VALIDATION, "All fields are required")

        try:
            result = await self._session.execute(
                select(User.id)
                .where(or_(User.email == email, User.username == username))
                .limit(1)
            )
            if result.scalar_one_or_none() is not None:
                return Result.failure(ErrorKind.CONFLICT, "User already exists")

            password_hash = await asyncio.to_thread(
                hash_password, password, self._bcrypt_rounds
            )
            user = User(username=username, email=email, password=password_hash)
            self._session.add(user)
            await self._session.flush()
            await self._session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Registration failed")
            await self._session.rollback()
            return Result.failure(ErrorKind.SERVER, "Registration failed", str(exc))

        logger.info("Registered user %s (%s)", user.username, user.id)
        return Result.success(
            AuthPayload(
                message="User registered successfully",
                user=PublicUser.model_validate(user),
                token=self._issue(user),
            )
        )

    async def login(
        self,
        email: Optional[str],
        password: Optional[str],
    ) -> Result[AuthPayload]:
        """Login with email + password.  Unknown email and wrong password look the same."""
        if not email or not password:
            return Result.failure(ErrorKind.VALIDATION, "Email and password are required")

        try:
            result = await self._session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("Login failed")
            return Result.failure(ErrorKind.SERVER, "Login failed", str(exc))

        if user is None:
            return Result.failure(ErrorKind.AUTH, _INVALID_CREDENTIALS)

        matches = await asyncio.to_thread(verify_password, password, user.password)
        if not matches:
            return Result.failure(ErrorKind.AUTH, _INVALID_CREDENTIALS)

        logger.info("Login: %s (%s)", user.username, user.id)
        return Result.success(
            AuthPayload(
                message="Login successful",
                user=PublicUser.model_validate(user),
                token=self._issue(user),
            )
        )
