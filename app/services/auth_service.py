"""Auth service for registration and login."""

import re

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import Conflict, InvalidInput, Unauthorized
from app.core.security import create_access_token
from app.schemas.auth import Token, UserPublic
from app.services.user_service import UserService

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6

# Same message for unknown user and wrong password
INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:
    """Authentication service."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_service = UserService(db)

    async def register(self, username: str, password: str) -> UserPublic:
        """Create an account. A taken username is reported first."""
        if await self.user_service.get_by_username(username):
            raise Conflict("Username already exists", field="username")

        if len(password) < PASSWORD_MIN_LENGTH:
            raise InvalidInput(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
                field="password",
            )
        if len(username) < USERNAME_MIN_LENGTH:
            raise InvalidInput(
                f"Username must be at least {USERNAME_MIN_LENGTH} characters long",
                field="username",
            )
        if len(username) > USERNAME_MAX_LENGTH:
            raise InvalidInput(
                f"Username must be at most {USERNAME_MAX_LENGTH} characters long",
                field="username",
            )
        if not USERNAME_PATTERN.match(username):
            raise InvalidInput(
                "Username can only contain letters, numbers, and underscores",
                field="username",
            )

        try:
            user = await self.user_service.create_user(username, password)
        except IntegrityError:
            # Lost a race with a concurrent registration
            await self.db.rollback()
            raise Conflict("Username already exists", field="username")

        logger.info(f"User {user.username} registered")
        return UserPublic.model_validate(user)

    async def login(self, username: str, password: str) -> Token:
        """Authenticate user and return a signed bearer token."""
        if not username or not password:
            raise InvalidInput(
                "Username and password are required",
                field="username" if not username else "password",
            )

        user = await self.user_service.authenticate(username, password)
        if not user:
            raise Unauthorized(INVALID_CREDENTIALS)

        token = create_access_token(
            data={
                "sub": user.id,
                "username": user.username,
            }
        )
        logger.info(f"User {user.username} logged in")
        return Token(user=UserPublic.model_validate(user), token=token)
