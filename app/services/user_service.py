"""User service for credential storage and lookup."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_password_hash, verify_password
from app.models.user import User
from app.services.base_service import BaseService


class UserService(BaseService[User]):
    """User service for authentication and account creation."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username."""
        result = await self.db.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def authenticate(self, username: str, password: str) -> User | None:
        """Authenticate user by username and password."""
        user = await self.get_by_username(username)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    async def create_user(self, username: str, password: str) -> User:
        """Create new user with a hashed password."""
        user = User(
            id=str(uuid.uuid4()),
            username=username,
            hashed_password=get_password_hash(password),
        )
        return await self.create(user)
