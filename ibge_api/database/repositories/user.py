"""
User repository for registration and login.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ibge_api.database.models.user import User
from ibge_api.database.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model with authentication-specific methods."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with session."""
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: User's email address (matched lower-cased)

        Returns:
            User instance or None if not found
        """
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def create_user(
        self,
        email: str,
        password_hash: str,
        name: Optional[str] = None,
    ) -> User:
        """
        Create a new user.

        Args:
            email: User's email, stored lower-cased
            password_hash: bcrypt hash of the password
            name: Optional display name

        Returns:
            Created User instance
        """
        user = User(
            email=email.lower(),
            password_hash=password_hash,
            name=name,
        )
        return await self.create(user)
