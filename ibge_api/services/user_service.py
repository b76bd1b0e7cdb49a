"""
Business logic for users: registration and credential checks.
"""

import asyncio
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ibge_api.database.models.user import User
from ibge_api.database.repositories.user import UserRepository
from ibge_api.models.user_models import CredentialsDTO, UserDTO
from ibge_api.services.errors import PersistenceError, UnauthenticatedError
from ibge_api.services.password_hasher import PasswordHasher
from ibge_api.services.validation import CREDENTIALS_RULES, USER_RULES, validate

logger = logging.getLogger(__name__)


class UserService:
    """Service for user registration and login."""

    def __init__(self, session: AsyncSession, hasher: PasswordHasher):
        """
        Initialize user service.

        Args:
            session: SQLAlchemy async session
            hasher: Password hasher shared by the application
        """
        self.session = session
        self.hasher = hasher
        self.user_repo = UserRepository(session)

    async def get_by_email_and_password(self, credentials: CredentialsDTO) -> User:
        """
        Verify credentials and return the matching user.

        Unknown emails, wrong passwords and inactive accounts are reported
        with the same error.

        Raises:
            ValidationError: If email or password is missing
            UnauthenticatedError: If the credentials do not match
        """
        validate(credentials, CREDENTIALS_RULES)

        user = await self.user_repo.get_by_email(credentials.email.strip())

        # bcrypt is CPU-bound; keep it off the event loop
        matches = user is not None and await asyncio.to_thread(
            self.hasher.verify, credentials.password, user.password_hash
        )
        if not matches:
            logger.warning(f"Failed login for {credentials.email}")
            raise UnauthenticatedError("User or password wrong")

        if not user.is_active:
            logger.warning(f"Login attempt on inactive account {user.email}")
            raise UnauthenticatedError("User or password wrong")

        logger.info(f"User authenticated: {user.email}")
        return user

    async def create(self, user: UserDTO) -> int:
        """
        Register a new user.

        Returns:
            Number of records written (1)

        Raises:
            ValidationError: If the payload breaks a field rule
            PersistenceError: If the email is taken or the write fails
        """
        validate(user, USER_RULES)

        email = user.email.strip().lower()
        if await self.user_repo.get_by_email(email):
            raise PersistenceError(f"Email {email} is already registered")

        password_hash = await asyncio.to_thread(self.hasher.hash, user.password)

        try:
            await self.user_repo.create_user(
                email=email,
                password_hash=password_hash,
                name=user.name,
            )
            await self.session.commit()
        except IntegrityError as e:
            # Concurrent registration with the same email
            await self.session.rollback()
            raise PersistenceError(f"Email {email} is already registered", cause=e)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to save user {email}: {e}")
            raise PersistenceError("An error ocurred while saving the user", cause=e)

        logger.info(f"Registered user {email}")
        return 1
