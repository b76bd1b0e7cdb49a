"""
Tests for ibge_api/services/user_service.py against a SQLite database.
"""

import threading

import pytest
from sqlalchemy import func, select

from ibge_api.database.models.user import User
from ibge_api.database.repositories.user import UserRepository
from ibge_api.models.user_models import CredentialsDTO, UserDTO
from ibge_api.services.errors import PersistenceError, UnauthenticatedError, ValidationError
from ibge_api.services.password_hasher import PasswordHasher
from ibge_api.services.user_service import UserService


class TestUserServiceCreate:
    """Tests for registration."""

    @pytest.mark.asyncio
    async def test_create_stores_hash_not_password(self, session, hasher):
        service = UserService(session, hasher)

        assert await service.create(UserDTO(email="A@B.com", password="secret", name="Ana")) == 1

        user = await UserRepository(session).get_by_email("a@b.com")
        assert user.email == "a@b.com"
        assert user.name == "Ana"
        assert user.password_hash != "secret"
        assert hasher.verify("secret", user.password_hash)

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_and_keeps_original(self, session, hasher):
        service = UserService(session, hasher)
        await service.create(UserDTO(email="a@b.com", password="secret"))

        with pytest.raises(PersistenceError):
            await service.create(UserDTO(email="A@b.com", password="other"))

        user = await UserRepository(session).get_by_email("a@b.com")
        assert hasher.verify("secret", user.password_hash)
        total = await session.scalar(select(func.count()).select_from(User))
        assert total == 1

    @pytest.mark.asyncio
    async def test_invalid_payload_raises_validation_error(self, session, hasher):
        with pytest.raises(ValidationError) as exc_info:
            await UserService(session, hasher).create(UserDTO(email="nope"))

        assert set(exc_info.value.errors) == {"email", "password"}


class TestUserServiceLogin:
    """Tests for credential verification."""

    @pytest.mark.asyncio
    async def test_correct_credentials_return_user(self, session, hasher):
        service = UserService(session, hasher)
        await service.create(UserDTO(email="a@b.com", password="secret"))

        user = await service.get_by_email_and_password(
            CredentialsDTO(email="a@b.com", password="secret")
        )

        assert user.email == "a@b.com"

    @pytest.mark.asyncio
    async def test_wrong_password_raises_unauthenticated(self, session, hasher):
        service = UserService(session, hasher)
        await service.create(UserDTO(email="a@b.com", password="secret"))

        with pytest.raises(UnauthenticatedError) as exc_info:
            await service.get_by_email_and_password(
                CredentialsDTO(email="a@b.com", password="wrong")
            )

        # Login failures map to 400, not 401
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_email_raises_unauthenticated(self, session, hasher):
        with pytest.raises(UnauthenticatedError):
            await UserService(session, hasher).get_by_email_and_password(
                CredentialsDTO(email="ghost@b.com", password="secret")
            )

    @pytest.mark.asyncio
    async def test_inactive_user_cannot_log_in(self, session, hasher):
        service = UserService(session, hasher)
        await service.create(UserDTO(email="a@b.com", password="secret"))
        user = await UserRepository(session).get_by_email("a@b.com")
        user.is_active = False
        await session.commit()

        with pytest.raises(UnauthenticatedError):
            await service.get_by_email_and_password(
                CredentialsDTO(email="a@b.com", password="secret")
            )

    @pytest.mark.asyncio
    async def test_missing_password_raises_validation_error(self, session, hasher):
        with pytest.raises(ValidationError):
            await UserService(session, hasher).get_by_email_and_password(
                CredentialsDTO(email="a@b.com")
            )

    @pytest.mark.asyncio
    async def test_unencodable_password_is_rejected_not_crashed(self, session, hasher):
        service = UserService(session, hasher)
        await service.create(UserDTO(email="a@b.com", password="secret"))

        with pytest.raises(UnauthenticatedError):
            await service.get_by_email_and_password(
                CredentialsDTO(email="a@b.com", password="\ud800")
            )


class RecordingHasher(PasswordHasher):
    """Hasher that remembers which threads ran bcrypt."""

    def __init__(self):
        super().__init__(rounds=4)
        self.threads = []

    def hash(self, password):
        self.threads.append(threading.get_ident())
        return super().hash(password)

    def verify(self, password, hashed):
        self.threads.append(threading.get_ident())
        return super().verify(password, hashed)


class TestUserServiceHashingThread:
    """bcrypt runs in a worker thread so the event loop keeps serving requests."""

    @pytest.mark.asyncio
    async def test_hash_and_verify_run_off_the_event_loop(self, session):
        hasher = RecordingHasher()
        service = UserService(session, hasher)

        await service.create(UserDTO(email="a@b.com", password="secret"))
        await service.get_by_email_and_password(
            CredentialsDTO(email="a@b.com", password="secret")
        )

        loop_thread = threading.get_ident()
        assert len(hasher.threads) == 2
        assert loop_thread not in hasher.threads
