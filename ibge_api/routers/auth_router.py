"""
Authentication router: user registration and login.

Both endpoints are anonymous. Login failures answer 400, not 401.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ibge_api.database.connection import get_db
from ibge_api.middleware.auth import get_password_hasher, get_token_service
from ibge_api.models.user_models import CredentialsDTO, UserDTO, UserResponse
from ibge_api.services.password_hasher import PasswordHasher
from ibge_api.services.token_service import TokenService
from ibge_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["User"])


def get_user_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(db, hasher)


@router.post(
    "/login",
    response_model=str,
    name="user_login",
    responses={400: {"description": "Invalid payload or wrong credentials"}},
)
async def login(
    credentials: CredentialsDTO,
    user_service: UserService = Depends(get_user_service),
    token_service: TokenService = Depends(get_token_service),
) -> str:
    """
    Authenticate with email and password.

    Returns:
        Signed bearer token as a JSON string
    """
    user = await user_service.get_by_email_and_password(credentials)
    return token_service.create_token(user)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    name="user_register",
    responses={400: {"description": "Invalid payload or email already registered"}},
)
async def register(
    user: UserDTO,
    request: Request,
    response: Response,
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Register a new user.

    Returns:
        The registered email and name, with a Location header pointing to /login
    """
    result = await user_service.create(user)

    if result <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An error ocurred while saving the user",
        )

    response.headers["Location"] = str(request.url_for("user_login"))
    return UserResponse(email=user.email.strip().lower(), name=user.name)
