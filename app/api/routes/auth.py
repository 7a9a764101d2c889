"""Authentication API endpoints."""

from fastapi import APIRouter, status

from app.core.deps import DBSession
from app.schemas.auth import RegisterResponse, Token, UserLogin, UserRegister
from app.services.auth_service import AuthService

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    data: UserRegister,
    db: DBSession,
) -> RegisterResponse:
    """
    Create a new account.

    - **username**: 3-100 letters, digits or underscores
    - **password**: at least 6 characters
    """
    auth_service = AuthService(db)
    user = await auth_service.register(data.username, data.password)
    return RegisterResponse(user=user)


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    db: DBSession,
) -> Token:
    """
    Login and get JWT access token (valid for 7 days).

    - **username**: Username
    - **password**: User password
    """
    auth_service = AuthService(db)
    return await auth_service.login(credentials.username, credentials.password)
