"""Registration, login and profile endpoints."""
from fastapi import APIRouter, Depends, Request, status

from promptchat.core.security import create_access_token, get_current_user
from promptchat.interfaces.http.deps import get_user_service
from promptchat.interfaces.http.rate_limit import auth_limit, limiter
from promptchat.modules.users import User, UserCreateInput, UserService
from promptchat.schemas import (
    AuthData,
    AuthResponse,
    LoginRequest,
    ProfileData,
    ProfileResponse,
    RegisterRequest,
    UserResponse,
)

router = APIRouter()


def _auth_response(user: User, message: str) -> AuthResponse:
    token = create_access_token(user.id, user.email, user.role)
    return AuthResponse(
        message=message,
        data=AuthData(user=UserResponse.model_validate(user), token=token),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, summary="Register a user")
@limiter.limit(auth_limit)
async def register(
    request: Request,
    payload: RegisterRequest,
    user_service: UserService = Depends(get_user_service),
) -> AuthResponse:
    user = await user_service.register(
        UserCreateInput(name=payload.name, email=payload.email, password=payload.password)
    )
    return _auth_response(user, "User registered successfully")


@router.post("/login", response_model=AuthResponse, summary="Log in with email and password")
@limiter.limit(auth_limit)
async def login(
    request: Request,
    payload: LoginRequest,
    user_service: UserService = Depends(get_user_service),
) -> AuthResponse:
    user = await user_service.authenticate(payload.email, payload.password)
    return _auth_response(user, "Login successful")


@router.get("/profile", response_model=ProfileResponse, summary="Current user profile")
async def profile(user: User = Depends(get_current_user)) -> ProfileResponse:
    return ProfileResponse(
        message="Profile retrieved",
        data=ProfileData(user=UserResponse.model_validate(user)),
    )
