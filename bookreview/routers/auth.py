"""
Authentication Router

Handles user authentication endpoints:
- Registration (email/password, role is always USER)
- Login (email/password → JWT access token)
- Get current user (from JWT token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Login failures return one generic message for unknown email and wrong
  password alike
- Registration and login share the strict rate_limit_auth limit
"""

from fastapi import APIRouter, Request, status

from bookreview.config import get_settings
from bookreview.dependencies import AuthServiceDep, CurrentUser
from bookreview.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    SuccessResponse,
    UserCreate,
    UserData,
)
from bookreview.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Unauthorized"},
    },
)


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=SuccessResponse[UserData],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a new user account with name, email and password.

    **Requirements:**
    - name: 2-100 characters
    - email: valid address, not already registered
    - password: 6-72 characters

    New accounts always get the USER role.
    """,
    responses={409: {"model": ErrorResponse, "description": "Email already in use"}},
)
@limiter.limit(settings.rate_limit_auth)
def register(
    request: Request,
    user_data: UserCreate,
    auth: AuthServiceDep,
) -> SuccessResponse[UserData]:
    """Register a new user; the response never includes the password hash."""
    user = auth.register(user_data.name, user_data.email, user_data.password)
    return SuccessResponse[UserData](data=UserData(user=user))


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login with email and password",
    description="""
    Authenticate and receive a JWT access token.

    Use the token in the Authorization header:
    `Authorization: Bearer <token>`
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    credentials: LoginRequest,
    auth: AuthServiceDep,
) -> LoginResponse:
    user, token = auth.login(credentials.email, credentials.password)
    return LoginResponse(token=token, data=UserData(user=user))


# -------------------------------------------------------------------------
# Current User Endpoint
# -------------------------------------------------------------------------
@router.get(
    "/me",
    response_model=SuccessResponse[UserData],
    summary="Get current user",
    description="Get the profile of the currently authenticated user.",
)
def get_me(current_user: CurrentUser) -> SuccessResponse[UserData]:
    return SuccessResponse[UserData](data=UserData(user=current_user))
