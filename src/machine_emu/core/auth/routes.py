"""Authentication API routes.

Provides endpoints for:
- Login (credential issuing)
- Self-registration
- Introspection of the presented token
"""

from fastapi import APIRouter, status

from machine_emu.core.auth.dependencies import CurrentPrincipal
from machine_emu.core.auth.service import AuthSvc
from machine_emu.modules.users.schemas import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    RegisterRequest,
    RegisterResponse,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login with user name and password",
    description=(
        "Authenticate and receive a signed bearer token carrying a snapshot of "
        "the caller's permissions. Role changes take effect at the next login."
    ),
)
async def login(data: LoginRequest, service: AuthSvc) -> LoginResponse:
    """Login with user name and password."""
    _user, token = await service.login(
        user_name=data.user_name,
        password=data.password,
    )

    return LoginResponse(
        access_token=token.access_token,
        token_type=token.token_type,
        expires_in=token.expires_in,
        permissions=token.permissions,
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a user account with no roles. Fails with 409 if the name is taken.",
)
async def register(data: RegisterRequest, service: AuthSvc) -> RegisterResponse:
    """Register a new user."""
    user = await service.register(user_name=data.user_name, password=data.password)
    return RegisterResponse(id=user.id, user_name=user.user_name)


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Describe the current caller",
    description=(
        "Return the caller's identity, current role names, and the permissions "
        "carried by the presented token."
    ),
)
async def me(principal: CurrentPrincipal, service: AuthSvc) -> MeResponse:
    """Introspect the presented token."""
    return await service.introspect(principal)
