"""Authentication service for login, registration, and introspection."""

from typing import Annotated

import structlog
from fastapi import Depends

from machine_emu.api.dependencies import DBSession
from machine_emu.config import settings
from machine_emu.core.auth.backend import (
    create_access_token,
    hash_password,
    verify_password,
)
from machine_emu.core.auth.schemas import AccessToken, TokenData
from machine_emu.core.errors import UnauthorizedError
from machine_emu.core.permissions.resolver import PermissionResolver
from machine_emu.modules.users.models import User
from machine_emu.modules.users.repos import UserRepository
from machine_emu.modules.users.schemas import MeResponse


logger = structlog.get_logger()


class AuthService:
    """Service for authentication operations.

    Handles self-registration, login (credential issuing) and the
    "who am I" introspection of an issued token.
    """

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.resolver = PermissionResolver(db)

    async def register(self, user_name: str, password: str) -> User:
        """Register a new user with no roles.

        Args:
            user_name: Desired user name
            password: Plain text password

        Returns:
            The created user

        Raises:
            ConflictError: If the user name is taken
        """
        await self.user_repo.ensure_name_available(user_name)
        user = User(user_name=user_name, password_hash=hash_password(password))
        user = await self.user_repo.create(user)
        logger.info("user_registered", user_id=user.id, user_name=user.user_name)
        return user

    async def login(self, user_name: str, password: str) -> tuple[User, AccessToken]:
        """Authenticate a user and issue an access token.

        Unknown user names and wrong passwords produce the same error, so
        callers cannot probe which user names exist.

        Args:
            user_name: Exact (case-sensitive) user name
            password: Plain text password

        Returns:
            Tuple of (user, access token)

        Raises:
            UnauthorizedError: If credentials are invalid
        """
        user = await self.user_repo.get_by_user_name(user_name)
        password_hash = user.password_hash if user else None

        if not verify_password(password, password_hash) or user is None:
            logger.info("login_failed", user_name=user_name)
            raise UnauthorizedError(
                "Invalid user name or password",
                error_code="invalid_credentials",
            )

        permissions = await self.resolver.resolve(user.id)
        token = self._create_token(user, permissions)
        logger.info(
            "user_logged_in",
            user_id=user.id,
            permission_count=len(permissions),
        )
        return user, token

    async def introspect(self, token_data: TokenData) -> MeResponse:
        """Describe the caller behind a validated token.

        Permissions are the token's own snapshot, the same set every
        authorization decision uses. Roles are not carried in the token and
        are read from the store at call time.

        Args:
            token_data: Validated token claims

        Returns:
            The caller's identity, current roles and token permissions

        Raises:
            UnauthorizedError: If the token's subject no longer exists
        """
        user = await self.user_repo.get_by_id(token_data.user_id)
        if not user:
            raise UnauthorizedError(
                "User not found",
                error_code="user_not_found",
            )

        return MeResponse(
            id=user.id,
            user_name=user.user_name,
            roles=await self.resolver.resolve_roles(user.id),
            permissions=sorted(token_data.permissions),
        )

    def _create_token(self, user: User, permissions: set[str]) -> AccessToken:
        access_token = create_access_token(user.id, user.user_name, permissions)
        return AccessToken(
            access_token=access_token,
            expires_in=settings.access_token_expire_minutes * 60,
            permissions=sorted(permissions),
        )


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
