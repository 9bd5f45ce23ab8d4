"""Authorization guard for route protection.

Every protected operation declares either exactly one required permission
(``require_permission``) or, explicitly, none (``require_authentication``).
Decisions are made from the permission claims of the presented token only;
the store is never consulted here.
"""

import inspect
from collections.abc import Awaitable, Callable
from enum import StrEnum
from functools import wraps
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar, cast

import structlog
from fastapi import Depends, Request

from machine_emu.core.auth.dependencies import CurrentPrincipal
from machine_emu.core.errors import ForbiddenError, UnauthorizedError
from machine_emu.core.permissions.policies import PermissionName


if TYPE_CHECKING:
    from machine_emu.core.auth.schemas import TokenData


logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


class Decision(StrEnum):
    """Outcome of an authorization check."""

    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


def evaluate(
    principal: "TokenData | None",
    required: PermissionName | None,
) -> Decision:
    """Decide whether a principal may invoke an operation.

    Args:
        principal: Validated token claims, or None if no valid token was presented
        required: The operation's required permission, or None if it only
            needs an authenticated caller

    Returns:
        The authorization decision
    """
    if principal is None:
        return Decision.UNAUTHENTICATED
    if required is None or principal.has_permission(required):
        return Decision.ALLOW
    return Decision.FORBIDDEN


def enforce(
    principal: "TokenData | None",
    required: PermissionName | None,
    endpoint: str = "unknown",
) -> None:
    """Raise unless ``evaluate`` allows the call.

    Raises:
        UnauthorizedError: If there is no valid principal
        ForbiddenError: If the principal lacks the required permission
    """
    decision = evaluate(principal, required)
    if decision is Decision.ALLOW:
        return

    logger.warning(
        "authorization_denied",
        decision=decision.value,
        permission=required.value if required else None,
        user_id=principal.user_id if principal else None,
        endpoint=endpoint,
    )

    if decision is Decision.UNAUTHENTICATED:
        raise UnauthorizedError(
            "Authentication required",
            error_code="auth_required",
        )

    raise ForbiddenError(
        f"Missing required permission: {required}",
        error_code="permission_denied",
        details={"required_permission": str(required)},
    )


# Keyword injected into guarded endpoints. FastAPI resolves dependencies
# before it parses the request body, so a denied caller never sees a 422.
GUARD_PARAMETER = "_authorization"


def _authorizer(required: PermissionName | None) -> Callable[..., Awaitable[Decision]]:
    async def dependency(principal: CurrentPrincipal, request: Request) -> Decision:
        enforce(principal, required, endpoint=request.url.path)
        return Decision.ALLOW

    return dependency


def _guard(
    required: PermissionName | None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    authorizer = _authorizer(required)

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            # Direct calls (no FastAPI dependency resolution) are checked here
            if kwargs.pop(GUARD_PARAMETER, None) is not Decision.ALLOW:
                principal = cast("TokenData | None", kwargs.get("principal"))
                request = cast("Request | None", kwargs.get("request"))
                enforce(
                    principal,
                    required,
                    endpoint=request.url.path if request else func.__name__,
                )
            return await func(*args, **kwargs)

        signature = inspect.signature(func)
        guard_parameter = inspect.Parameter(
            GUARD_PARAMETER,
            inspect.Parameter.KEYWORD_ONLY,
            default=Depends(authorizer),
            annotation=Decision,
        )
        wrapper.__signature__ = signature.replace(  # type: ignore[attr-defined]
            parameters=[*signature.parameters.values(), guard_parameter]
        )
        wrapper.__required_permission__ = required  # type: ignore[attr-defined]
        return wrapper

    return decorator


def require_permission(
    permission: PermissionName,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator that requires a specific permission to access a route.

    The route must take a ``principal: CurrentPrincipal`` parameter.

    Usage:
        @router.post("/{car_id}/start")
        @require_permission(PermissionName.START_CAR)
        async def start_car(car_id: int, principal: CurrentPrincipal):
            ...

    Args:
        permission: The permission the caller's token must carry

    Returns:
        Decorator function
    """
    return _guard(permission)


def require_authentication() -> Callable[
    [Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]
]:
    """Decorator declaring that a route needs a valid token but no permission."""
    return _guard(None)


def permission_required(permission: PermissionName) -> Callable[..., Awaitable[Decision]]:
    """Build a dependency enforcing a permission for every route of a router.

    Usage:
        router = APIRouter(
            prefix="/users",
            dependencies=[Depends(permission_required(PermissionName.MANAGE_USERS))],
        )
    """
    dependency = _authorizer(permission)
    dependency.__required_permission__ = permission  # type: ignore[attr-defined]
    return dependency


def required_permission_of(endpoint: Any) -> PermissionName | None:
    """Return the permission declared on a guarded endpoint or dependency."""
    return getattr(endpoint, "__required_permission__", None)
