"""Authentication schemas for token handling."""

from datetime import datetime

from pydantic import BaseModel, Field


class TokenData(BaseModel):
    """Data extracted from a validated access token.

    This is the principal the authorization guard decides on. Its
    permission set is the snapshot taken at login, not live store state.

    Attributes:
        user_id: The subject's ID
        user_name: The subject's user name at issuance
        permissions: Permission names granted at issuance
        issued_at: Token issue time
        exp: Token expiration time
        type: Token type (always "access")
        jti: Unique token ID
    """

    user_id: int
    user_name: str
    permissions: frozenset[str] = Field(default_factory=frozenset)
    issued_at: datetime | None = None
    exp: datetime
    type: str = "access"
    jti: str | None = None

    def has_permission(self, permission: str) -> bool:
        """Check whether the token carries the given permission claim."""
        return permission in self.permissions


class AccessToken(BaseModel):
    """A freshly minted access token with its resolved permissions.

    Attributes:
        access_token: Signed JWT for API access
        token_type: Always "bearer"
        expires_in: Access token expiration in seconds
        permissions: Permission names embedded in the token
    """

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    permissions: list[str]
