"""Helpers shared by the API tests."""

from httpx import AsyncClient

from machine_emu.core.auth.backend import create_access_token


async def login(client: AsyncClient, user_name: str, password: str) -> dict[str, str]:
    """Log in through the API and return bearer headers."""
    response = await client.post(
        "/api/v1/auth/login",
        json={"user_name": user_name, "password": password},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def bearer(user_id: int, user_name: str, permissions: list[str]) -> dict[str, str]:
    """Mint bearer headers directly, bypassing login."""
    token = create_access_token(user_id, user_name, permissions)
    return {"Authorization": f"Bearer {token}"}
