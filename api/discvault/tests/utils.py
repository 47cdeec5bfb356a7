"""Shared helpers for API tests."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from httpx import AsyncClient

from discvault.core.config import settings

API = settings.api_prefix
PASSWORD = "supersecret123"


@dataclass(slots=True)
class AuthContext:
    """Authenticated client context for API tests."""

    client: AsyncClient
    user: dict[str, Any]
    email: str
    password: str
    token: str

    @property
    def user_id(self) -> str:
        return str(self.user["id"])

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def _credentials(prefix: str) -> dict[str, str]:
    suffix = uuid.uuid4().hex[:8]
    return {"username": f"{prefix}_{suffix}", "email": f"{prefix}_{suffix}@example.com", "password": PASSWORD}


async def register_and_login(client: AsyncClient, *, prefix: str = "user") -> AuthContext:
    """Register and log in a new regular user, returning the auth context."""
    creds = _credentials(prefix)
    register_res = await client.post(f"{API}/auth/register", json=creds)
    assert register_res.status_code == 200
    user = register_res.json()["user"]

    login_res = await client.post(f"{API}/auth/login", json={"email": creds["email"], "password": PASSWORD})
    assert login_res.status_code == 200
    return AuthContext(
        client=client, user=user, email=creds["email"], password=PASSWORD, token=login_res.json()["access_token"]
    )


async def install_admin(client: AsyncClient) -> AuthContext:
    """Run first-time setup and return the resulting administrator."""
    creds = _credentials("admin")
    res = await client.post(f"{API}/setup/install", json=creds)
    assert res.status_code == 201
    body = res.json()
    return AuthContext(
        client=client, user=body["user"], email=creds["email"], password=PASSWORD, token=body["access_token"]
    )


async def create_with_role(client: AsyncClient, admin: AuthContext, role: str) -> AuthContext:
    """Have ``admin`` create an account with ``role`` and log it in."""
    creds = _credentials(role)
    res = await client.post(f"{API}/admin/users", json={**creds, "role": role}, headers=admin.headers)
    assert res.status_code == 201
    login_res = await client.post(f"{API}/auth/login", json={"email": creds["username"], "password": PASSWORD})
    assert login_res.status_code == 200
    body = login_res.json()
    return AuthContext(
        client=client, user=body["user"], email=creds["email"], password=PASSWORD, token=body["access_token"]
    )
