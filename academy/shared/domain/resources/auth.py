"""Auth resource: login, current user, logout."""

from __future__ import annotations

from typing import Optional, Tuple

from academy.shared.core.errors import (
    InvalidCredentials,
    Operation,
    RequestFailed,
    Unauthenticated,
)
from academy.shared.domain.models import User

from .base import ResourceClient


class AuthClient(ResourceClient):

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """Exchange credentials for ``(user, token)``.

        Raises:
            InvalidCredentials: Any rejection, carrying the server message when sent
        """
        try:
            data = await self.api.request(
                Operation.LOGIN,
                "POST",
                "/auth/login",
                auth=False,
                json={"email": email, "password": password},
            )
        except (RequestFailed, Unauthenticated) as e:
            raise InvalidCredentials(e.message) from e

        if not isinstance(data, dict) or not data.get("token"):
            raise InvalidCredentials("Login response carried no token")
        user = self._parse(User, data.get("user"), Operation.LOGIN)
        return user, data["token"]

    async def me(self) -> User:
        """Raises ``Unauthenticated`` for any rejection."""
        try:
            data = await self.api.request(Operation.CURRENT_USER, "GET", "/auth/me")
        except RequestFailed as e:
            raise Unauthenticated(e.message) from e
        payload = data.get("user") if isinstance(data, dict) else None
        return self._parse(User, payload, Operation.CURRENT_USER)

    async def logout(self, token: Optional[str]) -> None:
        """Notify the server; the caller has already dropped the token locally."""
        await self.api.request(Operation.LOGOUT, "POST", "/auth/logout", token=token)
