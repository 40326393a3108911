"""Auth middleware - resolves the acting user from a bearer token."""

from dataclasses import dataclass

import falcon.asgi

ANONYMOUS_USER_ID = "anonymous"


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Middleware that validates the bearer token and sets req.context.user.

    Without a Keycloak provider (development mode) every request runs as the
    anonymous user. With one, a missing or inactive token leaves user as None.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        if not self._keycloak:
            req.context.user = RequestUser(user_id=ANONYMOUS_USER_ID)
            return

        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer "):
            return
        user = self._keycloak.decode_token(auth[7:])
        if user:
            req.context.user = RequestUser(
                user_id=user.user_id,
                email=user.email,
                username=user.username,
            )
