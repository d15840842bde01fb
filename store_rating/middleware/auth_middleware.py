from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from store_rating.auth.utils import verify_token
from store_rating.core.config import get_settings


def extract_token(request: Request) -> Optional[str]:
    """Session token from the cookie, falling back to a bearer header."""
    token = request.cookies.get(get_settings().COOKIE_NAME)
    if token:
        return token
    auth: Optional[str] = request.headers.get("Authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None


class AuthMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.user = None  # anonymous unless a valid token is presented

        token = extract_token(request)
        if token:
            request.state.user = verify_token(token)

        response = await call_next(request)
        return response
