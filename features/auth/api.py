from typing import Any, Optional

from django.http import HttpRequest
from ninja.security import HttpBearer
from ninja_jwt.authentication import JWTAuth
from ninja_jwt.exceptions import AuthenticationFailed


class AuthBearer(HttpBearer):
    """Resolve the request user from a ninja-jwt access token."""

    def authenticate(self, request: HttpRequest, token: str) -> Optional[Any]:
        auth = JWTAuth()
        try:
            validated_token = auth.get_validated_token(token)
            user = auth.get_user(validated_token)
        except AuthenticationFailed:
            return None

        if user and user.is_active:
            request.user = user
            return user
        return None
