import logging

from django.contrib.auth import authenticate, get_user_model
from ninja import Router
from ninja_jwt.exceptions import TokenError
from ninja_jwt.tokens import RefreshToken

from core.utils.responses import error_response
from .schemas import AuthErrorSchema, LoginSchema, RefreshSchema, TokenSchema
from .utils import create_token_pair

logger = logging.getLogger(__name__)
router = Router()
User = get_user_model()


@router.post("/login", response={200: TokenSchema, 401: AuthErrorSchema})
def login(request, payload: LoginSchema):
    """Authenticate with username and password, return access/refresh tokens."""
    user = authenticate(username=payload.username, password=payload.password)
    if user is None:
        return 401, error_response("Invalid credentials", code=401)
    if not user.is_active:
        return 401, error_response("User account is disabled", code=401)
    return create_token_pair(user)


@router.post("/refresh", response={200: TokenSchema, 401: AuthErrorSchema})
def refresh_token(request, payload: RefreshSchema):
    """Exchange a refresh token for a new token pair."""
    try:
        refresh = RefreshToken(payload.refresh)
    except TokenError as exc:
        return 401, error_response(f"Invalid refresh token: {exc}", code=401)

    user = User.objects.filter(id=refresh.payload.get("user_id")).first()
    if user is None or not user.is_active:
        logger.info("Refresh rejected for user %s", refresh.payload.get("user_id"))
        return 401, error_response("User not found or disabled", code=401)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
        "user_id": user.id,
        "username": user.username,
    }
