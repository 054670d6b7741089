"""
Authentication endpoints: registration and login.

Neither route requires a token.  Login failures never reveal whether
the username exists.
"""

from fastapi import APIRouter, Depends, status

from beetrail_api.app.api.deps import get_user_service
from beetrail_api.app.core.context import AppContext, get_context
from beetrail_api.app.core.errors import AuthError
from beetrail_api.app.core.security import create_access_token, now_ms
from beetrail_api.app.schemas.common import MessageResponse
from beetrail_api.app.schemas.user import TokenResponse, UserCreate, UserLogin
from beetrail_api.app.services.user_service import UserService


router = APIRouter()


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid input or username already exists."}},
)
async def register_user(
    user: UserCreate,
    users: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Register a new user.

    Passwords must be at least six characters; ``role`` is either
    ``beekeeper`` or ``admin``.  No token is returned; call
    ``/auth/login`` afterwards.
    """
    await users.register(user)
    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={400: {"description": "Invalid credentials."}},
)
async def login_user(
    credentials: UserLogin,
    users: UserService = Depends(get_user_service),
    ctx: AppContext = Depends(get_context),
) -> TokenResponse:
    """Log in and obtain a JWT valid for one hour.

    The response also carries ``issuedSyncToken``, the server time at
    login, which clients can compare against ``/sync`` later.
    """
    user = await users.authenticate(credentials.username, credentials.password)
    if user is None:
        raise AuthError("Invalid credentials", status_code=status.HTTP_400_BAD_REQUEST)
    sync_token = now_ms()
    token = create_access_token(
        {
            "sub": user.username,
            "id": user.id,
            "username": user.username,
            "role": user.role,
            "issuedSyncToken": sync_token,
        },
        ctx.settings,
    )
    return TokenResponse(token=token, issued_sync_token=sync_token)
