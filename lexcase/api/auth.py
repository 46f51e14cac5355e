from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from lexcase.api.deps import get_current_user, get_google_verifier
from lexcase.database import get_db
from lexcase.models import User
from lexcase.schemas import (
    AuthResponse,
    GoogleAuthRequest,
    LoginRequest,
    ProfileResponse,
    SignupRequest,
    UserPublic,
)
from lexcase.services import users
from lexcase.services.google import GoogleVerifier
from lexcase.services.security import create_access_token
from lexcase.utils.errors import InternalError, LexCaseError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User, message: str = None) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=create_access_token(user.id),
        user=UserPublic.model_validate(user),
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """Register a new user"""
    try:
        user = await users.register(db, body.name, body.email, body.password)
        return _auth_response(user, "User registered successfully")
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[auth] Signup error: {e}")
        await db.rollback()
        raise InternalError("Error creating user")


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Login with email and password"""
    try:
        user = await users.authenticate_local(db, body.email, body.password)
        return _auth_response(user, "Login successful")
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[auth] Login error: {e}")
        raise InternalError("Error logging in")


@router.post("/google", response_model=AuthResponse)
async def google_auth(
    body: GoogleAuthRequest,
    db: AsyncSession = Depends(get_db),
    verifier: GoogleVerifier = Depends(get_google_verifier),
):
    """Sign in with a Google ID token, creating or linking the account"""
    try:
        identity = await verifier.verify(body.credential)
        user = await users.authenticate_google(db, identity)
        return _auth_response(user, "Google authentication successful")
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[auth] Google auth error: {e}")
        await db.rollback()
        raise InternalError("Error authenticating with Google")


@router.get("/me", response_model=ProfileResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Get current user"""
    return ProfileResponse(user=UserPublic.model_validate(current_user))


@router.post("/refresh", response_model=AuthResponse)
async def refresh(current_user: User = Depends(get_current_user)):
    """Issue a fresh token for the authenticated user"""
    return _auth_response(current_user)
