from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from lexcase.database import get_db
from lexcase.models import User
from lexcase.services import users
from lexcase.services.google import GoogleVerifier
from lexcase.services.security import decode_access_token
from lexcase.services.storage import StorageService
from lexcase.utils.errors import Unauthenticated

# Errors are raised here rather than by HTTPBearer so they use the envelope
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Validate the bearer token and return the user it was issued to.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Not authorized, no token")

    user_id = decode_access_token(credentials.credentials)

    user = await users.get_user(db, user_id)
    if user is None:
        raise Unauthenticated("User not found")

    return user


def get_storage(request: Request) -> StorageService:
    return request.app.state.storage


def get_google_verifier(request: Request) -> GoogleVerifier:
    return request.app.state.google_verifier
