"""Credential store: local sign-up and login, Google sign-in."""

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from starlette.concurrency import run_in_threadpool
from typing import Dict, Optional
from uuid import uuid4
import logging

from lexcase.models import AuthProvider, User
from lexcase.services.google import GoogleIdentity
from lexcase.services.security import hash_password, verify_password
from lexcase.utils.errors import Conflict, InvalidCredentials

__all__ = [
    "normalize_email",
    "get_user",
    "get_user_by_email",
    "get_users_by_ids",
    "register",
    "authenticate_local",
    "authenticate_google",
]

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user(db: AsyncSession, user_id: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def register(db: AsyncSession, name: str, email: str, password: str) -> User:
    """Create a local account.

    The unique index on ``users.email`` decides duplicates, so two
    concurrent sign-ups for one address cannot both succeed.
    """
    password_hash = await run_in_threadpool(hash_password, password)
    user = User(
        id=str(uuid4()),
        name=name.strip(),
        email=normalize_email(email),
        password_hash=password_hash,
        auth_provider=AuthProvider.LOCAL,
        avatar="",
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise Conflict("User already exists with this email")
    await db.refresh(user)

    logger.info(f"[users] Registered user: {user.id}")
    return user


async def authenticate_local(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if user is None:
        raise InvalidCredentials()

    if not user.can_use_password():
        raise InvalidCredentials(
            "This account was created with Google. Please sign in with Google."
        )

    if not await run_in_threadpool(verify_password, password, user.password_hash):
        logger.info(f"[users] Failed password login for user: {user.id}")
        raise InvalidCredentials()

    return user


async def _find_federated(db: AsyncSession, identity: GoogleIdentity) -> Optional[User]:
    stmt = select(User).where(
        or_(User.google_id == identity.google_id, User.email == identity.email)
    )
    result = await db.execute(stmt)
    users = result.scalars().all()
    # A google_id match wins over an email match
    for user in users:
        if user.google_id == identity.google_id:
            return user
    return users[0] if users else None


async def authenticate_google(db: AsyncSession, identity: GoogleIdentity) -> User:
    """Find, link or create the account behind a verified Google identity."""
    user = await _find_federated(db, identity)

    if user is not None:
        if not user.google_id and user.email == identity.email:
            user.google_id = identity.google_id
            user.avatar = identity.picture or user.avatar
            await db.commit()
            await db.refresh(user)
            logger.info(f"[users] Linked Google account to user: {user.id}")
        return user

    user = User(
        id=str(uuid4()),
        name=identity.name,
        email=identity.email,
        google_id=identity.google_id,
        avatar=identity.picture or "",
        auth_provider=AuthProvider.GOOGLE,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent first login; use the stored row
        await db.rollback()
        existing = await _find_federated(db, identity)
        if existing is None:
            raise
        return existing
    await db.refresh(user)

    logger.info(f"[users] Created Google user: {user.id}")
    return user


async def get_users_by_ids(db: AsyncSession, user_ids) -> Dict[str, User]:
    """Map each id in ``user_ids`` to its User, skipping unknown ids."""
    ids = {uid for uid in user_ids if uid}
    if not ids:
        return {}
    result = await db.execute(select(User).where(User.id.in_(ids)))
    return {user.id: user for user in result.scalars().all()}
