"""Owner-scoped loading shared by every resource kind.

Each model exposes ``owned_by(user_id)``: a select that already follows
its owner chain (directly for a Case, through the parent Case for notes,
speeches and documents). Loading through it means a record the user does
not own is indistinguishable from one that does not exist.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Type, TypeVar

from lexcase.models import Case, User
from lexcase.utils.errors import NotFound

__all__ = ["find_owned", "get_owned", "get_owned_case", "list_owned"]

M = TypeVar("M")


async def find_owned(db: AsyncSession, model: Type[M], resource_id: str, user: User) -> Optional[M]:
    stmt = model.owned_by(user.id).where(model.id == resource_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_owned(
    db: AsyncSession,
    model: Type[M],
    resource_id: str,
    user: User,
    message: str = "Resource not found",
) -> M:
    """Load ``model`` by id through its owner chain or raise NotFound."""
    resource = await find_owned(db, model, resource_id, user)
    if resource is None:
        raise NotFound(message)
    return resource


async def get_owned_case(db: AsyncSession, case_id: str, user: User) -> Case:
    return await get_owned(db, Case, case_id, user, "Case not found")


async def list_owned(db: AsyncSession, model: Type[M], user: User, *criteria, order_by=None) -> list:
    stmt = model.owned_by(user.id)
    if criteria:
        stmt = stmt.where(*criteria)
    if order_by is not None:
        stmt = stmt.order_by(order_by)
    result = await db.execute(stmt)
    return list(result.scalars().all())
