"""CRUD router for text records attached to a case (notes and speeches)."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Sequence, Type
from uuid import uuid4
import logging

from lexcase.api.deps import get_current_user
from lexcase.database import get_db
from lexcase.models import User
from lexcase.schemas import APIResponse, EntryCreate, EntryResponse, EntryUpdate, UserSummary
from lexcase.services import users
from lexcase.services.ownership import get_owned, get_owned_case, list_owned
from lexcase.utils.errors import InternalError, LexCaseError, Unauthorized

logger = logging.getLogger(__name__)


async def _with_authors(db: AsyncSession, entries: Sequence) -> List[EntryResponse]:
    authors = await users.get_users_by_ids(db, [e.created_by for e in entries])
    responses = []
    for entry in entries:
        response = EntryResponse.model_validate(entry)
        author = authors.get(entry.created_by)
        if author is not None:
            response.author = UserSummary.model_validate(author)
        responses.append(response)
    return responses


def build_entry_router(model: Type, noun: str, prefix: str) -> APIRouter:
    """Build list/get/create/update/delete routes for ``model``.

    Every route resolves the parent case through the requester's ownership,
    so entries of someone else's case behave as if they did not exist.
    """
    plural = prefix.strip("/")
    router = APIRouter(prefix=prefix, tags=[plural])
    label = noun.capitalize()
    tag = f"[{plural}]"
    not_found = f"{label} not found"

    @router.get("/case/{case_id}", response_model=APIResponse[List[EntryResponse]])
    async def list_entries(
        case_id: str,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ):
        try:
            await get_owned_case(db, case_id, current_user)
            entries = await list_owned(
                db,
                model,
                current_user,
                model.case_id == case_id,
                order_by=model.updated_at.desc(),
            )
            return APIResponse(data=await _with_authors(db, entries))
        except LexCaseError:
            raise
        except Exception as e:
            logger.error(f"{tag} List error: {e}")
            raise InternalError(f"Error fetching {plural}")

    @router.get("/{entry_id}", response_model=APIResponse[EntryResponse])
    async def get_entry(
        entry_id: str,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ):
        try:
            entry = await get_owned(db, model, entry_id, current_user, not_found)
            [response] = await _with_authors(db, [entry])
            return APIResponse(data=response)
        except LexCaseError:
            raise
        except Exception as e:
            logger.error(f"{tag} Get error: {e}")
            raise InternalError(f"Error fetching {noun}")

    @router.post("", response_model=APIResponse[EntryResponse], status_code=status.HTTP_201_CREATED)
    async def create_entry(
        entry_create: EntryCreate,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ):
        try:
            await get_owned_case(db, entry_create.case_id, current_user)

            entry = model(
                id=str(uuid4()),
                created_by=current_user.id,
                **entry_create.model_dump(),
            )
            db.add(entry)
            await db.commit()
            await db.refresh(entry)

            logger.info(f"{tag} Created {noun}: {entry.id}")
            [response] = await _with_authors(db, [entry])
            return APIResponse(message=f"{label} created successfully", data=response)
        except LexCaseError:
            raise
        except Exception as e:
            logger.error(f"{tag} Create error: {e}")
            await db.rollback()
            raise InternalError(f"Error creating {noun}")

    @router.put("/{entry_id}", response_model=APIResponse[EntryResponse])
    async def update_entry(
        entry_id: str,
        entry_update: EntryUpdate,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ):
        try:
            entry = await get_owned(db, model, entry_id, current_user, not_found)

            update_data = entry_update.model_dump(exclude_unset=True)
            if update_data.pop("case_id", entry.case_id) != entry.case_id:
                raise Unauthorized(f"{label} cannot be moved to another case")
            if update_data.pop("created_by", entry.created_by) != entry.created_by:
                raise Unauthorized(f"{label} author cannot be changed")

            for field, value in update_data.items():
                setattr(entry, field, value)

            await db.commit()
            await db.refresh(entry)

            logger.info(f"{tag} Updated {noun}: {entry.id}")
            [response] = await _with_authors(db, [entry])
            return APIResponse(message=f"{label} updated successfully", data=response)
        except LexCaseError:
            raise
        except Exception as e:
            logger.error(f"{tag} Update error: {e}")
            await db.rollback()
            raise InternalError(f"Error updating {noun}")

    @router.delete("/{entry_id}", response_model=APIResponse[None])
    async def delete_entry(
        entry_id: str,
        db: AsyncSession = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ):
        try:
            entry = await get_owned(db, model, entry_id, current_user, not_found)
            await db.delete(entry)
            await db.commit()

            logger.info(f"{tag} Deleted {noun}: {entry_id}")
            return APIResponse(message=f"{label} deleted successfully")
        except LexCaseError:
            raise
        except Exception as e:
            logger.error(f"{tag} Delete error: {e}")
            await db.rollback()
            raise InternalError(f"Error deleting {noun}")

    return router
