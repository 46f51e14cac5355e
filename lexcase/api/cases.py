from fastapi import APIRouter, Depends, status
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import List
from uuid import uuid4
import logging

from lexcase.api.deps import get_current_user, get_storage
from lexcase.database import get_db
from lexcase.models import Case, Document, Note, Speech, User
from lexcase.schemas import APIResponse, CaseCreate, CaseResponse, CaseUpdate
from lexcase.services.ownership import get_owned_case, list_owned
from lexcase.services.storage import StorageService
from lexcase.utils.errors import Conflict, InternalError, LexCaseError, Unauthorized

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cases", tags=["cases"])

DUPLICATE_CASE_NUMBER = "Case number already exists"


@router.get("", response_model=APIResponse[List[CaseResponse]])
async def list_cases(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the authenticated user's cases, newest first"""
    try:
        cases = await list_owned(db, Case, current_user, order_by=Case.created_at.desc())
        return APIResponse(data=[CaseResponse.model_validate(c) for c in cases])
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[cases] List cases error: {e}")
        raise InternalError("Error fetching cases")


@router.get("/{case_id}", response_model=APIResponse[CaseResponse])
async def get_case(
    case_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get case details"""
    try:
        case = await get_owned_case(db, case_id, current_user)
        return APIResponse(data=CaseResponse.model_validate(case))
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[cases] Get case error: {e}")
        raise InternalError("Error fetching case")


@router.post("", response_model=APIResponse[CaseResponse], status_code=status.HTTP_201_CREATED)
async def create_case(
    case_create: CaseCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a new case"""
    try:
        new_case = Case(id=str(uuid4()), lawyer_id=current_user.id, **case_create.model_dump())
        db.add(new_case)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise Conflict(DUPLICATE_CASE_NUMBER)
        await db.refresh(new_case)

        logger.info(f"[cases] Created case: {new_case.id}")
        return APIResponse(
            message="Case created successfully",
            data=CaseResponse.model_validate(new_case),
        )
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[cases] Create case error: {e}")
        await db.rollback()
        raise InternalError("Error creating case")


@router.put("/{case_id}", response_model=APIResponse[CaseResponse])
async def update_case(
    case_id: str,
    case_update: CaseUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update case"""
    try:
        case = await get_owned_case(db, case_id, current_user)

        update_data = case_update.model_dump(exclude_unset=True)
        new_owner = update_data.pop("lawyer_id", current_user.id)
        if new_owner != current_user.id:
            raise Unauthorized("Case owner cannot be changed")

        for field, value in update_data.items():
            setattr(case, field, value)

        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise Conflict(DUPLICATE_CASE_NUMBER)
        await db.refresh(case)

        logger.info(f"[cases] Updated case: {case.id}")
        return APIResponse(
            message="Case updated successfully",
            data=CaseResponse.model_validate(case),
        )
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[cases] Update case error: {e}")
        await db.rollback()
        raise InternalError("Error updating case")


async def _delete_dependents(db: AsyncSession, case: Case) -> List[str]:
    """Queue deletion of everything attached to ``case``.

    Returns the stored file paths of its documents so the caller can
    remove them once the rows are gone.
    """
    result = await db.execute(select(Document.file_path).where(Document.case_id == case.id))
    file_paths = list(result.scalars().all())

    for model in (Note, Speech, Document):
        await db.execute(delete(model).where(model.case_id == case.id))

    return file_paths


@router.delete("/{case_id}", response_model=APIResponse[None])
async def delete_case(
    case_id: str,
    cascade: bool = False,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: StorageService = Depends(get_storage),
):
    """Delete case.

    Notes, speeches and documents stay in place unless ``cascade`` is set.
    """
    try:
        case = await get_owned_case(db, case_id, current_user)

        file_paths: List[str] = []
        if cascade:
            file_paths = await _delete_dependents(db, case)

        await db.delete(case)
        await db.commit()

        for path in file_paths:
            try:
                storage.delete_file(path)
            except OSError as e:
                logger.error(f"[cases] Could not remove stored file {path}: {e}")

        logger.info(f"[cases] Deleted case: {case_id} (cascade={cascade})")
        return APIResponse(message="Case deleted successfully")
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[cases] Delete case error: {e}")
        await db.rollback()
        raise InternalError("Error deleting case")
