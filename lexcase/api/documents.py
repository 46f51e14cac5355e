from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional, Sequence
from uuid import uuid4
import logging

from lexcase.api.deps import get_current_user, get_storage
from lexcase.database import get_db
from lexcase.models import Document, User
from lexcase.schemas import APIResponse, DocumentResponse, UserSummary
from lexcase.services import users
from lexcase.services.ownership import get_owned, get_owned_case, list_owned
from lexcase.services.storage import StorageService
from lexcase.utils.errors import InternalError, LexCaseError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/documents", tags=["documents"])


async def _with_uploaders(db: AsyncSession, documents: Sequence[Document]) -> List[DocumentResponse]:
    uploaders = await users.get_users_by_ids(db, [d.uploaded_by for d in documents])
    responses = []
    for document in documents:
        response = DocumentResponse.model_validate(document)
        uploader = uploaders.get(document.uploaded_by)
        if uploader is not None:
            response.uploader = UserSummary.model_validate(uploader)
        responses.append(response)
    return responses


@router.get("/case/{case_id}", response_model=APIResponse[List[DocumentResponse]])
async def list_documents(
    case_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get all documents for a case"""
    try:
        await get_owned_case(db, case_id, current_user)
        documents = await list_owned(
            db,
            Document,
            current_user,
            Document.case_id == case_id,
            order_by=Document.created_at.desc(),
        )
        return APIResponse(data=await _with_uploaders(db, documents))
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[documents] List documents error: {e}")
        raise InternalError("Error fetching documents")


@router.get("/{document_id}", response_model=APIResponse[DocumentResponse])
async def get_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get document details"""
    try:
        document = await get_owned(db, Document, document_id, current_user, "Document not found")
        [response] = await _with_uploaders(db, [document])
        return APIResponse(data=response)
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[documents] Get document error: {e}")
        raise InternalError("Error fetching document")


@router.post("", response_model=APIResponse[DocumentResponse], status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    case_id: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: StorageService = Depends(get_storage),
):
    """
    Upload a document to a case.
    The file is checked for type and size before anything is recorded.
    """
    if file is None or not file.filename:
        raise ValidationError("Please upload a file")
    if not case_id or not case_id.strip():
        raise ValidationError("Case ID is required")

    stored = None
    try:
        await get_owned_case(db, case_id, current_user)

        stored = await storage.save_upload(file)

        new_document = Document(
            id=str(uuid4()),
            case_id=case_id,
            file_name=file.filename,
            file_path=stored.path,
            file_url=stored.url,
            file_size=stored.size,
            uploaded_by=current_user.id,
        )
        db.add(new_document)
        await db.commit()
        stored = None  # the record now owns the file
        await db.refresh(new_document)

        logger.info(f"[documents] Uploaded document: {new_document.id}")
        [response] = await _with_uploaders(db, [new_document])
        return APIResponse(message="Document uploaded successfully", data=response)
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[documents] Upload error: {e}")
        await db.rollback()
        # Don't leave bytes behind without a record pointing at them
        if stored is not None:
            storage.delete_file(stored.path)
        raise InternalError("Error uploading document")
    finally:
        await file.close()


@router.delete("/{document_id}", response_model=APIResponse[None])
async def delete_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: StorageService = Depends(get_storage),
):
    """Delete document and its stored file"""
    try:
        document = await get_owned(db, Document, document_id, current_user, "Document not found")
        file_path = document.file_path

        await db.delete(document)
        await db.commit()

        try:
            storage.delete_file(file_path)
        except OSError as e:
            logger.error(f"[documents] Could not remove stored file {file_path}: {e}")

        logger.info(f"[documents] Deleted document: {document_id}")
        return APIResponse(message="Document deleted successfully")
    except LexCaseError:
        raise
    except Exception as e:
        logger.error(f"[documents] Delete document error: {e}")
        await db.rollback()
        raise InternalError("Error deleting document")
