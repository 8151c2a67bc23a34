"""
Document storage routes.
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from autoparts.auth import get_current_customer
from autoparts.config import get_settings
from autoparts.database import get_db
from autoparts.models.customer import Customer
from autoparts.models.document import Document, DocumentType
from autoparts.routers.vehicles import get_owned_vehicle
from autoparts.schemas.document import Document as DocumentSchema
from autoparts.services.documents import (
    ExpiryStatus, default_document_name, expiry_status, validate_upload,
)
from autoparts.services.storage import LocalStorage, get_storage
from autoparts.validators import blank_to_none

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

settings = get_settings()


def to_schema(document: Document, today: Optional[date] = None) -> DocumentSchema:
    """Attach the display label and expiry status to a stored document."""
    today = today or date.today()
    return DocumentSchema(
        id=document.id,
        customer_id=document.customer_id,
        vehicle_id=document.vehicle_id,
        type=document.type,
        type_label=document.type.label,
        name=document.name,
        file_url=document.file_url,
        content_type=document.content_type,
        size=document.size,
        expiry_date=document.expiry_date,
        expiry_status=expiry_status(document.expiry_date, today, settings.expiry_warning_days),
        notes=document.notes,
        uploaded_at=document.uploaded_at,
    )


async def _list_documents(db: AsyncSession, customer: Customer, vehicle_id: Optional[int] = None):
    query = (
        select(Document)
        .where(Document.customer_id == customer.id)
        .order_by(Document.uploaded_at.desc(), Document.id.desc())
    )
    if vehicle_id is not None:
        query = query.where(Document.vehicle_id == vehicle_id)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/", response_model=List[DocumentSchema])
async def get_documents(
    vehicle_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    The customer's documents, most recent upload first.
    """
    today = date.today()
    return [to_schema(doc, today) for doc in await _list_documents(db, customer, vehicle_id)]


@router.get("/expiring", response_model=List[DocumentSchema])
async def get_expiring_documents(
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    Documents that have expired or will expire soon, earliest expiry first.
    """
    today = date.today()
    flagged = [
        to_schema(doc, today) for doc in await _list_documents(db, customer)
    ]
    flagged = [
        doc for doc in flagged
        if doc.expiry_status in (ExpiryStatus.EXPIRED, ExpiryStatus.EXPIRING_SOON)
    ]
    return sorted(flagged, key=lambda doc: doc.expiry_date)


@router.post("/", response_model=DocumentSchema, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile = File(...),
    vehicle_id: int = Form(...),
    doc_type: DocumentType = Form(DocumentType.INSURANCE, alias="type"),
    name: Optional[str] = Form(None),
    expiry_date: Optional[date] = Form(None),
    notes: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
    storage: LocalStorage = Depends(get_storage),
):
    """
    Upload a document for one of the customer's vehicles.
    """
    await get_owned_vehicle(db, vehicle_id, customer)

    data = await file.read(settings.max_upload_size + 1)
    validate_upload(file.content_type, len(data), settings.max_upload_size)

    key = storage.make_key(customer.id, file.filename)
    file_url = storage.save(key, data)

    document = Document(
        customer_id=customer.id,
        vehicle_id=vehicle_id,
        type=doc_type,
        name=blank_to_none(name) or default_document_name(file.filename),
        file_url=file_url,
        file_path=key,
        content_type=file.content_type,
        size=len(data),
        expiry_date=expiry_date,
        notes=blank_to_none(notes),
    )
    db.add(document)
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        # Cleanup uploaded file if the insert fails
        storage.delete(key)
        logger.exception("Document insert failed; removed %s", key)
        raise
    await db.refresh(document)

    logger.info("Document %s uploaded for vehicle %s", document.id, vehicle_id)
    return to_schema(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: int,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
    storage: LocalStorage = Depends(get_storage),
):
    """
    Delete a document and its stored file.
    """
    result = await db.execute(
        select(Document).where(Document.id == document_id, Document.customer_id == customer.id)
    )
    document = result.scalar_one_or_none()

    if not document:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found"
        )

    # Delete from storage first
    storage.delete(document.file_path)

    await db.delete(document)
    await db.commit()

    return None
