"""
Pydantic schemas for Document.
"""
from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from typing import Optional

from autoparts.models.document import DocumentType
from autoparts.services.documents import ExpiryStatus


class Document(BaseModel):
    """Schema for document responses."""
    id: int
    customer_id: int
    vehicle_id: int
    type: DocumentType
    type_label: str
    name: str
    file_url: str
    content_type: str
    size: int
    expiry_date: Optional[date] = None
    expiry_status: ExpiryStatus
    notes: Optional[str] = None
    uploaded_at: datetime

    model_config = ConfigDict(from_attributes=True)
