"""
Document model for database.
"""
from sqlalchemy import Column, Date, Integer, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from autoparts.database import Base
import enum


class DocumentType(str, enum.Enum):
    """Kinds of vehicle paperwork an owner can upload."""
    INSURANCE = "insurance"
    INSPECTION_REPORT = "inspection_report"
    LOGBOOK = "logbook"
    DRIVING_PERMIT = "driving_permit"
    OTHER = "other"

    @property
    def label(self) -> str:
        return DOCUMENT_TYPE_LABELS[self]


DOCUMENT_TYPE_LABELS = {
    DocumentType.INSURANCE: "Motor Insurance",
    DocumentType.INSPECTION_REPORT: "Inspection Report",
    DocumentType.LOGBOOK: "Logbook",
    DocumentType.DRIVING_PERMIT: "Driving Permit",
    DocumentType.OTHER: "Other Document",
}


class Document(Base):
    """Uploaded file tied to a customer's vehicle."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(SQLEnum(DocumentType), nullable=False)
    name = Column(String, nullable=False)
    file_url = Column(String, nullable=False)
    file_path = Column(String, nullable=False, unique=True)
    content_type = Column(String, nullable=False)
    size = Column(Integer, nullable=False)
    expiry_date = Column(Date, nullable=True)
    notes = Column(String, nullable=True)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Relationships
    customer = relationship("Customer", back_populates="documents")
    vehicle = relationship("Vehicle", back_populates="documents")
