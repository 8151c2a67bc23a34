"""
Appointment model for database.
"""
from sqlalchemy import JSON, Column, Date, Integer, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from autoparts.database import Base
import enum


class AppointmentStatus(str, enum.Enum):
    """Appointment status enumeration."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DECLINED = "declined"


# Appointments in these states can no longer be edited by the owner
CLOSED_STATUSES = frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED})


class Appointment(Base):
    """Service booking submitted by a customer."""

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    shop_name = Column(String, nullable=False)
    mechanic_name = Column(String, nullable=False, default="")
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(String(5), nullable=False)
    vehicle = Column(String, nullable=False)
    service_type = Column(String, nullable=False)
    services = Column(JSON, nullable=False, default=list)
    notes = Column(String, nullable=True)
    status = Column(SQLEnum(AppointmentStatus), default=AppointmentStatus.PENDING, nullable=False)
    completed_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    customer = relationship("Customer", back_populates="appointments")
