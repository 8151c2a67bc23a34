"""
Pydantic schemas for Appointment.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from typing import List, Optional
from autoparts.models.appointment import AppointmentStatus

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def _clean_services(services):
    cleaned = []
    for service in services or []:
        service = service.strip()
        if service and service not in cleaned:
            cleaned.append(service)
    return cleaned


class AppointmentBase(BaseModel):
    """Base appointment schema with common fields."""
    shop_name: str = Field(min_length=1)
    mechanic_name: str = ""
    appointment_date: date
    appointment_time: str = Field(pattern=TIME_PATTERN)
    vehicle: str = Field(min_length=1)
    service_type: Optional[str] = None
    services: List[str] = []
    notes: Optional[str] = None

    @field_validator("services")
    @classmethod
    def _services(cls, value):
        return _clean_services(value)


class AppointmentCreate(AppointmentBase):
    """Schema for booking an appointment."""
    pass


class AppointmentUpdate(BaseModel):
    """Schema for rescheduling or editing an appointment."""
    shop_name: Optional[str] = Field(default=None, min_length=1)
    mechanic_name: Optional[str] = None
    appointment_date: Optional[date] = None
    appointment_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    vehicle: Optional[str] = Field(default=None, min_length=1)
    service_type: Optional[str] = None
    services: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator("services")
    @classmethod
    def _services(cls, value):
        return None if value is None else _clean_services(value)


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class Appointment(AppointmentBase):
    """Schema for appointment responses."""
    id: int
    customer_id: int
    service_type: str
    status: AppointmentStatus
    completed_date: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
