"""
Pydantic schemas for Vehicle.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from typing import Optional

from autoparts.validators import blank_to_none


class VehicleBase(BaseModel):
    """Base vehicle schema with common fields."""
    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: int
    vin: Optional[str] = None
    license_plate: Optional[str] = None
    color: Optional[str] = None
    mileage: Optional[int] = Field(default=None, ge=0)
    last_service_date: Optional[date] = None
    next_service_due: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("vin", "license_plate", "color", "notes", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        return blank_to_none(value)


class VehicleCreate(VehicleBase):
    """Schema for registering a vehicle."""
    pass


class VehicleUpdate(BaseModel):
    """Schema for updating a vehicle."""
    make: Optional[str] = Field(default=None, min_length=1)
    model: Optional[str] = Field(default=None, min_length=1)
    year: Optional[int] = None
    vin: Optional[str] = None
    license_plate: Optional[str] = None
    color: Optional[str] = None
    mileage: Optional[int] = Field(default=None, ge=0)
    last_service_date: Optional[date] = None
    next_service_due: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("vin", "license_plate", "color", "notes", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        return blank_to_none(value)


class Vehicle(VehicleBase):
    """Schema for vehicle responses."""
    id: int
    customer_id: int
    label: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
