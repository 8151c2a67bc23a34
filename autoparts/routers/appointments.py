"""
Appointment routes.
"""
import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from autoparts.auth import get_current_customer, require_admin
from autoparts.config import get_settings
from autoparts.database import get_db
from autoparts.errors import ConflictError, ValidationError
from autoparts.models.appointment import Appointment, AppointmentStatus, CLOSED_STATUSES
from autoparts.models.customer import Customer
from autoparts.models.user import User
from autoparts.schemas.appointment import (
    Appointment as AppointmentSchema, AppointmentCreate, AppointmentStatusUpdate, AppointmentUpdate,
)
from autoparts.schemas.common import Page
from autoparts.services.listing import (
    AppointmentQuery, AppointmentSortKey, SortDirection, apply_appointment_query, paginate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["appointments"])

settings = get_settings()


def _check_not_past(appointment_date: date):
    if appointment_date < date.today():
        raise ValidationError("Appointment date cannot be in the past")


def _service_type(value: Optional[str], services) -> str:
    """Stripped service type, falling back to the first listed service."""
    value = (value or "").strip()
    if value:
        return value
    if not services:
        raise ValidationError("Select at least one service")
    return services[0]


async def _get_own_appointment(db: AsyncSession, appointment_id: int, customer: Customer) -> Appointment:
    result = await db.execute(
        select(Appointment).where(
            Appointment.id == appointment_id, Appointment.customer_id == customer.id
        )
    )
    appointment = result.scalar_one_or_none()

    if not appointment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found"
        )

    return appointment


@router.get("/", response_model=Page[AppointmentSchema])
async def get_appointments(
    search: Optional[str] = None,
    status_filter: List[str] = Query(default=[], alias="status"),
    on_date: Optional[date] = Query(None, alias="date"),
    sort: AppointmentSortKey = AppointmentSortKey.DATE,
    direction: SortDirection = SortDirection.DESC,
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    The customer's appointments, filtered, sorted and paginated.
    """
    valid = {s.value for s in AppointmentStatus} | {"all"}
    unknown = [s for s in status_filter if s not in valid]
    if unknown:
        raise ValidationError(f"Unknown status: {', '.join(unknown)}")

    result = await db.execute(
        select(Appointment).where(Appointment.customer_id == customer.id).order_by(Appointment.id)
    )
    query = AppointmentQuery(
        search=search,
        statuses=frozenset(status_filter),
        on_date=on_date,
        sort_key=sort,
        direction=direction,
    )
    view = apply_appointment_query(result.scalars().all(), query)

    return Page.from_paginated(paginate(view, page, page_size or settings.appointments_page_size))


@router.get("/all", response_model=List[AppointmentSchema])
async def get_all_appointments(
    skip: int = 0,
    limit: int = 100,
    status_filter: Optional[AppointmentStatus] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    Get every customer's appointments, soonest first.
    """
    query = select(Appointment).order_by(
        Appointment.appointment_date, Appointment.appointment_time, Appointment.id
    )

    if status_filter:
        query = query.where(Appointment.status == status_filter)

    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{appointment_id}", response_model=AppointmentSchema)
async def get_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    Get a specific appointment by ID.
    """
    return await _get_own_appointment(db, appointment_id, customer)


@router.post("/", response_model=AppointmentSchema, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    appointment: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    Book a new appointment. New bookings start out pending.
    """
    _check_not_past(appointment.appointment_date)

    data = appointment.model_dump()
    service_type = _service_type(data.pop("service_type"), appointment.services)

    db_appointment = Appointment(
        customer_id=customer.id,
        service_type=service_type,
        status=AppointmentStatus.PENDING,
        **data,
    )
    db.add(db_appointment)
    await db.commit()
    await db.refresh(db_appointment)

    logger.info("Appointment %s booked for customer %s", db_appointment.id, customer.id)
    return db_appointment


@router.put("/{appointment_id}", response_model=AppointmentSchema)
async def update_appointment(
    appointment_id: int,
    appointment_update: AppointmentUpdate,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    Edit or reschedule an open appointment.
    """
    db_appointment = await _get_own_appointment(db, appointment_id, customer)
    if db_appointment.status in CLOSED_STATUSES:
        raise ConflictError(f"Cannot modify a {db_appointment.status.value} appointment")

    # Update only provided fields
    update_data = {
        field: value
        for field, value in appointment_update.model_dump(exclude_unset=True).items()
        if value is not None or field == "notes"
    }
    if "appointment_date" in update_data:
        _check_not_past(update_data["appointment_date"])
    if "service_type" in update_data:
        update_data["service_type"] = _service_type(
            update_data["service_type"], update_data.get("services", db_appointment.services)
        )

    for field, value in update_data.items():
        setattr(db_appointment, field, value)

    await db.commit()
    await db.refresh(db_appointment)

    return db_appointment


@router.post("/{appointment_id}/cancel", response_model=AppointmentSchema)
async def cancel_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    Cancel an appointment. Cancelling twice is harmless.
    """
    db_appointment = await _get_own_appointment(db, appointment_id, customer)

    if db_appointment.status == AppointmentStatus.CANCELLED:
        return db_appointment
    if db_appointment.status == AppointmentStatus.COMPLETED:
        raise ConflictError("Cannot cancel a completed appointment")

    db_appointment.status = AppointmentStatus.CANCELLED
    await db.commit()
    await db.refresh(db_appointment)

    logger.info("Appointment %s cancelled", db_appointment.id)
    return db_appointment


@router.patch("/{appointment_id}/status", response_model=AppointmentSchema)
async def update_appointment_status(
    appointment_id: int,
    status_update: AppointmentStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    Move an appointment through the workshop's workflow.
    """
    result = await db.execute(select(Appointment).where(Appointment.id == appointment_id))
    db_appointment = result.scalar_one_or_none()

    if not db_appointment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found"
        )

    # Auto-set completed_date when status changes to completed
    if status_update.status == AppointmentStatus.COMPLETED:
        if db_appointment.status != AppointmentStatus.COMPLETED:
            db_appointment.completed_date = datetime.now(timezone.utc)
    db_appointment.status = status_update.status

    await db.commit()
    await db.refresh(db_appointment)

    return db_appointment
