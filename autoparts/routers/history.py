"""
Service history routes.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from autoparts.auth import get_current_customer
from autoparts.config import get_settings
from autoparts.database import get_db
from autoparts.errors import ValidationError
from autoparts.models.appointment import Appointment, AppointmentStatus
from autoparts.models.customer import Customer
from autoparts.schemas.appointment import Appointment as AppointmentSchema
from autoparts.schemas.common import Page
from autoparts.services.listing import HistoryPeriod, filter_history, paginate

router = APIRouter(prefix="/service-history", tags=["service history"])

settings = get_settings()


async def _history_view(db: AsyncSession, customer: Customer, search, status_filter, period):
    result = await db.execute(
        select(Appointment)
        .where(Appointment.customer_id == customer.id)
        .order_by(
            Appointment.appointment_date.desc(),
            Appointment.appointment_time.desc(),
            Appointment.id.desc(),
        )
    )
    return filter_history(result.scalars().all(), search, status_filter, period, date.today())


@router.get("/bookings", response_model=Page[AppointmentSchema])
async def get_booking_history(
    search: Optional[str] = None,
    status_filter: str = Query("all", alias="status"),
    period: HistoryPeriod = HistoryPeriod.ALL,
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    All of the customer's bookings, newest first.
    """
    if status_filter != "all" and status_filter not in {s.value for s in AppointmentStatus}:
        raise ValidationError(f"Unknown status: {status_filter}")

    view = await _history_view(db, customer, search, status_filter, period)
    return Page.from_paginated(paginate(view, page, settings.history_page_size))


@router.get("/records", response_model=Page[AppointmentSchema])
async def get_service_records(
    search: Optional[str] = None,
    period: HistoryPeriod = HistoryPeriod.ALL,
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    Completed services, newest first.
    """
    view = await _history_view(db, customer, search, AppointmentStatus.COMPLETED.value, period)
    return Page.from_paginated(paginate(view, page, settings.history_page_size))
