"""
Filtering, sorting and pagination for the owner portal's list views.
"""
import enum
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Generic, Iterable, List, Optional, Sequence, TypeVar

from dateutil.relativedelta import relativedelta

T = TypeVar("T")


@dataclass
class Paginated(Generic[T]):
    items: List[T]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


def paginate(items: Sequence[T], page: int = 1, page_size: int = 10) -> Paginated[T]:
    """Slice one 1-based page out of ``items``."""
    page = max(page, 1)
    page_size = max(page_size, 1)
    start = (page - 1) * page_size
    return Paginated(
        items=list(items[start:start + page_size]),
        total=len(items),
        page=page,
        page_size=page_size,
    )


# ---------------------------------------------------------------- appointments

class AppointmentSortKey(str, enum.Enum):
    DATE = "date"
    SHOP_NAME = "shop_name"
    MECHANIC_NAME = "mechanic_name"
    STATUS = "status"
    VEHICLE = "vehicle"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class AppointmentQuery:
    search: Optional[str] = None
    statuses: frozenset = field(default_factory=frozenset)
    on_date: Optional[date] = None
    sort_key: AppointmentSortKey = AppointmentSortKey.DATE
    direction: SortDirection = SortDirection.DESC


def _status_value(status) -> str:
    return getattr(status, "value", status) or ""


def scheduled_at(appointment) -> datetime:
    """Combined date and ``HH:MM`` time used for chronological ordering."""
    try:
        hours, minutes = (int(part) for part in appointment.appointment_time.split(":")[:2])
        at = time(hours, minutes)
    except (AttributeError, ValueError):
        at = time.min
    return datetime.combine(appointment.appointment_date, at)


def filter_appointments(appointments: Iterable, query: AppointmentQuery) -> List:
    result = list(appointments)

    term = (query.search or "").strip().lower()
    if term:
        result = [
            a for a in result
            if term in (a.shop_name or "").lower()
            or term in (a.mechanic_name or "").lower()
            or term in (a.vehicle or "").lower()
        ]

    statuses = {_status_value(s) for s in query.statuses}
    if statuses and "all" not in statuses:
        result = [a for a in result if _status_value(a.status) in statuses]

    if query.on_date is not None:
        result = [a for a in result if a.appointment_date == query.on_date]

    return result


def sort_appointments(appointments: Iterable, key: AppointmentSortKey, direction: SortDirection) -> List:
    key = AppointmentSortKey(key)
    reverse = SortDirection(direction) is SortDirection.DESC

    if key is AppointmentSortKey.DATE:
        return sorted(appointments, key=scheduled_at, reverse=reverse)
    if key is AppointmentSortKey.STATUS:
        return sorted(appointments, key=lambda a: _status_value(a.status), reverse=reverse)
    return sorted(
        appointments,
        key=lambda a: (getattr(a, key.value) or "").casefold(),
        reverse=reverse,
    )


def apply_appointment_query(appointments: Iterable, query: AppointmentQuery) -> List:
    return sort_appointments(filter_appointments(appointments, query), query.sort_key, query.direction)


# ---------------------------------------------------------------- service history

class HistoryPeriod(str, enum.Enum):
    ALL = "all"
    LAST_30_DAYS = "30days"
    LAST_6_MONTHS = "6months"
    LAST_YEAR = "1year"


def period_cutoff(period: HistoryPeriod, today: date) -> Optional[date]:
    """Earliest date included in ``period``, or None for no limit."""
    period = HistoryPeriod(period)
    if period is HistoryPeriod.LAST_30_DAYS:
        return today - relativedelta(days=30)
    if period is HistoryPeriod.LAST_6_MONTHS:
        return today - relativedelta(months=6)
    if period is HistoryPeriod.LAST_YEAR:
        return today - relativedelta(years=1)
    return None


def filter_history(appointments: Iterable, search: Optional[str], status: Optional[str],
                   period: HistoryPeriod, today: date) -> List:
    result = list(appointments)

    term = (search or "").strip().lower()
    if term:
        result = [
            a for a in result
            if term in (a.service_type or "").lower()
            or term in (a.vehicle or "").lower()
            or term in (a.shop_name or "").lower()
        ]

    if status and status != "all":
        result = [a for a in result if _status_value(a.status) == status]

    cutoff = period_cutoff(period, today)
    if cutoff is not None:
        result = [a for a in result if a.appointment_date >= cutoff]

    return result
