"""
SQLAlchemy database models.
"""
from autoparts.models.user import User, UserRole
from autoparts.models.customer import Customer
from autoparts.models.vehicle import Vehicle
from autoparts.models.catalog import Category, Part
from autoparts.models.order import Order, OrderItem, OrderStatus
from autoparts.models.appointment import Appointment, AppointmentStatus
from autoparts.models.document import Document, DocumentType

__all__ = [
    "User", "UserRole", "Customer", "Vehicle", "Category", "Part",
    "Order", "OrderItem", "OrderStatus", "Appointment", "AppointmentStatus",
    "Document", "DocumentType",
]
