"""
Pydantic schemas for request/response validation.
"""
from autoparts.schemas.common import Page
from autoparts.schemas.user import UserCreate, User, Token, LoginRequest
from autoparts.schemas.customer import Customer, CustomerUpdate
from autoparts.schemas.vehicle import VehicleBase, VehicleCreate, VehicleUpdate, Vehicle
from autoparts.schemas.catalog import (
    Category, CategoryCreate, CategoryUpdate, Part, PartCreate, PartUpdate, PartSuggestions,
)
from autoparts.schemas.order import CartLine, CustomerInfo, CheckoutRequest, Order, OrderItem, OrderStatusUpdate
from autoparts.schemas.appointment import (
    AppointmentBase, AppointmentCreate, AppointmentUpdate, AppointmentStatusUpdate, Appointment,
)
from autoparts.schemas.document import Document

__all__ = [
    "Page",
    "UserCreate", "User", "Token", "LoginRequest",
    "Customer", "CustomerUpdate",
    "VehicleBase", "VehicleCreate", "VehicleUpdate", "Vehicle",
    "Category", "CategoryCreate", "CategoryUpdate", "Part", "PartCreate", "PartUpdate", "PartSuggestions",
    "CartLine", "CustomerInfo", "CheckoutRequest", "Order", "OrderItem", "OrderStatusUpdate",
    "AppointmentBase", "AppointmentCreate", "AppointmentUpdate", "AppointmentStatusUpdate", "Appointment",
    "Document",
]
