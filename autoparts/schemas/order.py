"""
Pydantic schemas for cart checkout and orders.
"""
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import List, Optional

from autoparts.models.order import OrderStatus


class CartLine(BaseModel):
    """A cart item as submitted by the client."""
    part_id: int
    quantity: int = Field(ge=1)


class CustomerInfo(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None


class CheckoutRequest(BaseModel):
    customer: CustomerInfo
    items: List[CartLine]


class OrderItem(BaseModel):
    id: int
    part_id: Optional[int] = None
    quantity: int
    price: float

    model_config = ConfigDict(from_attributes=True)


class Order(BaseModel):
    """Schema for order responses."""
    id: int
    customer_name: str
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    total_amount: float
    currency: str
    status: OrderStatus
    items: List[OrderItem] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
