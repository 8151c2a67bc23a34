"""
Checkout and order routes.
"""
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from autoparts.auth import get_current_customer, require_admin
from autoparts.config import get_settings
from autoparts.database import get_db
from autoparts.errors import NotFoundError, OutOfStockError, ValidationError
from autoparts.models.catalog import Part
from autoparts.models.customer import Customer
from autoparts.models.order import Order, OrderItem, OrderStatus
from autoparts.models.user import User
from autoparts.schemas.order import CartLine, CheckoutRequest, Order as OrderSchema, OrderStatusUpdate
from autoparts.services.cart import Cart
from autoparts.validators import validate_phone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])

settings = get_settings()


def _merge_lines(lines: List[CartLine]) -> Dict[int, int]:
    """Sum quantities of repeated parts, keeping first-seen order."""
    quantities: Dict[int, int] = {}
    for line in lines:
        quantities[line.part_id] = quantities.get(line.part_id, 0) + line.quantity
    return quantities


def build_cart(parts_by_id: Dict[int, Part], quantities: Dict[int, int]) -> Cart:
    """Rebuild the client's cart against current stock levels."""
    cart = Cart()
    for part_id, quantity in quantities.items():
        part = parts_by_id.get(part_id)
        if part is None:
            raise NotFoundError(f"Part {part_id} not found")
        if not cart.add(part) or not cart.update_quantity(part.id, quantity):
            raise OutOfStockError(
                f"Only {part.stock_quantity} of '{part.name}' left in stock"
            )
    return cart


async def _get_order(db: AsyncSession, order_id: int) -> Order:
    result = await db.execute(select(Order).where(Order.id == order_id))
    order = result.scalar_one_or_none()

    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found"
        )

    return order


@router.post("/checkout", response_model=OrderSchema, status_code=status.HTTP_201_CREATED)
async def checkout(
    payload: CheckoutRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Place an order for the submitted cart and take the parts out of stock.
    """
    if not payload.items:
        raise ValidationError("Cart is empty")
    phone = validate_phone(payload.customer.phone)

    quantities = _merge_lines(payload.items)
    result = await db.execute(
        select(Part).where(Part.id.in_(quantities.keys())).with_for_update()
    )
    parts_by_id = {part.id: part for part in result.scalars().all()}
    cart = build_cart(parts_by_id, quantities)

    order = Order(
        customer_name=payload.customer.name.strip(),
        customer_email=str(payload.customer.email).lower(),
        customer_phone=phone,
        total_amount=float(cart.total),
        currency=settings.currency,
        status=OrderStatus.PENDING,
    )
    order.items = [
        OrderItem(part_id=item.part.id, quantity=item.quantity, price=item.part.price)
        for item in cart
    ]
    for item in cart:
        item.part.stock_quantity -= item.quantity

    db.add(order)
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Checkout failed for %s", order.customer_email)
        raise

    logger.info("Order %s placed: %d items, total %.2f", order.id, cart.item_count, order.total_amount)
    for item in cart:
        logger.debug("Part %s stock now %d", item.part.id, item.part.stock_quantity)
    return await _get_order(db, order.id)


@router.get("/mine", response_model=List[OrderSchema])
async def get_my_orders(
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    Orders placed with the signed-in customer's email, newest first.
    """
    result = await db.execute(
        select(Order)
        .where(Order.customer_email == customer.email.lower())
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    return result.scalars().all()


@router.get("/", response_model=List[OrderSchema])
async def get_orders(
    skip: int = 0,
    limit: int = 100,
    status_filter: Optional[OrderStatus] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    Get all orders with pagination and optional status filter.
    """
    query = select(Order).order_by(Order.created_at.desc(), Order.id.desc())

    if status_filter:
        query = query.where(Order.status == status_filter)

    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{order_id}", response_model=OrderSchema)
async def get_order(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    Get a specific order by ID.
    """
    return await _get_order(db, order_id)


@router.patch("/{order_id}/status", response_model=OrderSchema)
async def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    Move an order to a new status.
    """
    order = await _get_order(db, order_id)
    order.status = status_update.status

    await db.commit()
    return await _get_order(db, order.id)
