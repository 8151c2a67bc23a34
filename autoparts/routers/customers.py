"""
Customer profile routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autoparts.auth import get_current_customer
from autoparts.database import get_db
from autoparts.models.customer import Customer
from autoparts.schemas.customer import Customer as CustomerSchema, CustomerUpdate
from autoparts.validators import validate_phone

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/me", response_model=CustomerSchema)
async def get_my_profile(customer: Customer = Depends(get_current_customer)):
    """
    Get the signed-in customer's profile.
    """
    return customer


@router.put("/me", response_model=CustomerSchema)
async def update_my_profile(
    customer_update: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
):
    """
    Update the signed-in customer's profile.
    """
    update_data = customer_update.model_dump(exclude_unset=True)

    # Name and email are required on the profile
    for field in ("name", "email"):
        if field in update_data and not update_data[field]:
            del update_data[field]

    if "phone" in update_data:
        update_data["phone"] = validate_phone(update_data["phone"])

    if update_data.get("email"):
        update_data["email"] = str(update_data["email"]).lower()
        result = await db.execute(
            select(Customer).where(Customer.email == update_data["email"], Customer.id != customer.id)
        )
        if result.scalar_one_or_none():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered"
            )

    # Update only provided fields
    for field, value in update_data.items():
        setattr(customer, field, value)

    await db.commit()
    await db.refresh(customer)

    return customer
