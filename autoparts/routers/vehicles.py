"""
Vehicle routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from autoparts.auth import get_current_customer
from autoparts.database import get_db
from autoparts.models.customer import Customer
from autoparts.models.document import Document
from autoparts.models.vehicle import Vehicle
from autoparts.schemas.vehicle import Vehicle as VehicleSchema, VehicleCreate, VehicleUpdate
from autoparts.services.storage import LocalStorage, get_storage
from autoparts.validators import validate_vehicle_year

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


async def get_owned_vehicle(db: AsyncSession, vehicle_id: int, customer: Customer) -> Vehicle:
    """Load one of the customer's vehicles or raise 404."""
    result = await db.execute(
        select(Vehicle).where(Vehicle.id == vehicle_id, Vehicle.customer_id == customer.id)
    )
    vehicle = result.scalar_one_or_none()

    if not vehicle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Vehicle not found"
        )

    return vehicle


async def _check_plate_free(db: AsyncSession, customer: Customer, plate: Optional[str], exclude_id: Optional[int] = None):
    if not plate:
        return
    query = select(Vehicle).where(Vehicle.customer_id == customer.id, Vehicle.license_plate == plate)
    if exclude_id is not None:
        query = query.where(Vehicle.id != exclude_id)
    result = await db.execute(query)
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="License plate already registered"
        )


@router.get("/", response_model=List[VehicleSchema])
async def get_vehicles(
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer)
):
    """
    Get the customer's vehicles, newest first.
    """
    result = await db.execute(
        select(Vehicle)
        .where(Vehicle.customer_id == customer.id)
        .order_by(Vehicle.created_at.desc(), Vehicle.id.desc())
    )
    return result.scalars().all()


@router.get("/{vehicle_id}", response_model=VehicleSchema)
async def get_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer)
):
    """
    Get a specific vehicle by ID.
    """
    return await get_owned_vehicle(db, vehicle_id, customer)


@router.post("/", response_model=VehicleSchema, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle: VehicleCreate,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer)
):
    """
    Register a new vehicle.
    """
    validate_vehicle_year(vehicle.year)
    await _check_plate_free(db, customer, vehicle.license_plate)

    db_vehicle = Vehicle(customer_id=customer.id, **vehicle.model_dump())
    db.add(db_vehicle)
    await db.commit()
    await db.refresh(db_vehicle)

    return db_vehicle


@router.put("/{vehicle_id}", response_model=VehicleSchema)
async def update_vehicle(
    vehicle_id: int,
    vehicle_update: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer)
):
    """
    Update a vehicle.
    """
    db_vehicle = await get_owned_vehicle(db, vehicle_id, customer)

    # Update only provided fields
    update_data = vehicle_update.model_dump(exclude_unset=True)
    for field in ("make", "model", "year"):
        if field in update_data and update_data[field] is None:
            del update_data[field]

    if "year" in update_data:
        validate_vehicle_year(update_data["year"])
    if "license_plate" in update_data:
        await _check_plate_free(db, customer, update_data["license_plate"], exclude_id=db_vehicle.id)

    for field, value in update_data.items():
        setattr(db_vehicle, field, value)

    await db.commit()
    await db.refresh(db_vehicle)

    return db_vehicle


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    customer: Customer = Depends(get_current_customer),
    storage: LocalStorage = Depends(get_storage),
):
    """
    Delete a vehicle along with its documents.
    """
    db_vehicle = await get_owned_vehicle(db, vehicle_id, customer)

    result = await db.execute(select(Document.file_path).where(Document.vehicle_id == db_vehicle.id))
    file_paths = result.scalars().all()

    await db.delete(db_vehicle)
    await db.commit()

    for file_path in file_paths:
        storage.delete(file_path)

    return None
